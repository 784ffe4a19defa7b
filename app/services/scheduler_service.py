# =====================================================
# FILE: app/services/scheduler_service.py
# Background Job Scheduler for contract expiry reminders
# =====================================================

import asyncio
from datetime import datetime
from typing import Callable, List
import logging

from app.core.config import settings
from app.core.database import get_db_session
from app.services.report_service import ReportService

logger = logging.getLogger(__name__)


class SchedulerService:
    """Background job scheduler"""

    def __init__(self, tick_seconds: int = 60):
        self.jobs: List[dict] = []
        self.running = False
        self.tick_seconds = tick_seconds

    def add_job(self, name: str, func: Callable, interval_minutes: int):
        """Add a scheduled job; a name already registered is left as is"""
        if any(job["name"] == name for job in self.jobs):
            logger.info(f"Job '{name}' already scheduled")
            return
        self.jobs.append({
            "name": name,
            "func": func,
            "interval": interval_minutes,
            "last_run": None
        })
        logger.info(f"Scheduled job '{name}' every {interval_minutes} minutes")

    async def run_due_jobs(self, now: datetime = None):
        """Run every job whose interval has elapsed"""
        now = now or datetime.utcnow()
        for job in self.jobs:
            should_run = (
                job["last_run"] is None or
                (now - job["last_run"]).total_seconds() >= job["interval"] * 60
            )
            if not should_run:
                continue
            try:
                logger.info(f"Running job: {job['name']}")
                if asyncio.iscoroutinefunction(job["func"]):
                    await job["func"]()
                else:
                    job["func"]()
                logger.info(f"Job completed: {job['name']}")
            except Exception as e:
                logger.error(f"Job failed: {job['name']} - {e}")
            finally:
                job["last_run"] = now

    async def start(self):
        """Start the scheduler loop"""
        self.running = True
        logger.info("Background scheduler started")
        while self.running:
            await self.run_due_jobs()
            await asyncio.sleep(self.tick_seconds)

    def stop(self):
        """Stop the scheduler"""
        self.running = False
        logger.info("Scheduler stopped")


# =====================================================
# SCHEDULED JOB FUNCTIONS
# =====================================================

def check_contract_expiry():
    """Remind teachers whose approved contracts are about to end"""
    with get_db_session() as db:
        sent = ReportService(db).send_expiry_reminders(viewer=None)
    logger.info(f"Contract expiry check complete. {len(sent)} reminder(s) sent.")


# =====================================================
# SCHEDULER INITIALIZATION
# =====================================================

scheduler = SchedulerService()


def setup_scheduler() -> bool:
    """Configure scheduled jobs; returns False when reminders are disabled"""
    if settings.EXPIRY_REMINDER_INTERVAL_MINUTES <= 0:
        return False
    scheduler.add_job("Contract Expiry Check", check_contract_expiry, settings.EXPIRY_REMINDER_INTERVAL_MINUTES)
    return True
