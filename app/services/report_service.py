# =====================================================
# FILE: app/services/report_service.py
# Dashboards, breakdowns and expiry tracking
# =====================================================

from sqlalchemy.orm import Session
from collections import Counter
from datetime import datetime
from typing import Any, Dict, List, Optional
import logging

from app.core.config import settings
from app.models.contract import Contract
from app.models.enums import PENDING_STATUSES, ContractStatus, ContractType, NotificationType, UserRole
from app.models.notification import Notification
from app.models.user import Department, User
from app.services.audit_service import log_system_action
from app.services.contract_service import ContractService
from app.services.notification_service import NotificationService, NotificationTemplates
from app.utils.datetime_helpers import days_until, format_datetime_to_iso

logger = logging.getLogger(__name__)

EXPIRY_SORT_FIELDS = ("days_remaining", "teacher_name", "department")


class ReportService:
    """Read-only aggregates over the contracts a viewer can see"""

    def __init__(self, db: Session, expiry_warning_days: Optional[int] = None):
        self.db = db
        self.contracts = ContractService(db)
        self.expiry_warning_days = expiry_warning_days or settings.EXPIRY_WARNING_DAYS

    # =====================================================
    # DASHBOARD
    # =====================================================

    def dashboard(self, viewer: User, now: Optional[datetime] = None) -> Dict[str, Any]:
        """Headline counts for the viewer's role"""
        role = UserRole(viewer.role)
        visible = self.contracts.get_visible_contracts(viewer)
        by_status = Counter(c.status for c in visible)
        unread = NotificationService(self.db).unread_count(viewer.id)

        if role == UserRole.TEACHER:
            stats = {
                "active_contracts": by_status[ContractStatus.APPROVED.value],
                "pending_contracts": sum(by_status[s.value] for s in PENDING_STATUSES),
                "draft_contracts": by_status[ContractStatus.DRAFT.value],
            }
        elif role == UserRole.DEPT_ADMIN:
            stats = {
                "pending_approvals": by_status[ContractStatus.PENDING_DEPT.value],
                # Department has signed off on both of these
                "approved_contracts": by_status[ContractStatus.APPROVED.value] + by_status[ContractStatus.PENDING_HR.value],
                "rejected_contracts": by_status[ContractStatus.REJECTED.value],
            }
        else:
            stats = {
                "pending_hr_approvals": by_status[ContractStatus.PENDING_HR.value],
                "pending_department_approvals": by_status[ContractStatus.PENDING_DEPT.value],
                "approved_contracts": by_status[ContractStatus.APPROVED.value],
                "expiring_soon": len(self.expiring_contracts(viewer, self.expiry_warning_days, now=now)),
            }

        return {
            "role": role.value,
            "total_contracts": len(visible),
            "unread_notifications": unread,
            "stats": stats,
        }

    # =====================================================
    # SUMMARY REPORT
    # =====================================================

    def summary(self, viewer: User) -> Dict[str, Any]:
        """Counts by status, type and department"""
        visible = self.contracts.get_visible_contracts(viewer)
        departments = {d.id: d.name for d in self.db.query(Department).all()}

        by_status = Counter(c.status for c in visible)
        by_type = Counter(c.type for c in visible)
        by_department = Counter(
            departments.get(c.teacher.department_id, "Unassigned") if c.teacher and c.teacher.department_id else "Unassigned"
            for c in visible
        )

        return {
            "total_contracts": len(visible),
            "status_breakdown": [{"status": s.value, "count": by_status[s.value]} for s in ContractStatus],
            "type_breakdown": [{"type": t.value, "count": by_type[t.value]} for t in ContractType],
            "department_breakdown": [
                {"department": name, "count": count}
                for name, count in sorted(by_department.items())
            ],
            "calculated_at": format_datetime_to_iso(datetime.utcnow()),
        }

    # =====================================================
    # EXPIRY TRACKING
    # =====================================================

    def expiring_contracts(
        self,
        viewer: Optional[User],
        within_days: Optional[int] = None,
        department_id: Optional[str] = None,
        sort_by: str = "days_remaining",
        order: str = "asc",
        now: Optional[datetime] = None
    ) -> List[Dict[str, Any]]:
        """
        Approved contracts ending within `within_days` (and not already ended),
        with days remaining rounded up. A None viewer means every contract.
        """
        within_days = within_days or self.expiry_warning_days
        if sort_by not in EXPIRY_SORT_FIELDS:
            sort_by = "days_remaining"
        departments = {d.id: d for d in self.db.query(Department).all()}

        if viewer is None:
            approved = self.contracts.get_contracts_by_status(ContractStatus.APPROVED.value)
        else:
            approved = self.contracts.get_visible_contracts(viewer, status=ContractStatus.APPROVED.value)

        rows = []
        for contract in approved:
            remaining = days_until(contract.end_date, now)
            if remaining <= 0 or remaining > within_days:
                continue
            teacher = contract.teacher
            if department_id and (not teacher or teacher.department_id != department_id):
                continue
            department = departments.get(teacher.department_id) if teacher else None
            rows.append({
                "contract": contract,
                "contract_id": contract.id,
                "title": contract.title,
                "teacher_id": contract.teacher_id,
                "teacher_name": teacher.name if teacher else "",
                "department_id": department.id if department else None,
                "department": department.name if department else "",
                "end_date": contract.end_date,
                "days_remaining": remaining,
            })

        rows.sort(key=lambda row: (row[sort_by], row["contract_id"]), reverse=(order == "desc"))
        return rows

    def send_expiry_reminders(self, viewer: Optional[User] = None, within_days: Optional[int] = None, now: Optional[datetime] = None) -> List[Notification]:
        """
        Notify each teacher whose contract is expiring. A teacher who still
        has an unread reminder for the same contract is skipped.
        """
        notifications = NotificationService(self.db)
        sent = []
        for row in self.expiring_contracts(viewer, within_days, now=now):
            contract: Contract = row["contract"]
            payload = NotificationTemplates.contract_expiring(contract, row["days_remaining"])
            already_reminded = self.db.query(Notification).filter(
                Notification.user_id == contract.teacher_id,
                Notification.type == NotificationType.CONTRACT_EXPIRY.value,
                Notification.link == payload["link"],
                Notification.is_read == False  # noqa: E712
            ).first()
            if already_reminded:
                continue
            sent.append(notifications.add_notification(
                contract.teacher_id,
                payload["title"],
                payload["message"],
                payload["type"],
                payload["link"],
                commit=False
            ))
        if sent:
            log_system_action(self.db, "expiry_reminders_sent", {"notification_ids": [n.id for n in sent]})
        self.db.commit()
        logger.info(f"Sent {len(sent)} contract expiry reminder(s)")
        return sent
