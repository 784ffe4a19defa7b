"""
Main FastAPI application entry point
"""
import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.api_v1 import approvals
from app.api.api_v1.auth import auth
from app.api.api_v1.contracts import contracts
from app.api.api_v1.notifications import notifications
from app.api.api_v1.reports import reports
from app.api.api_v1.templates import templates
from app.api.api_v1.users import user_management
from app.core.config import settings
from app.core.database import check_connection, get_db_session, init_db
from app.core.exception_handlers import register_exception_handlers
from app.core.seed import seed_demo_data
from app.services.scheduler_service import scheduler, setup_scheduler

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan events for FastAPI app"""
    # Startup
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}...")
    init_db()
    if settings.SEED_DEMO_DATA:
        with get_db_session() as db:
            seed_demo_data(db)

    scheduler_task = None
    if setup_scheduler():
        scheduler_task = asyncio.create_task(scheduler.start())

    yield

    # Shutdown
    logger.info(f"Shutting down {settings.APP_NAME}...")
    if scheduler_task:
        scheduler.stop()
        scheduler_task.cancel()


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.APP_NAME,
        description="Faculty employment contract management",
        version=settings.APP_VERSION,
        debug=settings.DEBUG,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(auth.router)
    app.include_router(contracts.router)
    app.include_router(approvals.router)
    app.include_router(templates.router)
    app.include_router(notifications.router)
    app.include_router(user_management.router)
    app.include_router(reports.router)

    @app.get("/health", tags=["health"])
    async def health():
        return {
            "status": "ok",
            "app": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "database": "connected" if check_connection() else "unavailable",
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=8000, reload=settings.DEBUG)
