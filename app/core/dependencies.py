# =====================================================
# FILE: app/core/dependencies.py
# Request-scoped dependencies: acting user and service objects
# =====================================================

from typing import Optional
import logging

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.exceptions import AuthenticationError
from app.models.user import User
from app.services.contract_service import ContractService
from app.services.notification_service import NotificationService
from app.services.report_service import ReportService
from app.services.template_service import TemplateService
from app.services.user_service import UserService

logger = logging.getLogger(__name__)


async def get_current_user(
    x_user_id: Optional[str] = Header(None, alias="X-User-Id"),
    db: Session = Depends(get_db)
) -> User:
    """
    Resolve the acting user from the X-User-Id header.

    There is no credential check: the header only says who is acting.
    """
    if not x_user_id:
        raise AuthenticationError("X-User-Id header is required")

    user = db.query(User).filter(User.id == x_user_id).first()
    if not user:
        logger.warning(f"Request with unknown user id {x_user_id}")
        raise AuthenticationError("Unknown user", {"user_id": x_user_id})
    return user


def get_contract_service(db: Session = Depends(get_db)) -> ContractService:
    return ContractService(db)


def get_user_service(db: Session = Depends(get_db)) -> UserService:
    return UserService(db)


def get_template_service(db: Session = Depends(get_db)) -> TemplateService:
    return TemplateService(db)


def get_notification_service(db: Session = Depends(get_db)) -> NotificationService:
    return NotificationService(db)


def get_report_service(db: Session = Depends(get_db)) -> ReportService:
    return ReportService(db)
