# =====================================================
# FILE: app/api/api_v1/reports/reports.py
# Dashboard, summary and contract expiry reports
# =====================================================

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel
from datetime import date
from typing import Any, Dict, List, Literal, Optional
import logging

from app.core.dependencies import get_current_user, get_report_service
from app.core.permissions import Permission
from app.middleware.rbac_middleware import require_permission
from app.models.user import User
from app.services.report_service import ReportService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/reports", tags=["reports"])


class ExpiringContractItem(BaseModel):
    contract_id: str
    title: str
    teacher_id: str
    teacher_name: str
    department_id: Optional[str] = None
    department: str
    end_date: date
    days_remaining: int


class ExpiringContractsResponse(BaseModel):
    within_days: int
    total: int
    items: List[ExpiringContractItem]


class ReminderResponse(BaseModel):
    sent: int
    notification_ids: List[str]


@router.get("/dashboard")
async def get_dashboard(
    current_user: User = Depends(get_current_user),
    service: ReportService = Depends(get_report_service)
) -> Dict[str, Any]:
    """Role-specific headline numbers"""
    return service.dashboard(current_user)


@router.get("/summary")
async def get_summary(
    current_user: User = Depends(require_permission(Permission.REPORT_VIEW)),
    service: ReportService = Depends(get_report_service)
) -> Dict[str, Any]:
    return service.summary(current_user)


@router.get("/expiring", response_model=ExpiringContractsResponse)
async def get_expiring_contracts(
    within_days: Optional[int] = Query(None, ge=1, le=3650),
    department_id: Optional[str] = Query(None),
    sort_by: Literal["days_remaining", "teacher_name", "department"] = Query("days_remaining"),
    order: Literal["asc", "desc"] = Query("asc"),
    current_user: User = Depends(require_permission(Permission.REPORT_VIEW)),
    service: ReportService = Depends(get_report_service)
):
    """Approved contracts ending soon, within the viewer's scope"""
    window = within_days or service.expiry_warning_days
    rows = service.expiring_contracts(
        current_user,
        within_days=window,
        department_id=department_id,
        sort_by=sort_by,
        order=order
    )
    return ExpiringContractsResponse(
        within_days=window,
        total=len(rows),
        items=[ExpiringContractItem(**{k: v for k, v in row.items() if k != "contract"}) for row in rows]
    )


@router.post("/expiring/remind", response_model=ReminderResponse)
async def send_expiry_reminders(
    within_days: Optional[int] = Query(None, ge=1, le=3650),
    current_user: User = Depends(require_permission(Permission.REPORT_EXPIRY)),
    service: ReportService = Depends(get_report_service)
):
    """Notify teachers whose contracts are about to end"""
    sent = service.send_expiry_reminders(current_user, within_days=within_days)
    logger.info(f"User {current_user.id} sent {len(sent)} expiry reminder(s)")
    return ReminderResponse(sent=len(sent), notification_ids=[n.id for n in sent])
