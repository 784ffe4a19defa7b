"""
Pending Approvals API Router
File: app/api/api_v1/approvals/pending_actions.py

Contracts waiting on the current user's decision
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from datetime import datetime
from typing import List, Optional
import logging

from app.api.api_v1.contracts.schemas import ContractResponse
from app.core.dependencies import get_contract_service
from app.core.permissions import Permission
from app.middleware.rbac_middleware import require_permission
from app.models.enums import ContractStatus, UserRole
from app.models.user import User
from app.services.contract_service import ContractService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/approvals", tags=["approvals"])

STAGE_BY_ROLE = {
    UserRole.DEPT_ADMIN.value: ContractStatus.PENDING_DEPT.value,
    UserRole.HR_ADMIN.value: ContractStatus.PENDING_HR.value,
}


class PendingApprovalItem(ContractResponse):
    teacher_name: Optional[str] = None
    department: Optional[str] = None
    waiting_since: Optional[datetime] = None


class PendingApprovalsResponse(BaseModel):
    total: int
    stage: Optional[str] = None
    items: List[PendingApprovalItem]


@router.get("/pending", response_model=PendingApprovalsResponse)
async def get_pending_approvals(
    current_user: User = Depends(require_permission(
        Permission.CONTRACT_APPROVE_DEPARTMENT, Permission.CONTRACT_APPROVE_HR
    )),
    service: ContractService = Depends(get_contract_service)
):
    """
    Department admins get contracts in pending_dept for their department,
    HR admins get every contract in pending_hr.
    """
    contracts = service.pending_for(current_user)

    items = []
    for contract in contracts:
        item = PendingApprovalItem.model_validate(contract)
        teacher = contract.teacher
        item.teacher_name = teacher.name if teacher else None
        item.department = teacher.department.name if teacher and teacher.department else None
        item.waiting_since = contract.updated_at
        items.append(item)

    logger.info(f"{len(items)} pending approval(s) for user {current_user.id}")
    return PendingApprovalsResponse(
        total=len(items),
        stage=STAGE_BY_ROLE.get(current_user.role),
        items=items
    )
