# =====================================================
# FILE: app/api/api_v1/contracts/contracts.py
# Contract API Routes
# =====================================================

from fastapi import APIRouter, Depends, Query, status
from typing import List, Optional
import logging

from app.api.api_v1.contracts.schemas import (
    AttachmentCreateRequest,
    AttachmentResponse,
    ContractActionRequest,
    ContractCreateRequest,
    ContractDetailResponse,
    ContractListResponse,
    ContractResponse,
    ContractStatusUpdateRequest,
)
from app.core.dependencies import get_contract_service, get_current_user
from app.core.exceptions import ContractNotFoundError, PermissionDeniedError
from app.core.permissions import Permission
from app.middleware.rbac_middleware import check_action_permission, require_permission
from app.models.contract import Contract
from app.models.enums import ContractStatus, WorkflowAction
from app.models.user import User
from app.services.contract_service import ContractService
from app.services.workflow_enforcement_service import WorkflowEnforcementService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/contracts", tags=["contracts"])


def build_detail(contract: Contract, viewer: User, service: ContractService) -> ContractDetailResponse:
    detail = ContractDetailResponse.model_validate(contract)
    detail.teacher_name = contract.teacher.name if contract.teacher else None
    detail.template_name = contract.template.name if contract.template else None
    detail.available_actions = service.available_actions(contract, viewer)
    return detail


def get_visible_contract_or_404(
    contract_id: str,
    viewer: User,
    service: ContractService
) -> Contract:
    """Contracts outside the viewer's scope are reported as missing"""
    contract = service.get_visible_contract(viewer, contract_id)
    if not contract:
        raise ContractNotFoundError(contract_id)
    return contract


# =====================================================
# API Endpoints
# =====================================================

@router.get("", response_model=ContractListResponse)
async def list_contracts(
    status_filter: Optional[ContractStatus] = Query(None, alias="status"),
    search: Optional[str] = Query(None, max_length=200),
    current_user: User = Depends(require_permission(Permission.CONTRACT_VIEW)),
    service: ContractService = Depends(get_contract_service)
):
    """Contracts visible to the current user"""
    contracts = service.get_visible_contracts(
        current_user,
        status=status_filter.value if status_filter else None,
        search=search
    )
    return ContractListResponse(
        total=len(contracts),
        items=[ContractResponse.model_validate(c) for c in contracts]
    )


@router.post("", response_model=ContractDetailResponse, status_code=status.HTTP_201_CREATED)
async def create_contract(
    request: ContractCreateRequest,
    current_user: User = Depends(require_permission(Permission.CONTRACT_CREATE)),
    service: ContractService = Depends(get_contract_service)
):
    """Create a draft contract"""
    contract_data = request.model_dump()
    contract_data["teacher_id"] = request.teacher_id or current_user.id

    if not service.can_create_for(current_user, contract_data["teacher_id"]):
        raise PermissionDeniedError(
            "Cannot create contracts for this teacher",
            {"teacher_id": contract_data["teacher_id"]}
        )

    contract = service.create_contract(contract_data, actor_id=current_user.id)
    return build_detail(contract, current_user, service)


@router.get("/{contract_id}", response_model=ContractDetailResponse)
async def get_contract(
    contract_id: str,
    current_user: User = Depends(get_current_user),
    service: ContractService = Depends(get_contract_service)
):
    contract = get_visible_contract_or_404(contract_id, current_user, service)
    return build_detail(contract, current_user, service)


@router.put("/{contract_id}/status", response_model=ContractDetailResponse)
async def update_contract_status(
    contract_id: str,
    request: ContractStatusUpdateRequest,
    current_user: User = Depends(get_current_user),
    service: ContractService = Depends(get_contract_service)
):
    """Move a contract to a new status; only legal, role-permitted moves succeed"""
    current = get_visible_contract_or_404(contract_id, current_user, service)
    action = WorkflowEnforcementService.resolve_action(current.status, request.status.value)
    if action is not None:
        check_action_permission(current_user, action)
    contract = service.update_contract_status(
        contract_id, request.status.value, current_user.id, request.reason
    )
    return build_detail(contract, current_user, service)


@router.post("/{contract_id}/actions/{action}", response_model=ContractDetailResponse)
async def perform_contract_action(
    contract_id: str,
    action: WorkflowAction,
    request: Optional[ContractActionRequest] = None,
    current_user: User = Depends(get_current_user),
    service: ContractService = Depends(get_contract_service)
):
    """Submit, approve, reject, archive or terminate a contract"""
    get_visible_contract_or_404(contract_id, current_user, service)
    check_action_permission(current_user, action)
    contract = service.apply_action(
        contract_id, action.value, current_user.id, request.reason if request else None
    )
    return build_detail(contract, current_user, service)


# =====================================================
# ATTACHMENTS
# =====================================================

@router.get("/{contract_id}/attachments", response_model=List[AttachmentResponse])
async def list_attachments(
    contract_id: str,
    current_user: User = Depends(get_current_user),
    service: ContractService = Depends(get_contract_service)
):
    get_visible_contract_or_404(contract_id, current_user, service)
    return service.list_attachments(contract_id)


@router.post("/{contract_id}/attachments", response_model=AttachmentResponse, status_code=status.HTTP_201_CREATED)
async def add_attachment(
    contract_id: str,
    request: AttachmentCreateRequest,
    current_user: User = Depends(get_current_user),
    service: ContractService = Depends(get_contract_service)
):
    """Attach file metadata to a contract"""
    get_visible_contract_or_404(contract_id, current_user, service)
    return service.add_attachment(contract_id, request.model_dump(), current_user.id)
