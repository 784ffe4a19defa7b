# =====================================================
# FILE: app/api/api_v1/templates/templates.py
# Contract Template API Routes
# =====================================================

from fastapi import APIRouter, Depends, Query, status
from typing import List, Optional
import logging

from app.api.api_v1.templates.schemas import (
    TemplateCreateRequest,
    TemplateResponse,
    TemplateUpdateRequest,
)
from app.core.dependencies import get_template_service
from app.core.exceptions import TemplateNotFoundError
from app.core.permissions import Permission
from app.middleware.rbac_middleware import require_permission
from app.models.enums import ContractType
from app.models.user import User
from app.services.template_service import TemplateService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/templates", tags=["templates"])


@router.get("", response_model=List[TemplateResponse])
async def list_templates(
    active_only: bool = Query(False),
    contract_type: Optional[ContractType] = Query(None),
    position: Optional[str] = Query(None),
    current_user: User = Depends(require_permission(Permission.TEMPLATE_VIEW)),
    service: TemplateService = Depends(get_template_service)
):
    """All templates, or the active ones applicable to a contract type / position"""
    if contract_type or position:
        return service.templates_for(contract_type.value if contract_type else None, position)
    return service.list_templates(active_only=active_only)


@router.get("/{template_id}", response_model=TemplateResponse)
async def get_template(
    template_id: str,
    current_user: User = Depends(require_permission(Permission.TEMPLATE_VIEW)),
    service: TemplateService = Depends(get_template_service)
):
    template = service.get_template(template_id)
    if not template:
        raise TemplateNotFoundError(template_id)
    return template


@router.post("", response_model=TemplateResponse, status_code=status.HTTP_201_CREATED)
async def create_template(
    request: TemplateCreateRequest,
    current_user: User = Depends(require_permission(Permission.TEMPLATE_MANAGE)),
    service: TemplateService = Depends(get_template_service)
):
    return service.create_template(request.model_dump(mode="json"), actor_id=current_user.id)


@router.put("/{template_id}", response_model=TemplateResponse)
async def update_template(
    template_id: str,
    request: TemplateUpdateRequest,
    current_user: User = Depends(require_permission(Permission.TEMPLATE_MANAGE)),
    service: TemplateService = Depends(get_template_service)
):
    updates = request.model_dump(mode="json", exclude_unset=True)
    return service.update_template(template_id, updates, actor_id=current_user.id)


@router.delete("/{template_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_template(
    template_id: str,
    current_user: User = Depends(require_permission(Permission.TEMPLATE_MANAGE)),
    service: TemplateService = Depends(get_template_service)
):
    if not service.delete_template(template_id, actor_id=current_user.id):
        raise TemplateNotFoundError(template_id)
    logger.info(f"Template {template_id} deleted by {current_user.id}")
