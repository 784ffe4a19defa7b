# =====================================================
# FILE: app/middleware/rbac_middleware.py
# Role-Based Access Control dependencies
# =====================================================

from typing import List
import logging

from fastapi import Depends

from app.core.dependencies import get_current_user
from app.core.exceptions import PermissionDeniedError
from app.core.permissions import ACTION_PERMISSIONS, Permission, has_permission
from app.models.enums import WorkflowAction
from app.models.user import User

logger = logging.getLogger(__name__)


def get_user_roles(user: User) -> List[str]:
    """Each user carries exactly one role"""
    return [user.role] if user.role else []


def require_permission(*permissions: Permission):
    """
    Dependency factory requiring any one of the given permissions

    Usage:
        current_user: User = Depends(require_permission(Permission.TEMPLATE_MANAGE))
    """
    async def check_permission(current_user: User = Depends(get_current_user)) -> User:
        user_roles = get_user_roles(current_user)
        if not any(has_permission(user_roles, perm) for perm in permissions):
            logger.warning(
                f"Access denied for user {current_user.id} ({current_user.role}). "
                f"Required: {[p.value for p in permissions]}"
            )
            raise PermissionDeniedError(
                "Permission denied",
                {"required": [p.value for p in permissions]}
            )
        return current_user

    return check_permission



def check_action_permission(user: User, action: WorkflowAction) -> None:
    """Raise PermissionDeniedError unless the user holds a permission for the workflow action"""
    permissions = ACTION_PERMISSIONS[action]
    if not any(has_permission(get_user_roles(user), perm) for perm in permissions):
        logger.warning(f"User {user.id} ({user.role}) may not {action.value} contracts")
        raise PermissionDeniedError(
            "Permission denied",
            {"action": action.value, "required": [p.value for p in permissions]}
        )
