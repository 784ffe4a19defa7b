# =====================================================
# FILE: app/core/permissions.py
# Role-Based Access Control Permission Definitions
# =====================================================

from enum import Enum
from typing import List, Dict, Set, Tuple

from app.models.enums import UserRole, WorkflowAction


class Permission(str, Enum):
    # Contract Permissions
    CONTRACT_CREATE = "contract.create"
    CONTRACT_VIEW = "contract.view"
    CONTRACT_SUBMIT = "contract.submit"
    CONTRACT_APPROVE_DEPARTMENT = "contract.approve_department"
    CONTRACT_APPROVE_HR = "contract.approve_hr"
    CONTRACT_ADMINISTER = "contract.administer"

    # Templates
    TEMPLATE_VIEW = "template.view"
    TEMPLATE_MANAGE = "template.manage"

    # User Management
    USER_VIEW = "user.view"
    USER_MANAGE = "user.manage"

    # Reports
    REPORT_VIEW = "report.view"
    REPORT_EXPIRY = "report.expiry"


# Role to Permissions Mapping
ROLE_PERMISSIONS: Dict[str, Set[Permission]] = {
    UserRole.HR_ADMIN.value: {
        Permission.CONTRACT_CREATE, Permission.CONTRACT_VIEW,
        Permission.CONTRACT_APPROVE_HR, Permission.CONTRACT_ADMINISTER,
        Permission.TEMPLATE_VIEW, Permission.TEMPLATE_MANAGE,
        Permission.USER_VIEW, Permission.USER_MANAGE,
        Permission.REPORT_VIEW, Permission.REPORT_EXPIRY,
    },

    UserRole.DEPT_ADMIN.value: {
        Permission.CONTRACT_CREATE, Permission.CONTRACT_VIEW,
        Permission.CONTRACT_APPROVE_DEPARTMENT,
        Permission.TEMPLATE_VIEW,
        Permission.USER_VIEW,
        Permission.REPORT_VIEW,
    },

    UserRole.TEACHER.value: {
        Permission.CONTRACT_CREATE, Permission.CONTRACT_VIEW,
        Permission.CONTRACT_SUBMIT,
        Permission.TEMPLATE_VIEW,
        Permission.REPORT_VIEW,
    },
}


# Workflow action to the permissions that may attempt it
ACTION_PERMISSIONS: Dict[WorkflowAction, Tuple[Permission, ...]] = {
    WorkflowAction.SUBMIT: (Permission.CONTRACT_SUBMIT,),
    WorkflowAction.APPROVE: (Permission.CONTRACT_APPROVE_DEPARTMENT, Permission.CONTRACT_APPROVE_HR),
    WorkflowAction.REJECT: (Permission.CONTRACT_APPROVE_DEPARTMENT, Permission.CONTRACT_APPROVE_HR),
    WorkflowAction.ARCHIVE: (Permission.CONTRACT_ADMINISTER,),
    WorkflowAction.TERMINATE: (Permission.CONTRACT_ADMINISTER,),
}


def get_permissions_for_role(role_name: str) -> Set[Permission]:
    """Get all permissions for a role"""
    return ROLE_PERMISSIONS.get(role_name, set())


def has_permission(user_roles: List[str], permission: Permission) -> bool:
    """Check if user has a specific permission based on their roles"""
    for role in user_roles:
        if permission in ROLE_PERMISSIONS.get(role, set()):
            return True
    return False


def get_all_permissions(user_roles: List[str]) -> Set[Permission]:
    """Get all permissions for a user based on their roles"""
    permissions = set()
    for role in user_roles:
        permissions.update(ROLE_PERMISSIONS.get(role, set()))
    return permissions
