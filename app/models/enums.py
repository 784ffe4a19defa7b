# =====================================================
# FILE: app/models/enums.py
# Closed value sets shared by models, services and schemas
# =====================================================

from enum import Enum


class UserRole(str, Enum):
    TEACHER = "teacher"
    DEPT_ADMIN = "dept_admin"
    HR_ADMIN = "hr_admin"


class ContractStatus(str, Enum):
    DRAFT = "draft"
    PENDING_DEPT = "pending_dept"
    PENDING_HR = "pending_hr"
    APPROVED = "approved"
    REJECTED = "rejected"
    ARCHIVED = "archived"
    TERMINATED = "terminated"


class ContractType(str, Enum):
    FULL_TIME = "full_time"
    PART_TIME = "part_time"
    TEMPORARY = "temporary"
    VISITING = "visiting"


class DepartmentApprovalStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class WorkflowAction(str, Enum):
    SUBMIT = "submit"
    APPROVE = "approve"
    REJECT = "reject"
    ARCHIVE = "archive"
    TERMINATE = "terminate"


class NotificationType(str, Enum):
    CONTRACT_EXPIRY = "contract_expiry"
    APPROVAL_REQUIRED = "approval_required"
    STATUS_CHANGED = "status_changed"
    SYSTEM = "system"


class TemplateFieldType(str, Enum):
    TEXT = "text"
    NUMBER = "number"
    DATE = "date"
    SELECT = "select"
    CHECKBOX = "checkbox"


PENDING_STATUSES = (ContractStatus.PENDING_DEPT, ContractStatus.PENDING_HR)
