# =====================================================
# FILE: app/models/__init__.py
# =====================================================

from app.core.database import Base

from app.models.user import User, Department
from app.models.contract import Contract, ContractAttachment
from app.models.contract_template import ContractTemplate
from app.models.notification import Notification
from app.models.audit_log import AuditLog

__all__ = [
    "Base",
    "User",
    "Department",
    "Contract",
    "ContractAttachment",
    "ContractTemplate",
    "Notification",
    "AuditLog",
]
