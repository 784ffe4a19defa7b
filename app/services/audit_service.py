# =====================================================
# FILE: app/services/audit_service.py
# Service Layer for Audit Trail
# =====================================================

from sqlalchemy.orm import Session
from datetime import datetime
from typing import Optional, Dict, Any, List
import logging

from app.models.audit_log import AuditLog

logger = logging.getLogger(__name__)


class AuditService:
    """
    Records audit log entries inside the caller's transaction.

    Entries are flushed, not committed: the service that performs the
    audited change commits both together.
    """

    def __init__(self, db: Session):
        self.db = db

    def log_action(
        self,
        action: str,
        entity_type: str,
        entity_id: str,
        user_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ) -> AuditLog:
        """
        Create an audit log entry

        Returns:
            The pending AuditLog row
        """
        entry = AuditLog(
            entity_type=entity_type,
            entity_id=str(entity_id),
            action=action,
            user_id=user_id,
            details=details or {},
            created_at=datetime.utcnow()
        )
        self.db.add(entry)
        self.db.flush()

        logger.debug(f"Audit log: {entity_type}:{entity_id} {action} by user {user_id}")
        return entry

    def history(self, entity_type: str, entity_id: str) -> List[AuditLog]:
        """All entries for one entity, oldest first"""
        return self.db.query(AuditLog).filter(
            AuditLog.entity_type == entity_type,
            AuditLog.entity_id == str(entity_id)
        ).order_by(AuditLog.created_at, AuditLog.id).all()


# =====================================================
# CONVENIENCE FUNCTIONS FOR COMMON ACTIONS
# =====================================================

def log_contract_action(
    db: Session,
    action: str,
    contract_id: str,
    user_id: Optional[str],
    details: Optional[Dict[str, Any]] = None
) -> AuditLog:
    """Convenience function to log contract-related actions"""
    return AuditService(db).log_action(
        action=action,
        entity_type="contract",
        entity_id=contract_id,
        user_id=user_id,
        details=details
    )


def log_user_action(
    db: Session,
    action: str,
    user_id: str,
    actor_id: Optional[str] = None,
    details: Optional[Dict[str, Any]] = None
) -> AuditLog:
    """Convenience function to log user-related actions"""
    return AuditService(db).log_action(
        action=action,
        entity_type="user",
        entity_id=user_id,
        user_id=actor_id,
        details=details
    )


def log_template_action(
    db: Session,
    action: str,
    template_id: str,
    actor_id: Optional[str] = None,
    details: Optional[Dict[str, Any]] = None
) -> AuditLog:
    """Convenience function to log template-related actions"""
    return AuditService(db).log_action(
        action=action,
        entity_type="template",
        entity_id=template_id,
        user_id=actor_id,
        details=details
    )


def log_system_action(
    db: Session,
    action: str,
    details: Optional[Dict[str, Any]] = None
) -> AuditLog:
    """Convenience function to log system-level actions"""
    return AuditService(db).log_action(
        action=action,
        entity_type="system",
        entity_id="system",
        details=details
    )
