# =====================================================
# FILE: app/models/audit_log.py
# Audit Log Model for tracking all system actions
# =====================================================

from sqlalchemy import Column, String, Integer, DateTime, JSON
from datetime import datetime

from app.core.database import Base


class AuditLog(Base):
    __tablename__ = "audit_logs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    entity_type = Column(String(50), nullable=False)  # contract, user, template, system
    entity_id = Column(String(100), nullable=False, index=True)
    action = Column(String(50), nullable=False)  # created, submit, approve, etc.
    user_id = Column(String(20))
    details = Column(JSON)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
