# =====================================================
# FILE: app/models/contract.py
# Teacher employment contracts and their attachments
# =====================================================

from sqlalchemy import Column, String, DateTime, Date, Integer, ForeignKey, Text, JSON
from sqlalchemy.orm import relationship
from datetime import datetime

from app.core.database import Base
from app.models.enums import ContractStatus


class Contract(Base):
    __tablename__ = "contracts"

    id = Column(String(20), primary_key=True)
    teacher_id = Column(String(20), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    template_id = Column(String(20), ForeignKey("contract_templates.id", ondelete="SET NULL"))
    title = Column(String(500), nullable=False)
    type = Column(String(50), nullable=False)
    status = Column(String(50), nullable=False, default=ContractStatus.DRAFT.value, index=True)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Final (HR) decision
    approved_at = Column(DateTime)
    approved_by = Column(String(20))
    rejected_at = Column(DateTime)
    rejected_by = Column(String(20))
    rejection_reason = Column(Text)

    # Department stage
    department_approval_status = Column(String(20))
    department_approved_at = Column(DateTime)
    department_approved_by = Column(String(20))
    department_rejection_reason = Column(Text)

    file_url = Column(Text)
    data = Column(JSON, default=dict)

    teacher = relationship("User", back_populates="contracts")
    template = relationship("ContractTemplate")
    attachments = relationship(
        "ContractAttachment",
        back_populates="contract",
        cascade="all, delete-orphan",
        order_by="ContractAttachment.uploaded_at"
    )


class ContractAttachment(Base):
    __tablename__ = "contract_attachments"

    id = Column(String(20), primary_key=True)
    contract_id = Column(String(20), ForeignKey("contracts.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    file_url = Column(Text, nullable=False)
    file_type = Column(String(100))
    file_size = Column(Integer, default=0)
    uploaded_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    uploaded_by = Column(String(20), ForeignKey("users.id"))

    contract = relationship("Contract", back_populates="attachments")
