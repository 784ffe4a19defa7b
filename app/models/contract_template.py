# =====================================================
# FILE: app/models/contract_template.py
# Contract Template Model
# =====================================================

from sqlalchemy import Column, String, Text, Boolean, DateTime, JSON
from datetime import datetime

from app.core.database import Base


class ContractTemplate(Base):
    __tablename__ = "contract_templates"

    id = Column(String(20), primary_key=True)
    name = Column(String(255), nullable=False)
    description = Column(Text)
    # List of field definitions: {id, name, label, type, required, options, default_value}
    fields = Column(JSON, default=list)
    file_url = Column(Text)
    applicable_positions = Column(JSON, default=list)
    applicable_contract_types = Column(JSON, default=list)
    version = Column(String(20), default="1.0")
    content = Column(Text)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow)

    def required_field_names(self):
        return [f["name"] for f in (self.fields or []) if f.get("required")]
