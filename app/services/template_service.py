# =====================================================
# FILE: app/services/template_service.py
# Contract template registry
# =====================================================

from sqlalchemy.orm import Session
from datetime import datetime
from typing import Any, Dict, List, Optional
import logging

from app.core.exceptions import TemplateNotFoundError, TemplateValidationError
from app.models.contract import Contract
from app.models.contract_template import ContractTemplate
from app.models.enums import ContractType, TemplateFieldType
from app.services.audit_service import log_template_action
from app.utils.identifiers import next_identifier

logger = logging.getLogger(__name__)

EDITABLE_TEMPLATE_FIELDS = (
    "name", "description", "fields", "file_url", "applicable_positions",
    "applicable_contract_types", "version", "content", "is_active",
)


class TemplateService:
    """Contract templates and their field schemas"""

    def __init__(self, db: Session):
        self.db = db

    def get_template(self, template_id: str) -> Optional[ContractTemplate]:
        return self.db.query(ContractTemplate).filter(ContractTemplate.id == template_id).first()

    def list_templates(self, active_only: bool = False) -> List[ContractTemplate]:
        query = self.db.query(ContractTemplate)
        if active_only:
            query = query.filter(ContractTemplate.is_active == True)  # noqa: E712
        return query.order_by(ContractTemplate.id).all()

    def templates_for(self, contract_type: Optional[str] = None, position: Optional[str] = None) -> List[ContractTemplate]:
        """Active templates applicable to a contract type and/or position"""
        matches = []
        for template in self.list_templates(active_only=True):
            if contract_type and template.applicable_contract_types and \
                    ContractType(contract_type).value not in template.applicable_contract_types:
                continue
            if position and template.applicable_positions and position not in template.applicable_positions:
                continue
            matches.append(template)
        return matches

    def create_template(self, template_data: Dict[str, Any], actor_id: Optional[str] = None) -> ContractTemplate:
        if not template_data.get("name"):
            raise TemplateValidationError("name is required", {"field": "name"})

        now = datetime.utcnow()
        template = ContractTemplate(
            id=next_identifier(self.db, ContractTemplate, "t"),
            name=template_data["name"],
            description=template_data.get("description"),
            fields=self.normalize_fields(template_data.get("fields") or []),
            file_url=template_data.get("file_url"),
            applicable_positions=list(template_data.get("applicable_positions") or []),
            applicable_contract_types=self._normalize_types(template_data.get("applicable_contract_types") or []),
            version=template_data.get("version") or "1.0",
            content=template_data.get("content"),
            is_active=template_data.get("is_active", True),
            created_at=now,
            updated_at=now,
        )
        try:
            self.db.add(template)
            self.db.flush()
            log_template_action(self.db, "created", template.id, actor_id)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(f"Template {template.id} created: {template.name}")
        return template

    def update_template(self, template_id: str, updates: Dict[str, Any], actor_id: Optional[str] = None) -> ContractTemplate:
        template = self.get_template(template_id)
        if not template:
            raise TemplateNotFoundError(template_id)

        changes = {k: v for k, v in updates.items() if k in EDITABLE_TEMPLATE_FIELDS}
        if "name" in changes and not changes["name"]:
            raise TemplateValidationError("name cannot be empty", {"field": "name"})
        if "fields" in changes:
            changes["fields"] = self.normalize_fields(changes["fields"] or [])
        if "applicable_contract_types" in changes:
            changes["applicable_contract_types"] = self._normalize_types(changes["applicable_contract_types"] or [])

        for field, value in changes.items():
            setattr(template, field, value)
        template.updated_at = datetime.utcnow()

        log_template_action(self.db, "updated", template.id, actor_id, {"fields": sorted(changes)})
        self.db.commit()
        return template

    def delete_template(self, template_id: str, actor_id: Optional[str] = None) -> bool:
        """Delete a template; False when it does not exist"""
        template = self.get_template(template_id)
        if not template:
            return False
        # Detach contracts so a later template cannot inherit the freed id
        detached = self.db.query(Contract).filter(
            Contract.template_id == template_id
        ).update({Contract.template_id: None}, synchronize_session="fetch")
        self.db.delete(template)
        log_template_action(self.db, "deleted", template_id, actor_id, {"detached_contracts": detached})
        self.db.commit()
        logger.info(f"Template {template_id} deleted")
        return True

    # =====================================================
    # FIELD SCHEMA
    # =====================================================

    @staticmethod
    def normalize_fields(fields: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """Validate field definitions and fill in ids and defaults"""
        normalized = []
        seen_names = set()
        for index, field in enumerate(fields, start=1):
            name = field.get("name")
            if not name:
                raise TemplateValidationError("Template field name is required", {"position": index})
            if name in seen_names:
                raise TemplateValidationError("Duplicate template field name", {"name": name})
            seen_names.add(name)

            try:
                field_type = TemplateFieldType(field.get("type", TemplateFieldType.TEXT.value))
            except ValueError:
                raise TemplateValidationError("Unknown template field type", {"name": name, "type": field.get("type")})

            options = list(field.get("options") or [])
            if field_type == TemplateFieldType.SELECT and not options:
                raise TemplateValidationError("Select fields need options", {"name": name})

            normalized.append({
                "id": field.get("id") or f"f{index}",
                "name": name,
                "label": field.get("label") or name,
                "type": field_type.value,
                "required": bool(field.get("required", False)),
                "options": options or None,
                "default_value": field.get("default_value"),
            })
        return normalized

    @staticmethod
    def missing_required_fields(template: ContractTemplate, data: Dict[str, Any]) -> List[str]:
        """Names of required template fields absent (or blank) in a contract's data"""
        return [
            name for name in template.required_field_names()
            if data.get(name) is None or data.get(name) == ""
        ]

    @staticmethod
    def _normalize_types(types: List[str]) -> List[str]:
        try:
            return [ContractType(t).value for t in types]
        except ValueError as e:
            raise TemplateValidationError("Unknown contract type", {"error": str(e)})
