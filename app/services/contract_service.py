# =====================================================
# FILE: app/services/contract_service.py
# Contract Service - collection, visibility and status workflow
# =====================================================

from sqlalchemy.orm import Session
from sqlalchemy import or_
from typing import List, Optional, Dict, Any
from datetime import datetime
import logging

from app.core.exceptions import (
    ContractNotFoundError,
    ContractValidationError,
    TransitionNotPermittedError,
    UserNotFoundError,
)
from app.models.contract import Contract, ContractAttachment
from app.models.contract_template import ContractTemplate
from app.models.enums import ContractStatus, ContractType, UserRole, WorkflowAction
from app.models.user import User
from app.services.audit_service import log_contract_action
from app.services.notification_service import NotificationService
from app.services.template_service import TemplateService
from app.services.workflow_enforcement_service import WorkflowEnforcementService
from app.utils.datetime_helpers import parse_date
from app.utils.identifiers import next_identifier

logger = logging.getLogger(__name__)

REQUIRED_CONTRACT_FIELDS = ("teacher_id", "type", "start_date", "end_date")

DEFAULT_TITLES = {
    ContractType.FULL_TIME: "Full-time teaching contract",
    ContractType.PART_TIME: "Part-time teaching contract",
    ContractType.TEMPORARY: "Temporary teaching contract",
    ContractType.VISITING: "Visiting scholar contract",
}


class ContractService:
    """Contract business logic: creation, role-scoped lookups and status changes"""

    def __init__(self, db: Session):
        self.db = db

    # =====================================================
    # CREATE CONTRACT
    # =====================================================

    def create_contract(self, contract_data: Dict[str, Any], actor_id: Optional[str] = None) -> Contract:
        """
        Insert a new contract in `draft`.

        Only presence of the required fields is checked (plus the required
        fields of the chosen template). Any supplied status is ignored.
        """
        missing = [f for f in REQUIRED_CONTRACT_FIELDS if not contract_data.get(f)]
        if missing:
            raise ContractValidationError("Missing required contract fields", {"missing": missing})

        try:
            contract_type = ContractType(contract_data["type"])
            start_date = parse_date(contract_data["start_date"])
            end_date = parse_date(contract_data["end_date"])
        except ValueError as e:
            raise ContractValidationError("Invalid contract field value", {"error": str(e)})

        teacher = self.db.query(User).filter(User.id == contract_data["teacher_id"]).first()
        if not teacher:
            raise UserNotFoundError(contract_data["teacher_id"])

        data = dict(contract_data.get("data") or {})
        template_id = contract_data.get("template_id")
        if template_id:
            template = self.db.query(ContractTemplate).filter(ContractTemplate.id == template_id).first()
            if template:
                missing_fields = TemplateService.missing_required_fields(template, data)
                if missing_fields:
                    raise ContractValidationError(
                        "Missing required template fields",
                        {"template_id": template_id, "missing": missing_fields}
                    )

        now = datetime.utcnow()
        new_contract = Contract(
            id=next_identifier(self.db, Contract, "c"),
            teacher_id=teacher.id,
            template_id=template_id,
            title=contract_data.get("title") or DEFAULT_TITLES[contract_type],
            type=contract_type.value,
            status=ContractStatus.DRAFT.value,
            start_date=start_date,
            end_date=end_date,
            created_at=now,
            updated_at=now,
            file_url=contract_data.get("file_url"),
            data=data,
        )

        try:
            self.db.add(new_contract)
            self.db.flush()
            log_contract_action(
                self.db, "created", new_contract.id, actor_id or teacher.id,
                {"type": new_contract.type, "template_id": template_id}
            )
            self.db.commit()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to create contract: {str(e)}")
            raise

        logger.info(f"Contract {new_contract.id} created for teacher {teacher.id}")
        return new_contract

    # =====================================================
    # LOOKUPS
    # =====================================================

    def get_contract(self, contract_id: str) -> Optional[Contract]:
        return self.db.query(Contract).filter(Contract.id == contract_id).first()

    def list_contracts(self) -> List[Contract]:
        return self.db.query(Contract).order_by(Contract.created_at, Contract.id).all()

    def get_user_contracts(self, teacher_id: str) -> List[Contract]:
        return self.db.query(Contract).filter(
            Contract.teacher_id == teacher_id
        ).order_by(Contract.created_at, Contract.id).all()

    def get_department_contracts(self, department_id: str) -> List[Contract]:
        """Contracts whose teacher belongs to the department"""
        return self.db.query(Contract).join(
            User, Contract.teacher_id == User.id
        ).filter(
            User.department_id == department_id
        ).order_by(Contract.created_at, Contract.id).all()

    def get_contracts_by_status(self, status: str) -> List[Contract]:
        return self.db.query(Contract).filter(
            Contract.status == ContractStatus(status).value
        ).order_by(Contract.created_at, Contract.id).all()

    def get_visible_contracts(
        self,
        viewer: User,
        status: Optional[str] = None,
        search: Optional[str] = None
    ) -> List[Contract]:
        """
        Contracts the viewer may see: teachers their own, department admins
        those of teachers in their department, HR admins everything.
        """
        query = self._visible_query(viewer)
        if query is None:
            return []

        if status:
            query = query.filter(Contract.status == ContractStatus(status).value)

        if search:
            pattern = f"%{search}%"
            query = query.filter(
                or_(
                    Contract.title.ilike(pattern),
                    Contract.id.ilike(pattern),
                    Contract.teacher.has(User.name.ilike(pattern))
                )
            )

        return query.order_by(Contract.created_at, Contract.id).all()

    def get_visible_contract(self, viewer: User, contract_id: str) -> Optional[Contract]:
        query = self._visible_query(viewer)
        if query is None:
            return None
        return query.filter(Contract.id == contract_id).first()

    def can_create_for(self, creator: User, teacher_id: str) -> bool:
        """Teachers draft for themselves, department admins within their department"""
        role = UserRole(creator.role)
        if role == UserRole.HR_ADMIN:
            return True
        if role == UserRole.TEACHER:
            return teacher_id == creator.id
        teacher = self.db.query(User).filter(User.id == teacher_id).first()
        if teacher is None:
            # create_contract reports the unknown teacher
            return True
        return bool(creator.department_id) and teacher.department_id == creator.department_id

    def pending_for(self, viewer: User) -> List[Contract]:
        """Contracts waiting on a decision the viewer can make"""
        role = UserRole(viewer.role)
        if role == UserRole.DEPT_ADMIN:
            return self.get_visible_contracts(viewer, status=ContractStatus.PENDING_DEPT.value)
        if role == UserRole.HR_ADMIN:
            return self.get_visible_contracts(viewer, status=ContractStatus.PENDING_HR.value)
        return []

    def _visible_query(self, viewer: User):
        query = self.db.query(Contract)
        role = UserRole(viewer.role)
        if role == UserRole.TEACHER:
            return query.filter(Contract.teacher_id == viewer.id)
        if role == UserRole.DEPT_ADMIN:
            if not viewer.department_id:
                return None
            return query.join(User, Contract.teacher_id == User.id).filter(
                User.department_id == viewer.department_id
            )
        return query

    # =====================================================
    # STATUS WORKFLOW
    # =====================================================

    def update_contract_status(
        self,
        contract_id: str,
        new_status: str,
        actor_id: str,
        reason: Optional[str] = None
    ) -> Optional[Contract]:
        """
        Move a contract to `new_status` on behalf of `actor_id`.

        An unknown contract id is a silent no-op and returns None. The move
        must exist in the transition table and be allowed for the actor's
        role, otherwise IllegalTransitionError / TransitionNotPermittedError
        is raised and nothing changes.
        """
        contract = self.get_contract(contract_id)
        if not contract:
            logger.warning(f"Status update for unknown contract {contract_id} ignored")
            return None

        actor = self._get_actor(actor_id)
        action = WorkflowEnforcementService.validate_status_transition(
            contract.status, new_status, actor.role
        )
        self._check_actor_relation(contract, actor, new_status)
        return self._apply(contract, action, ContractStatus(new_status), actor, reason)

    def apply_action(
        self,
        contract_id: str,
        action: str,
        actor_id: str,
        reason: Optional[str] = None
    ) -> Contract:
        """Perform a named workflow action (submit, approve, reject, archive, terminate)"""
        contract = self.get_contract(contract_id)
        if not contract:
            raise ContractNotFoundError(contract_id)

        actor = self._get_actor(actor_id)
        workflow_action = WorkflowAction(action)
        new_status = WorkflowEnforcementService.next_status(contract.status, workflow_action, actor.role)
        self._check_actor_relation(contract, actor, new_status.value)
        return self._apply(contract, workflow_action, new_status, actor, reason)

    def available_actions(self, contract: Contract, actor: User) -> List[WorkflowAction]:
        """Actions the actor may perform on the contract right now"""
        if UserRole(actor.role) == UserRole.TEACHER and contract.teacher_id != actor.id:
            return []
        return WorkflowEnforcementService.available_actions(contract.status, actor.role)

    def _apply(
        self,
        contract: Contract,
        action: WorkflowAction,
        new_status: ContractStatus,
        actor: User,
        reason: Optional[str]
    ) -> Contract:
        previous_status = contract.status
        try:
            WorkflowEnforcementService.stamp_transition(
                contract, previous_status, new_status, actor.id, reason
            )
            log_contract_action(
                self.db, action.value, contract.id, actor.id,
                {"from": previous_status, "to": new_status.value, "reason": reason}
            )
            NotificationService(self.db).notify_transition(contract, action, reason)
            self.db.commit()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to {action.value} contract {contract.id}: {str(e)}")
            raise
        return contract

    def _get_actor(self, actor_id: str) -> User:
        actor = self.db.query(User).filter(User.id == actor_id).first()
        if not actor:
            raise UserNotFoundError(actor_id)
        return actor

    @staticmethod
    def _check_actor_relation(contract: Contract, actor: User, new_status: str) -> None:
        # Teachers can only submit their own contracts
        if UserRole(actor.role) == UserRole.TEACHER and contract.teacher_id != actor.id:
            raise TransitionNotPermittedError(contract.status, new_status, actor.role)

    # =====================================================
    # ATTACHMENTS
    # =====================================================

    def add_attachment(
        self,
        contract_id: str,
        attachment_data: Dict[str, Any],
        actor_id: str
    ) -> ContractAttachment:
        """Record attachment metadata; the file itself lives elsewhere"""
        contract = self.get_contract(contract_id)
        if not contract:
            raise ContractNotFoundError(contract_id)
        for field in ("name", "file_url"):
            if not attachment_data.get(field):
                raise ContractValidationError(f"{field} is required", {"field": field})

        now = datetime.utcnow()
        attachment = ContractAttachment(
            id=next_identifier(self.db, ContractAttachment, "a"),
            contract_id=contract.id,
            name=attachment_data["name"],
            file_url=attachment_data["file_url"],
            file_type=attachment_data.get("file_type"),
            file_size=attachment_data.get("file_size") or 0,
            uploaded_at=now,
            uploaded_by=actor_id,
        )
        self.db.add(attachment)
        contract.updated_at = now
        self.db.flush()
        log_contract_action(self.db, "attachment_added", contract.id, actor_id, {"attachment_id": attachment.id})
        self.db.commit()
        return attachment

    def list_attachments(self, contract_id: str) -> List[ContractAttachment]:
        return self.db.query(ContractAttachment).filter(
            ContractAttachment.contract_id == contract_id
        ).order_by(ContractAttachment.uploaded_at, ContractAttachment.id).all()
