# =====================================================
# FILE: app/services/workflow_enforcement_service.py
# Contract approval workflow: transition table and stamping
# =====================================================

from datetime import datetime
from typing import Dict, FrozenSet, List, NamedTuple, Optional, Tuple
import logging

from app.core.exceptions import IllegalTransitionError, TransitionNotPermittedError
from app.models.contract import Contract
from app.models.enums import (
    ContractStatus,
    DepartmentApprovalStatus,
    UserRole,
    WorkflowAction,
)

logger = logging.getLogger(__name__)


class Transition(NamedTuple):
    next_status: ContractStatus
    roles: FrozenSet[UserRole]


class WorkflowEnforcementService:
    """
    Enforces the contract approval sequence:

        draft -> pending_dept -> pending_hr -> approved -> archived | terminated
                      |               |
                      +-> rejected <--+

    Every transition is explicit and actor-invoked. The table is keyed by
    (current status, action); each entry names the resulting status and the
    roles allowed to perform it.
    """

    STATUS_TRANSITIONS: Dict[Tuple[ContractStatus, WorkflowAction], Transition] = {
        (ContractStatus.DRAFT, WorkflowAction.SUBMIT):
            Transition(ContractStatus.PENDING_DEPT, frozenset({UserRole.TEACHER})),
        (ContractStatus.PENDING_DEPT, WorkflowAction.APPROVE):
            Transition(ContractStatus.PENDING_HR, frozenset({UserRole.DEPT_ADMIN})),
        (ContractStatus.PENDING_DEPT, WorkflowAction.REJECT):
            Transition(ContractStatus.REJECTED, frozenset({UserRole.DEPT_ADMIN})),
        (ContractStatus.PENDING_HR, WorkflowAction.APPROVE):
            Transition(ContractStatus.APPROVED, frozenset({UserRole.HR_ADMIN})),
        (ContractStatus.PENDING_HR, WorkflowAction.REJECT):
            Transition(ContractStatus.REJECTED, frozenset({UserRole.HR_ADMIN})),
        (ContractStatus.APPROVED, WorkflowAction.ARCHIVE):
            Transition(ContractStatus.ARCHIVED, frozenset({UserRole.HR_ADMIN})),
        (ContractStatus.APPROVED, WorkflowAction.TERMINATE):
            Transition(ContractStatus.TERMINATED, frozenset({UserRole.HR_ADMIN})),
    }

    TERMINAL_STATUSES = frozenset({
        ContractStatus.REJECTED,
        ContractStatus.ARCHIVED,
        ContractStatus.TERMINATED,
    })

    @staticmethod
    def is_terminal(status: str) -> bool:
        return ContractStatus(status) in WorkflowEnforcementService.TERMINAL_STATUSES

    @staticmethod
    def resolve_action(current_status: str, new_status: str) -> Optional[WorkflowAction]:
        """Find the action that moves current_status to new_status, if any"""
        current = ContractStatus(current_status)
        target = ContractStatus(new_status)
        for (source, action), transition in WorkflowEnforcementService.STATUS_TRANSITIONS.items():
            if source == current and transition.next_status == target:
                return action
        return None

    @staticmethod
    def validate_status_transition(
        current_status: str,
        new_status: str,
        role: str
    ) -> WorkflowAction:
        """
        Check that `role` may move a contract from current_status to new_status.

        Returns the action the move corresponds to. Raises
        IllegalTransitionError when no such move exists and
        TransitionNotPermittedError when the role is not allowed to make it.
        """
        action = WorkflowEnforcementService.resolve_action(current_status, new_status)
        if action is None:
            raise IllegalTransitionError(current_status, ContractStatus(new_status).value)

        transition = WorkflowEnforcementService.STATUS_TRANSITIONS[(ContractStatus(current_status), action)]
        if UserRole(role) not in transition.roles:
            raise TransitionNotPermittedError(current_status, transition.next_status.value, role)
        return action

    @staticmethod
    def next_status(current_status: str, action: str, role: str) -> ContractStatus:
        """Resolve the status an action leads to for the given role"""
        key = (ContractStatus(current_status), WorkflowAction(action))
        transition = WorkflowEnforcementService.STATUS_TRANSITIONS.get(key)
        if transition is None:
            raise IllegalTransitionError(current_status, WorkflowAction(action).value)
        if UserRole(role) not in transition.roles:
            raise TransitionNotPermittedError(current_status, transition.next_status.value, role)
        return transition.next_status

    @staticmethod
    def available_actions(current_status: str, role: str) -> List[WorkflowAction]:
        """Actions `role` can take on a contract in current_status"""
        current = ContractStatus(current_status)
        user_role = UserRole(role)
        return [
            action
            for (source, action), transition in WorkflowEnforcementService.STATUS_TRANSITIONS.items()
            if source == current and user_role in transition.roles
        ]

    @staticmethod
    def stamp_transition(
        contract: Contract,
        previous_status: str,
        new_status: ContractStatus,
        actor_id: str,
        reason: Optional[str] = None,
        now: Optional[datetime] = None
    ) -> None:
        """Apply the new status and the decision fields that go with it"""
        now = now or datetime.utcnow()
        contract.status = new_status.value
        contract.updated_at = now

        if new_status == ContractStatus.PENDING_DEPT:
            contract.department_approval_status = DepartmentApprovalStatus.PENDING.value

        elif new_status == ContractStatus.PENDING_HR:
            # Department approved, forwarded to HR
            contract.department_approval_status = DepartmentApprovalStatus.APPROVED.value
            contract.department_approved_at = now
            contract.department_approved_by = actor_id

        elif new_status == ContractStatus.APPROVED:
            contract.approved_at = now
            contract.approved_by = actor_id

        elif new_status == ContractStatus.REJECTED:
            contract.rejected_at = now
            contract.rejected_by = actor_id
            contract.rejection_reason = reason
            if ContractStatus(previous_status) == ContractStatus.PENDING_DEPT:
                contract.department_approval_status = DepartmentApprovalStatus.REJECTED.value
                contract.department_approved_at = now
                contract.department_approved_by = actor_id
                contract.department_rejection_reason = reason

        logger.info(f"Contract {contract.id}: {previous_status} -> {new_status.value} by {actor_id}")
