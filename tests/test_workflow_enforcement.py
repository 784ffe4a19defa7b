"""
Tests for the contract status transition table
"""
import pytest

from app.core.exceptions import IllegalTransitionError, TransitionNotPermittedError
from app.models.enums import ContractStatus, WorkflowAction
from app.services.workflow_enforcement_service import WorkflowEnforcementService


class TestTransitionTable:
    """Legal moves, role gates and terminal states"""

    @pytest.mark.parametrize("current, new, role, action", [
        ("draft", "pending_dept", "teacher", WorkflowAction.SUBMIT),
        ("pending_dept", "pending_hr", "dept_admin", WorkflowAction.APPROVE),
        ("pending_dept", "rejected", "dept_admin", WorkflowAction.REJECT),
        ("pending_hr", "approved", "hr_admin", WorkflowAction.APPROVE),
        ("pending_hr", "rejected", "hr_admin", WorkflowAction.REJECT),
        ("approved", "archived", "hr_admin", WorkflowAction.ARCHIVE),
        ("approved", "terminated", "hr_admin", WorkflowAction.TERMINATE),
    ])
    def test_legal_transitions(self, current, new, role, action):
        assert WorkflowEnforcementService.validate_status_transition(current, new, role) == action

    @pytest.mark.parametrize("current, new", [
        ("draft", "approved"),
        ("draft", "pending_hr"),
        ("pending_dept", "approved"),
        ("rejected", "pending_dept"),
        ("archived", "approved"),
        ("approved", "approved"),
    ])
    def test_illegal_transitions_raise(self, current, new):
        with pytest.raises(IllegalTransitionError) as exc_info:
            WorkflowEnforcementService.validate_status_transition(current, new, "hr_admin")
        assert exc_info.value.status_code == 409
        assert exc_info.value.details == {"current_status": current, "requested": new}

    def test_wrong_role_is_not_permitted(self):
        with pytest.raises(TransitionNotPermittedError) as exc_info:
            WorkflowEnforcementService.validate_status_transition("pending_hr", "approved", "dept_admin")
        assert exc_info.value.status_code == 403
        assert exc_info.value.role == "dept_admin"

    def test_hr_admin_cannot_submit_for_teacher(self):
        with pytest.raises(TransitionNotPermittedError):
            WorkflowEnforcementService.next_status("draft", "submit", "hr_admin")

    def test_next_status_for_action(self):
        assert WorkflowEnforcementService.next_status(
            "pending_dept", "reject", "dept_admin"
        ) == ContractStatus.REJECTED

    def test_unknown_action_for_status(self):
        with pytest.raises(IllegalTransitionError):
            WorkflowEnforcementService.next_status("draft", "archive", "hr_admin")

    def test_available_actions(self):
        assert WorkflowEnforcementService.available_actions("approved", "hr_admin") == [
            WorkflowAction.ARCHIVE, WorkflowAction.TERMINATE
        ]
        assert WorkflowEnforcementService.available_actions("pending_dept", "dept_admin") == [
            WorkflowAction.APPROVE, WorkflowAction.REJECT
        ]
        assert WorkflowEnforcementService.available_actions("pending_dept", "teacher") == []

    def test_terminal_statuses_have_no_actions(self):
        for status in ("rejected", "archived", "terminated"):
            assert WorkflowEnforcementService.is_terminal(status)
            for role in ("teacher", "dept_admin", "hr_admin"):
                assert WorkflowEnforcementService.available_actions(status, role) == []
        assert not WorkflowEnforcementService.is_terminal("approved")
