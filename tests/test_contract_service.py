"""
Tests for contract creation, visibility and the approval workflow
"""
import pytest

from app.core.exceptions import (
    ContractNotFoundError,
    ContractValidationError,
    IllegalTransitionError,
    TransitionNotPermittedError,
    UserNotFoundError,
)
from app.models.audit_log import AuditLog
from app.models.notification import Notification
from app.models.user import User
from app.services.audit_service import AuditService
from app.services.contract_service import ContractService


def user(db, user_id):
    return db.query(User).filter(User.id == user_id).first()


def notifications_for(db, user_id):
    return db.query(Notification).filter(Notification.user_id == user_id).order_by(Notification.id).all()


class TestCreateContract:

    def test_create_contract_starts_as_draft(self, db):
        service = ContractService(db)
        existing_ids = {c.id for c in service.list_contracts()}

        contract = service.create_contract({
            "teacher_id": "u6",
            "type": "full_time",
            "start_date": "2023-09-01",
            "end_date": "2026-08-31",
        })

        assert contract.status == "draft"
        assert contract.id not in existing_ids
        assert contract.created_at == contract.updated_at
        assert contract.id == "c5"
        assert contract.title == "Full-time teaching contract"
        assert len(service.list_contracts()) == 5

    def test_supplied_status_is_ignored(self, db):
        contract = ContractService(db).create_contract({
            "teacher_id": "u4",
            "type": "part_time",
            "start_date": "2024-02-01",
            "end_date": "2024-06-30",
            "status": "approved",
            "title": "Spring adjunct contract",
        })
        assert contract.status == "draft"
        assert contract.title == "Spring adjunct contract"

    def test_missing_fields_rejected(self, db):
        with pytest.raises(ContractValidationError) as exc_info:
            ContractService(db).create_contract({"teacher_id": "u4", "type": "full_time"})
        assert exc_info.value.details["missing"] == ["start_date", "end_date"]

    def test_unknown_teacher(self, db):
        with pytest.raises(UserNotFoundError):
            ContractService(db).create_contract({
                "teacher_id": "u99",
                "type": "full_time",
                "start_date": "2023-09-01",
                "end_date": "2026-08-31",
            })

    def test_template_required_fields_checked(self, db):
        with pytest.raises(ContractValidationError) as exc_info:
            ContractService(db).create_contract({
                "teacher_id": "u5",
                "template_id": "t1",
                "type": "full_time",
                "start_date": "2023-09-01",
                "end_date": "2026-08-31",
                "data": {"position": "Lecturer", "salary": 1},
            })
        assert exc_info.value.details["missing"] == ["teaching_hours", "research_requirements"]

    def test_creation_is_audited(self, db):
        contract = ContractService(db).create_contract({
            "teacher_id": "u6",
            "type": "visiting",
            "start_date": "2024-01-01",
            "end_date": "2024-12-31",
        }, actor_id="u3")
        history = AuditService(db).history("contract", contract.id)
        assert [entry.action for entry in history] == ["created"]
        assert history[0].user_id == "u3"


class TestVisibility:

    def test_teacher_sees_own_contracts(self, db):
        contracts = ContractService(db).get_visible_contracts(user(db, "u4"))
        assert [c.id for c in contracts] == ["c1", "c4"]

    def test_user_contracts(self, db):
        service = ContractService(db)
        assert [c.id for c in service.get_user_contracts("u4")] == ["c1", "c4"]
        assert service.get_user_contracts("u3") == []

    def test_dept_admin_sees_department(self, db):
        service = ContractService(db)
        assert [c.id for c in service.get_visible_contracts(user(db, "u2"))] == ["c1", "c2", "c4"]
        assert [c.id for c in service.get_visible_contracts(user(db, "u3"))] == ["c3"]

    def test_hr_admin_sees_everything(self, db):
        contracts = ContractService(db).get_visible_contracts(user(db, "u1"))
        assert len(contracts) == 4

    def test_status_and_search_filters(self, db):
        service = ContractService(db)
        hr = user(db, "u1")
        assert [c.id for c in service.get_visible_contracts(hr, status="draft")] == ["c4"]
        assert [c.id for c in service.get_visible_contracts(hr, search="Zhao")] == ["c3"]

    def test_single_contract_outside_scope(self, db):
        service = ContractService(db)
        assert service.get_visible_contract(user(db, "u6"), "c1") is None
        assert service.get_visible_contract(user(db, "u4"), "c1").id == "c1"

    def test_pending_for_each_role(self, db):
        service = ContractService(db)
        assert [c.id for c in service.pending_for(user(db, "u1"))] == ["c2"]
        assert [c.id for c in service.pending_for(user(db, "u3"))] == ["c3"]
        assert service.pending_for(user(db, "u2")) == []
        assert service.pending_for(user(db, "u4")) == []

    def test_department_contracts(self, db):
        service = ContractService(db)
        assert [c.id for c in service.get_department_contracts("d1")] == ["c1", "c2", "c4"]
        assert service.get_department_contracts("d3") == []

    def test_can_create_for(self, db):
        service = ContractService(db)
        assert service.can_create_for(user(db, "u4"), "u4")
        assert not service.can_create_for(user(db, "u4"), "u5")
        assert service.can_create_for(user(db, "u2"), "u5")
        assert not service.can_create_for(user(db, "u2"), "u6")
        assert service.can_create_for(user(db, "u1"), "u6")


class TestStatusUpdates:

    def test_department_approval_stamps_fields(self, db):
        contract = ContractService(db).update_contract_status("c3", "pending_hr", "u2")

        assert contract.status == "pending_hr"
        assert contract.department_approval_status == "approved"
        assert contract.department_approved_by == "u2"
        assert contract.department_approved_at is not None

    def test_unknown_contract_is_noop(self, db):
        service = ContractService(db)
        before = [(c.id, c.status) for c in service.list_contracts()]

        assert service.update_contract_status("nonexistent", "approved", "u1") is None

        assert [(c.id, c.status) for c in service.list_contracts()] == before

    def test_illegal_transition_leaves_contract_unchanged(self, db):
        service = ContractService(db)
        with pytest.raises(IllegalTransitionError):
            service.update_contract_status("c4", "approved", "u1")
        assert service.get_contract("c4").status == "draft"

    def test_role_gate(self, db):
        with pytest.raises(TransitionNotPermittedError):
            ContractService(db).update_contract_status("c2", "approved", "u2")

    def test_teacher_cannot_submit_someone_elses_contract(self, db):
        with pytest.raises(TransitionNotPermittedError):
            ContractService(db).apply_action("c4", "submit", "u5")

    def test_unknown_actor(self, db):
        with pytest.raises(UserNotFoundError):
            ContractService(db).update_contract_status("c4", "pending_dept", "u99")

    def test_apply_action_unknown_contract(self, db):
        with pytest.raises(ContractNotFoundError):
            ContractService(db).apply_action("c99", "submit", "u4")

    def test_full_approval_path(self, db):
        service = ContractService(db)

        contract = service.apply_action("c4", "submit", "u4")
        assert contract.status == "pending_dept"
        assert contract.department_approval_status == "pending"
        assert notifications_for(db, "u2")[-1].link == "/approvals/c4"

        contract = service.apply_action("c4", "approve", "u2")
        assert contract.status == "pending_hr"
        assert notifications_for(db, "u1")[-1].link == "/hr-approvals/c4"
        assert notifications_for(db, "u4")[-1].title == "Department approved contract"

        contract = service.apply_action("c4", "approve", "u1")
        assert contract.status == "approved"
        assert contract.approved_by == "u1"
        assert contract.approved_at is not None

        contract = service.apply_action("c4", "archive", "u1")
        assert contract.status == "archived"

        history = AuditService(db).history("contract", "c4")
        assert [entry.action for entry in history] == ["submit", "approve", "approve", "archive"]
        assert history[0].details == {"from": "draft", "to": "pending_dept", "reason": None}

    def test_department_rejection(self, db):
        service = ContractService(db)
        contract = service.apply_action("c3", "reject", "u3", reason="Teaching load too high")

        assert contract.status == "rejected"
        assert contract.rejected_by == "u3"
        assert contract.rejection_reason == "Teaching load too high"
        assert contract.department_approval_status == "rejected"
        assert contract.department_rejection_reason == "Teaching load too high"
        assert "Teaching load too high" in notifications_for(db, "u6")[-1].message

        with pytest.raises(IllegalTransitionError):
            service.apply_action("c3", "approve", "u3")

    def test_hr_rejection_keeps_department_approval(self, db):
        contract = ContractService(db).update_contract_status("c2", "rejected", "u1", "Budget freeze")
        assert contract.status == "rejected"
        assert contract.department_approval_status == "approved"
        assert contract.rejection_reason == "Budget freeze"

    def test_termination(self, db):
        contract = ContractService(db).apply_action("c1", "terminate", "u1")
        assert contract.status == "terminated"
        assert db.query(AuditLog).filter(AuditLog.entity_id == "c1").count() == 1

    def test_available_actions_respect_ownership(self, db):
        service = ContractService(db)
        c4 = service.get_contract("c4")
        assert [a.value for a in service.available_actions(c4, user(db, "u4"))] == ["submit"]
        assert service.available_actions(c4, user(db, "u5")) == []
        assert service.available_actions(c4, user(db, "u1")) == []


class TestAttachments:

    def test_add_and_list(self, db):
        service = ContractService(db)
        attachment = service.add_attachment("c4", {
            "name": "Offer letter",
            "file_url": "/attachments/offer.pdf",
            "file_type": "application/pdf",
            "file_size": 2048,
        }, "u4")

        assert attachment.id == "a1"
        assert [a.id for a in service.list_attachments("c4")] == ["a1"]
        assert service.get_contract("c4").attachments[0].name == "Offer letter"

    def test_attachment_needs_url(self, db):
        with pytest.raises(ContractValidationError):
            ContractService(db).add_attachment("c4", {"name": "Empty"}, "u4")

    def test_attachment_on_unknown_contract(self, db):
        with pytest.raises(ContractNotFoundError):
            ContractService(db).add_attachment("c9", {"name": "x", "file_url": "/x"}, "u1")
