# =====================================================
# FILE: app/services/notification_service.py
# In-app notifications and workflow notification templates
# =====================================================

from sqlalchemy.orm import Session
from datetime import datetime
from typing import Dict, List, Optional
import logging

from app.core.exceptions import NotificationNotFoundError
from app.models.contract import Contract
from app.models.enums import NotificationType, UserRole, WorkflowAction
from app.models.notification import Notification
from app.models.user import Department, User
from app.utils.identifiers import next_identifier

logger = logging.getLogger(__name__)


class NotificationTemplates:
    """Title/message/link payloads for each workflow event"""

    @staticmethod
    def department_approval_required(contract: Contract, teacher_name: str) -> Dict[str, str]:
        return {
            "title": "Contract awaiting department approval",
            "message": f"{teacher_name}'s contract \"{contract.title}\" requires your approval.",
            "type": NotificationType.APPROVAL_REQUIRED.value,
            "link": f"/approvals/{contract.id}",
        }

    @staticmethod
    def hr_approval_required(contract: Contract, teacher_name: str) -> Dict[str, str]:
        return {
            "title": "Contract awaiting HR approval",
            "message": (
                f"{teacher_name}'s contract \"{contract.title}\" was approved by the "
                f"department and requires final approval."
            ),
            "type": NotificationType.APPROVAL_REQUIRED.value,
            "link": f"/hr-approvals/{contract.id}",
        }

    @staticmethod
    def status_changed(contract: Contract, action: WorkflowAction, reason: Optional[str] = None) -> Dict[str, str]:
        titles = {
            WorkflowAction.SUBMIT: "Contract submitted",
            WorkflowAction.APPROVE: "Contract approved",
            WorkflowAction.REJECT: "Contract rejected",
            WorkflowAction.ARCHIVE: "Contract archived",
            WorkflowAction.TERMINATE: "Contract terminated",
        }
        if action == WorkflowAction.APPROVE and contract.status == "pending_hr":
            title = "Department approved contract"
            message = f"Your contract \"{contract.title}\" was approved by the department and awaits HR approval."
        else:
            title = titles[action]
            message = f"Your contract \"{contract.title}\" is now {contract.status.replace('_', ' ')}."
            if reason:
                message = f"{message} Reason: {reason}"
        return {
            "title": title,
            "message": message,
            "type": NotificationType.STATUS_CHANGED.value,
            "link": f"/my-contracts/{contract.id}",
        }

    @staticmethod
    def contract_expiring(contract: Contract, days_remaining: int) -> Dict[str, str]:
        return {
            "title": "Contract expiring soon",
            "message": f"Your contract \"{contract.title}\" expires in {days_remaining} day(s) on {contract.end_date.isoformat()}.",
            "type": NotificationType.CONTRACT_EXPIRY.value,
            "link": f"/my-contracts/{contract.id}",
        }


class NotificationService:
    """User notification inbox"""

    def __init__(self, db: Session):
        self.db = db

    def list_for_user(self, user_id: str, unread_only: bool = False) -> List[Notification]:
        query = self.db.query(Notification).filter(Notification.user_id == user_id)
        if unread_only:
            query = query.filter(Notification.is_read == False)  # noqa: E712
        return query.order_by(Notification.created_at.desc(), Notification.id.desc()).all()

    def unread_count(self, user_id: str) -> int:
        return self.db.query(Notification).filter(
            Notification.user_id == user_id,
            Notification.is_read == False  # noqa: E712
        ).count()

    def get_notification(self, notification_id: str) -> Optional[Notification]:
        return self.db.query(Notification).filter(Notification.id == notification_id).first()

    def add_notification(
        self,
        user_id: str,
        title: str,
        message: str,
        notification_type: str = NotificationType.SYSTEM.value,
        link: Optional[str] = None,
        commit: bool = True
    ) -> Notification:
        """Create an unread notification for a user"""
        notification = Notification(
            id=next_identifier(self.db, Notification, "n"),
            user_id=user_id,
            type=NotificationType(notification_type).value,
            title=title,
            message=message,
            link=link,
            is_read=False,
            created_at=datetime.utcnow()
        )
        self.db.add(notification)
        # Flush so the next generated id sees this row
        self.db.flush()
        if commit:
            self.db.commit()
        logger.info(f"Notification {notification.id} ({notification.type}) for user {user_id}")
        return notification

    def mark_as_read(self, notification_id: str, user_id: Optional[str] = None) -> Notification:
        notification = self.get_notification(notification_id)
        if not notification or (user_id is not None and notification.user_id != user_id):
            raise NotificationNotFoundError(notification_id)
        if not notification.is_read:
            notification.is_read = True
            notification.read_at = datetime.utcnow()
            self.db.commit()
        return notification

    def mark_all_as_read(self, user_id: str) -> int:
        """Mark every unread notification of a user as read; returns how many changed"""
        unread = self.list_for_user(user_id, unread_only=True)
        now = datetime.utcnow()
        for notification in unread:
            notification.is_read = True
            notification.read_at = now
        self.db.commit()
        return len(unread)

    # =====================================================
    # WORKFLOW EVENTS
    # =====================================================

    def notify_transition(self, contract: Contract, action: WorkflowAction, reason: Optional[str] = None) -> List[Notification]:
        """
        Queue the notifications for a completed transition.

        Rows are flushed into the caller's transaction and committed with
        the status change.
        """
        teacher = contract.teacher or self.db.query(User).filter(User.id == contract.teacher_id).first()
        teacher_name = teacher.name if teacher else contract.teacher_id
        payloads = []

        if action == WorkflowAction.SUBMIT:
            admin_id = self._department_admin_id(teacher)
            if admin_id:
                payloads.append((admin_id, NotificationTemplates.department_approval_required(contract, teacher_name)))
            else:
                logger.warning(f"Contract {contract.id} submitted but teacher's department has no admin")
        elif action == WorkflowAction.APPROVE and contract.status == "pending_hr":
            hr_admins = self.db.query(User).filter(User.role == UserRole.HR_ADMIN.value).all()
            for admin in hr_admins:
                payloads.append((admin.id, NotificationTemplates.hr_approval_required(contract, teacher_name)))
            payloads.append((contract.teacher_id, NotificationTemplates.status_changed(contract, action)))
        else:
            payloads.append((contract.teacher_id, NotificationTemplates.status_changed(contract, action, reason)))

        return [
            self.add_notification(
                user_id,
                payload["title"],
                payload["message"],
                payload["type"],
                payload["link"],
                commit=False
            )
            for user_id, payload in payloads
        ]

    def _department_admin_id(self, teacher: Optional[User]) -> Optional[str]:
        if not teacher or not teacher.department_id:
            return None
        department = self.db.query(Department).filter(Department.id == teacher.department_id).first()
        return department.admin_id if department else None
