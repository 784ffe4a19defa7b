# =====================================================
# FILE: app/services/user_service.py
# User directory and departments
# =====================================================

from sqlalchemy.orm import Session
from typing import Any, Dict, List, Optional
import logging

from app.core.exceptions import DuplicateEmailError, UserNotFoundError, ValidationError
from app.models.enums import UserRole
from app.models.user import Department, User
from app.services.audit_service import log_user_action
from app.utils.identifiers import next_identifier

logger = logging.getLogger(__name__)

EDITABLE_USER_FIELDS = ("name", "email", "role", "department_id", "employee_id", "position", "phone", "title")


class UserService:
    """Users, roles and departments"""

    def __init__(self, db: Session):
        self.db = db

    # =====================================================
    # LOOKUPS
    # =====================================================

    def get_user(self, user_id: str) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    def get_user_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email.strip().lower()).first()

    def list_users(self, viewer: Optional[User] = None) -> List[User]:
        """
        Users visible to the viewer: department admins only see their own
        department, everyone else sees the whole directory.
        """
        query = self.db.query(User)
        if viewer is not None and viewer.role == UserRole.DEPT_ADMIN.value:
            if not viewer.department_id:
                return []
            query = query.filter(User.department_id == viewer.department_id)
        return query.order_by(User.id).all()

    def get_department_users(self, department_id: str) -> List[User]:
        return self.db.query(User).filter(User.department_id == department_id).order_by(User.id).all()

    def get_users_by_role(self, role: str) -> List[User]:
        return self.db.query(User).filter(User.role == UserRole(role).value).order_by(User.id).all()

    def get_department(self, department_id: str) -> Optional[Department]:
        return self.db.query(Department).filter(Department.id == department_id).first()

    def list_departments(self) -> List[Department]:
        return self.db.query(Department).order_by(Department.id).all()

    # =====================================================
    # MUTATIONS
    # =====================================================

    def create_user(self, user_data: Dict[str, Any], actor_id: Optional[str] = None) -> User:
        """Create a user with the next free `u<N>` id"""
        for field in ("name", "email", "role"):
            if not user_data.get(field):
                raise ValidationError(f"{field} is required", {"field": field})

        email = user_data["email"].strip().lower()
        if self.get_user_by_email(email):
            raise DuplicateEmailError(email)
        self._check_department(user_data.get("department_id"))

        user = User(
            id=next_identifier(self.db, User, "u"),
            name=user_data["name"],
            email=email,
            role=UserRole(user_data["role"]).value,
            department_id=user_data.get("department_id"),
            employee_id=user_data.get("employee_id"),
            position=user_data.get("position"),
            phone=user_data.get("phone"),
            title=user_data.get("title"),
        )
        try:
            self.db.add(user)
            self.db.flush()
            log_user_action(self.db, "created", user.id, actor_id, {"role": user.role})
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(f"User {user.id} created with role {user.role}")
        return user

    def update_user(self, user_id: str, updates: Dict[str, Any], actor_id: Optional[str] = None) -> User:
        """Merge updates into an existing user"""
        user = self.get_user(user_id)
        if not user:
            raise UserNotFoundError(user_id)

        changes = {k: v for k, v in updates.items() if k in EDITABLE_USER_FIELDS}
        for field in ("name", "email", "role"):
            if field in changes and not changes[field]:
                raise ValidationError(f"{field} cannot be empty", {"field": field})
        if "email" in changes:
            changes["email"] = changes["email"].strip().lower()
            existing = self.get_user_by_email(changes["email"])
            if existing and existing.id != user.id:
                raise DuplicateEmailError(changes["email"])
        if "role" in changes and changes["role"]:
            changes["role"] = UserRole(changes["role"]).value
        if "department_id" in changes:
            self._check_department(changes["department_id"])

        for field, value in changes.items():
            setattr(user, field, value)

        log_user_action(self.db, "updated", user.id, actor_id, {"fields": sorted(changes)})
        self.db.commit()
        return user

    def _check_department(self, department_id: Optional[str]) -> None:
        if department_id and not self.get_department(department_id):
            raise ValidationError("Unknown department", {"department_id": department_id})
