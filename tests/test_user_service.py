"""
Tests for the user directory and departments
"""
import pytest

from app.core.exceptions import DuplicateEmailError, UserNotFoundError, ValidationError
from app.services.user_service import UserService


def test_list_users_scoped_for_department_admin(db):
    service = UserService(db)
    dept_admin = service.get_user("u2")

    assert [u.id for u in service.list_users(dept_admin)] == ["u2", "u4", "u5"]
    assert len(service.list_users(service.get_user("u1"))) == 6


def test_lookup_by_email_is_case_insensitive(db):
    assert UserService(db).get_user_by_email("  Admin@University.EDU ").id == "u1"


def test_users_by_role_and_department(db):
    service = UserService(db)
    assert [u.id for u in service.get_users_by_role("teacher")] == ["u4", "u5", "u6"]
    assert [u.id for u in service.get_department_users("d2")] == ["u3", "u6"]
    assert service.get_department("d1").admin_id == "u2"
    assert [d.code for d in service.list_departments()] == ["CS", "MATH", "PHYS"]


def test_create_user(db):
    user = UserService(db).create_user({
        "name": "Sun Jiangshi",
        "email": "Sun@University.edu",
        "role": "teacher",
        "department_id": "d3",
        "position": "Lecturer",
    }, actor_id="u1")

    assert user.id == "u7"
    assert user.email == "sun@university.edu"
    assert user.department.code == "PHYS"


def test_create_user_duplicate_email(db):
    with pytest.raises(DuplicateEmailError):
        UserService(db).create_user({"name": "Someone", "email": "LIU@university.edu", "role": "teacher"})


def test_create_user_unknown_department(db):
    with pytest.raises(ValidationError):
        UserService(db).create_user({
            "name": "Someone", "email": "someone@university.edu", "role": "teacher", "department_id": "d9"
        })


def test_create_user_requires_role(db):
    with pytest.raises(ValidationError) as exc_info:
        UserService(db).create_user({"name": "Someone", "email": "someone@university.edu"})
    assert exc_info.value.details == {"field": "role"}


def test_update_user(db):
    service = UserService(db)
    user = service.update_user("u6", {"position": "Associate Professor", "id": "ignored"}, actor_id="u1")
    assert user.position == "Associate Professor"
    assert user.id == "u6"


def test_update_user_rejects_taken_email(db):
    with pytest.raises(DuplicateEmailError):
        UserService(db).update_user("u6", {"email": "chen@university.edu"})


def test_update_user_rejects_blank_name(db):
    with pytest.raises(ValidationError):
        UserService(db).update_user("u6", {"name": None})


def test_update_unknown_user(db):
    with pytest.raises(UserNotFoundError):
        UserService(db).update_user("u42", {"name": "Nobody"})
