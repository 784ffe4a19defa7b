# =====================================================
# FILE: app/core/seed.py
# Demo fixtures: departments, users, templates, contracts, notifications
# =====================================================

from sqlalchemy.orm import Session
from datetime import date
import logging

from app.models.contract import Contract
from app.models.contract_template import ContractTemplate
from app.models.notification import Notification
from app.models.user import Department, User
from app.utils.datetime_helpers import parse_datetime

logger = logging.getLogger(__name__)


DEPARTMENTS = [
    {"id": "d1", "name": "Computer Science", "code": "CS", "admin_id": "u2"},
    {"id": "d2", "name": "Mathematics", "code": "MATH", "admin_id": "u3"},
    {"id": "d3", "name": "Physics", "code": "PHYS", "admin_id": None},
]

USERS = [
    {"id": "u1", "name": "Li Guanli", "email": "admin@university.edu", "role": "hr_admin",
     "department_id": None, "employee_id": "HR001", "position": "Director of Human Resources", "phone": "13800000001"},
    {"id": "u2", "name": "Wang Zhuren", "email": "compscidept@university.edu", "role": "dept_admin",
     "department_id": "d1", "employee_id": "CS001", "position": "Head of Computer Science", "phone": "13800000002"},
    {"id": "u3", "name": "Zhang Zhuren", "email": "mathdept@university.edu", "role": "dept_admin",
     "department_id": "d2", "employee_id": "MA001", "position": "Head of Mathematics", "phone": "13800000003"},
    {"id": "u4", "name": "Liu Jiaoshou", "email": "liu@university.edu", "role": "teacher",
     "department_id": "d1", "employee_id": "CS101", "position": "Professor", "phone": "13800000004"},
    {"id": "u5", "name": "Chen Fujiaoshou", "email": "chen@university.edu", "role": "teacher",
     "department_id": "d1", "employee_id": "CS102", "position": "Associate Professor", "phone": "13800000005"},
    {"id": "u6", "name": "Zhao Jiangshi", "email": "zhao@university.edu", "role": "teacher",
     "department_id": "d2", "employee_id": "MA101", "position": "Lecturer", "phone": "13800000006"},
]

TEMPLATES = [
    {
        "id": "t1",
        "name": "Full-time Teacher Contract",
        "description": "Standard contract for all full-time teaching positions",
        "fields": [
            {"id": "f1", "name": "position", "label": "Position", "type": "select", "required": True,
             "options": ["Professor", "Associate Professor", "Assistant Professor", "Lecturer"]},
            {"id": "f2", "name": "salary", "label": "Base salary", "type": "number", "required": True},
            {"id": "f3", "name": "teaching_hours", "label": "Teaching hours", "type": "number", "required": True},
            {"id": "f4", "name": "research_requirements", "label": "Research requirements", "type": "text", "required": True},
        ],
        "file_url": "/templates/full_time_template.pdf",
        "applicable_positions": ["Professor", "Associate Professor", "Assistant Professor", "Lecturer"],
        "applicable_contract_types": ["full_time"],
    },
    {
        "id": "t2",
        "name": "Part-time Teacher Contract",
        "description": "Contract for part-time teaching staff",
        "fields": [
            {"id": "f1", "name": "position", "label": "Position", "type": "select", "required": True,
             "options": ["Adjunct Professor", "Adjunct Associate Professor", "Adjunct Lecturer"]},
            {"id": "f2", "name": "hourly_rate", "label": "Hourly rate", "type": "number", "required": True},
            {"id": "f3", "name": "teaching_hours", "label": "Teaching hours", "type": "number", "required": True},
        ],
        "file_url": "/templates/part_time_template.pdf",
        "applicable_positions": ["Adjunct Professor", "Adjunct Associate Professor", "Adjunct Lecturer"],
        "applicable_contract_types": ["part_time"],
    },
    {
        "id": "t3",
        "name": "Visiting Scholar Contract",
        "description": "Contract for visiting scholars",
        "fields": [
            {"id": "f1", "name": "home_institution", "label": "Home institution", "type": "text", "required": True},
            {"id": "f2", "name": "research_area", "label": "Research area", "type": "text", "required": True},
            {"id": "f3", "name": "allowance", "label": "Allowance", "type": "number", "required": True},
        ],
        "file_url": "/templates/visiting_template.pdf",
        "applicable_positions": ["Visiting Professor", "Visiting Researcher"],
        "applicable_contract_types": ["visiting"],
    },
]

CONTRACTS = [
    {
        "id": "c1", "teacher_id": "u4", "template_id": "t1",
        "title": "Professor Liu full-time contract", "type": "full_time", "status": "approved",
        "start_date": "2023-09-01", "end_date": "2026-08-31",
        "created_at": "2023-08-01T00:00:00Z", "updated_at": "2023-08-15T00:00:00Z",
        "approved_at": "2023-08-15T00:00:00Z", "approved_by": "u1",
        "department_approval_status": "approved",
        "department_approved_at": "2023-08-10T00:00:00Z", "department_approved_by": "u2",
        "file_url": "/contracts/liu_contract.pdf",
        "data": {"position": "Professor", "salary": 300000, "teaching_hours": 240,
                 "research_requirements": "At least two SCI papers per year"},
    },
    {
        "id": "c2", "teacher_id": "u5", "template_id": "t1",
        "title": "Associate Professor Chen full-time contract", "type": "full_time", "status": "pending_hr",
        "start_date": "2023-09-01", "end_date": "2026-08-31",
        "created_at": "2023-08-05T00:00:00Z", "updated_at": "2023-08-12T00:00:00Z",
        "department_approval_status": "approved",
        "department_approved_at": "2023-08-12T00:00:00Z", "department_approved_by": "u2",
        "file_url": "/contracts/chen_contract.pdf",
        "data": {"position": "Associate Professor", "salary": 250000, "teaching_hours": 280,
                 "research_requirements": "At least one SCI paper per year"},
    },
    {
        "id": "c3", "teacher_id": "u6", "template_id": "t1",
        "title": "Lecturer Zhao full-time contract", "type": "full_time", "status": "pending_dept",
        "start_date": "2023-09-01", "end_date": "2026-08-31",
        "created_at": "2023-08-07T00:00:00Z", "updated_at": "2023-08-07T00:00:00Z",
        "department_approval_status": "pending",
        "file_url": "/contracts/zhao_contract.pdf",
        "data": {"position": "Lecturer", "salary": 200000, "teaching_hours": 320,
                 "research_requirements": "Take part in departmental research projects"},
    },
    {
        "id": "c4", "teacher_id": "u4", "template_id": "t2",
        "title": "Professor Liu part-time teaching contract", "type": "part_time", "status": "draft",
        "start_date": "2023-09-01", "end_date": "2024-01-31",
        "created_at": "2023-08-10T00:00:00Z", "updated_at": "2023-08-10T00:00:00Z",
        "file_url": "/contracts/liu_part_time_contract.pdf",
        "data": {"position": "Adjunct Professor", "hourly_rate": 800, "teaching_hours": 64},
    },
]

NOTIFICATIONS = [
    {"id": "n1", "user_id": "u1", "title": "New contract awaiting approval",
     "message": "Associate Professor Chen's full-time contract requires your approval",
     "is_read": False, "created_at": "2023-08-12T10:00:00Z", "link": "/hr-approvals/c2", "type": "approval_required"},
    {"id": "n2", "user_id": "u2", "title": "New contract awaiting approval",
     "message": "Lecturer Zhao's full-time contract requires your approval",
     "is_read": False, "created_at": "2023-08-07T14:30:00Z", "link": "/approvals/c3", "type": "approval_required"},
    {"id": "n3", "user_id": "u4", "title": "Contract approved",
     "message": "Your full-time contract has been approved",
     "is_read": True, "created_at": "2023-08-15T09:15:00Z", "link": "/my-contracts/c1", "type": "status_changed"},
    {"id": "n4", "user_id": "u5", "title": "Department approved contract",
     "message": "Your contract was approved by the department and awaits final HR approval",
     "is_read": False, "created_at": "2023-08-12T16:45:00Z", "link": "/my-contracts/c2", "type": "status_changed"},
    {"id": "n5", "user_id": "u1", "title": "Contracts expiring soon",
     "message": "5 teacher contracts expire within 30 days",
     "is_read": False, "created_at": "2023-08-01T08:00:00Z", "link": "/contracts?filter=expiring", "type": "contract_expiry"},
]

_TIMESTAMP_FIELDS = (
    "created_at", "updated_at", "approved_at", "rejected_at", "department_approved_at",
)


def _contract_row(fixture: dict) -> Contract:
    values = dict(fixture)
    for field in _TIMESTAMP_FIELDS:
        if values.get(field):
            values[field] = parse_datetime(values[field])
    values["start_date"] = date.fromisoformat(values["start_date"])
    values["end_date"] = date.fromisoformat(values["end_date"])
    return Contract(**values)


def seed_demo_data(db: Session) -> bool:
    """
    Load the demo fixtures into an empty store.

    Returns False without touching anything when users already exist.
    """
    if db.query(User).first() is not None:
        logger.info("Store already populated; demo fixtures skipped")
        return False

    seeded_at = parse_datetime("2023-09-01T00:00:00Z")
    db.add_all(Department(**d) for d in DEPARTMENTS)
    db.add_all(User(**u) for u in USERS)
    db.add_all(
        ContractTemplate(version="1.0", is_active=True, created_at=seeded_at, updated_at=seeded_at, **t)
        for t in TEMPLATES
    )
    db.add_all(_contract_row(c) for c in CONTRACTS)
    db.add_all(
        Notification(
            **{k: v for k, v in n.items() if k != "created_at"},
            created_at=parse_datetime(n["created_at"])
        )
        for n in NOTIFICATIONS
    )
    db.commit()
    logger.info(
        f"Seeded {len(USERS)} users, {len(TEMPLATES)} templates, "
        f"{len(CONTRACTS)} contracts, {len(NOTIFICATIONS)} notifications"
    )
    return True
