# =====================================================
# FILE: app/models/user.py
# Users and the departments they belong to
# =====================================================

from sqlalchemy import Column, String, ForeignKey
from sqlalchemy.orm import relationship

from app.core.database import Base


class Department(Base):
    __tablename__ = "departments"

    id = Column(String(20), primary_key=True)
    name = Column(String(255), nullable=False)
    code = Column(String(50), nullable=False, unique=True)
    # Plain column; users.department_id already points the other way
    admin_id = Column(String(20))

    members = relationship("User", back_populates="department")


class User(Base):
    __tablename__ = "users"

    id = Column(String(20), primary_key=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    role = Column(String(50), nullable=False)
    department_id = Column(String(20), ForeignKey("departments.id", ondelete="SET NULL"), index=True)
    employee_id = Column(String(50))
    position = Column(String(100))
    phone = Column(String(50))
    title = Column(String(100))

    department = relationship("Department", back_populates="members")
    contracts = relationship("Contract", back_populates="teacher")
