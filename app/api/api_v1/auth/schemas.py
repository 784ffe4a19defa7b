"""
Auth and User Schemas
File: app/api/api_v1/auth/schemas.py
"""

from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional, List


class LoginRequest(BaseModel):
    email: EmailStr

    @field_validator('email')
    @classmethod
    def normalize_email(cls, v):
        return v.strip().lower()


class DepartmentResponse(BaseModel):
    id: str
    name: str
    code: str
    admin_id: Optional[str] = None

    class Config:
        from_attributes = True


class UserResponse(BaseModel):
    id: str
    name: str
    email: str
    role: str
    department_id: Optional[str] = None
    employee_id: Optional[str] = None
    position: Optional[str] = None
    phone: Optional[str] = None
    title: Optional[str] = None

    class Config:
        from_attributes = True


class CurrentUserResponse(UserResponse):
    """Profile of the acting user with the permissions of their role"""
    department_name: Optional[str] = None
    permissions: List[str] = Field(default_factory=list)
