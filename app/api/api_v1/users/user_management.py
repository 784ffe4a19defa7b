# =====================================================
# FILE: app/api/api_v1/users/user_management.py
# User Management API Endpoints
# =====================================================

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import List, Optional
import logging

from app.api.api_v1.auth.schemas import DepartmentResponse, UserResponse
from app.core.dependencies import get_current_user, get_user_service
from app.core.exceptions import UserNotFoundError
from app.core.permissions import Permission
from app.middleware.rbac_middleware import require_permission
from app.models.enums import UserRole
from app.models.user import User
from app.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["users"])

# =====================================================
# PYDANTIC SCHEMAS
# =====================================================

class UserCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    role: UserRole
    department_id: Optional[str] = None
    employee_id: Optional[str] = Field(None, max_length=50)
    position: Optional[str] = Field(None, max_length=100)
    phone: Optional[str] = Field(None, max_length=50)
    title: Optional[str] = Field(None, max_length=100)

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        if not v.strip():
            raise ValueError('Name cannot be blank')
        return v.strip()


class UserUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    role: Optional[UserRole] = None
    department_id: Optional[str] = None
    employee_id: Optional[str] = Field(None, max_length=50)
    position: Optional[str] = Field(None, max_length=100)
    phone: Optional[str] = Field(None, max_length=50)
    title: Optional[str] = Field(None, max_length=100)


# =====================================================
# USERS
# =====================================================

@router.get("/api/users", response_model=List[UserResponse])
async def list_users(
    role: Optional[UserRole] = Query(None),
    current_user: User = Depends(require_permission(Permission.USER_VIEW)),
    service: UserService = Depends(get_user_service)
):
    """Department admins only see members of their own department"""
    users = service.list_users(viewer=current_user)
    if role:
        users = [u for u in users if u.role == role.value]
    return users


@router.get("/api/users/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: str,
    current_user: User = Depends(require_permission(Permission.USER_VIEW)),
    service: UserService = Depends(get_user_service)
):
    user = next((u for u in service.list_users(viewer=current_user) if u.id == user_id), None)
    if not user:
        raise UserNotFoundError(user_id)
    return user


@router.post("/api/users", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    request: UserCreate,
    current_user: User = Depends(require_permission(Permission.USER_MANAGE)),
    service: UserService = Depends(get_user_service)
):
    return service.create_user(request.model_dump(mode="json"), actor_id=current_user.id)


@router.put("/api/users/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: str,
    request: UserUpdate,
    current_user: User = Depends(require_permission(Permission.USER_MANAGE)),
    service: UserService = Depends(get_user_service)
):
    updates = request.model_dump(mode="json", exclude_unset=True)
    return service.update_user(user_id, updates, actor_id=current_user.id)


# =====================================================
# DEPARTMENTS
# =====================================================

@router.get("/api/departments", response_model=List[DepartmentResponse])
async def list_departments(
    current_user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service)
):
    return service.list_departments()
