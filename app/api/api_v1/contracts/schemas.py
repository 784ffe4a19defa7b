# =====================================================
# FILE: app/api/api_v1/contracts/schemas.py
# Contract API Schemas
# =====================================================

from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Optional, List, Dict, Any
from datetime import datetime, date

from app.models.enums import ContractStatus, ContractType, WorkflowAction


# =====================================================
# CONTRACT CREATE REQUEST
# =====================================================

class ContractCreateRequest(BaseModel):
    """
    Contract creation request.
    teacher_id defaults to the acting user when omitted.
    """
    teacher_id: Optional[str] = Field(None, description="Teacher the contract is for")
    template_id: Optional[str] = Field(None, description="Template used")
    title: Optional[str] = Field(None, max_length=500)
    type: ContractType
    start_date: date
    end_date: date
    file_url: Optional[str] = None
    data: Dict[str, Any] = Field(default_factory=dict)

    @field_validator('title')
    @classmethod
    def validate_title(cls, v):
        if v is None:
            return v
        v = v.strip()
        return v or None

    @model_validator(mode='after')
    def validate_dates(self):
        if self.end_date <= self.start_date:
            raise ValueError('End date must be after start date')
        return self


# =====================================================
# STATUS CHANGES
# =====================================================

class ContractStatusUpdateRequest(BaseModel):
    status: ContractStatus
    reason: Optional[str] = Field(None, max_length=2000)


class ContractActionRequest(BaseModel):
    reason: Optional[str] = Field(None, max_length=2000)


# =====================================================
# ATTACHMENTS
# =====================================================

class AttachmentCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    file_url: str = Field(..., min_length=1)
    file_type: Optional[str] = Field(None, max_length=100)
    file_size: int = Field(0, ge=0)


class AttachmentResponse(BaseModel):
    id: str
    name: str
    file_url: str
    file_type: Optional[str] = None
    file_size: int = 0
    uploaded_at: datetime
    uploaded_by: Optional[str] = None

    class Config:
        from_attributes = True


# =====================================================
# CONTRACT RESPONSE
# =====================================================

class ContractResponse(BaseModel):
    """Standard contract response"""
    id: str
    teacher_id: str
    template_id: Optional[str] = None
    title: str
    type: str
    status: str
    start_date: date
    end_date: date
    created_at: datetime
    updated_at: datetime

    approved_at: Optional[datetime] = None
    approved_by: Optional[str] = None
    rejected_at: Optional[datetime] = None
    rejected_by: Optional[str] = None
    rejection_reason: Optional[str] = None

    department_approval_status: Optional[str] = None
    department_approved_at: Optional[datetime] = None
    department_approved_by: Optional[str] = None
    department_rejection_reason: Optional[str] = None

    file_url: Optional[str] = None
    data: Optional[Dict[str, Any]] = Field(default_factory=dict)

    class Config:
        from_attributes = True


class ContractDetailResponse(ContractResponse):
    """Contract with attachments and the actions open to the viewer"""
    teacher_name: Optional[str] = None
    template_name: Optional[str] = None
    attachments: List[AttachmentResponse] = Field(default_factory=list)
    available_actions: List[WorkflowAction] = Field(default_factory=list)


class ContractListResponse(BaseModel):
    total: int
    items: List[ContractResponse]
