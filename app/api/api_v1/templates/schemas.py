# =====================================================
# FILE: app/api/api_v1/templates/schemas.py
# Contract Template Schemas
# =====================================================

from pydantic import BaseModel, Field, field_validator
from typing import Optional, List, Any
from datetime import datetime

from app.models.enums import ContractType, TemplateFieldType


class TemplateField(BaseModel):
    id: Optional[str] = None
    name: str = Field(..., min_length=1, max_length=100)
    label: Optional[str] = None
    type: TemplateFieldType = TemplateFieldType.TEXT
    required: bool = False
    options: Optional[List[str]] = None
    default_value: Optional[Any] = None


class TemplateCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    fields: List[TemplateField] = Field(default_factory=list)
    file_url: Optional[str] = None
    applicable_positions: List[str] = Field(default_factory=list)
    applicable_contract_types: List[ContractType] = Field(default_factory=list)
    version: Optional[str] = Field(None, max_length=20)
    content: Optional[str] = None
    is_active: bool = True

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        if not v.strip():
            raise ValueError('Template name cannot be blank')
        return v.strip()


class TemplateUpdateRequest(BaseModel):
    """Partial update; omitted fields are left unchanged"""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    fields: Optional[List[TemplateField]] = None
    file_url: Optional[str] = None
    applicable_positions: Optional[List[str]] = None
    applicable_contract_types: Optional[List[ContractType]] = None
    version: Optional[str] = Field(None, max_length=20)
    content: Optional[str] = None
    is_active: Optional[bool] = None


class TemplateResponse(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    fields: List[TemplateField] = Field(default_factory=list)
    file_url: Optional[str] = None
    applicable_positions: List[str] = Field(default_factory=list)
    applicable_contract_types: List[str] = Field(default_factory=list)
    version: Optional[str] = None
    content: Optional[str] = None
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
