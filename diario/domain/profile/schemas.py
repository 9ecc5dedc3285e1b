"""Profile and stamp schemas"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator

from ...shared.validators import validate_br_phone


class ProfileUpdate(BaseModel):
    name: Optional[str] = None
    phone: Optional[str] = None
    professional_id: Optional[str] = None
    avatar_url: Optional[str] = None

    @field_validator("phone")
    @classmethod
    def check_phone(cls, v):
        return validate_br_phone(v)


class ProfileResponse(BaseModel):
    id: int
    email: Optional[str] = None
    name: Optional[str] = None
    phone: Optional[str] = None
    professional_id: Optional[str] = None
    avatar_url: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class StampCreate(BaseModel):
    name: str
    clinical_area: str
    stamp_image: Optional[str] = None
    signature_image: Optional[str] = None
    is_default: bool = False

    @field_validator("name", "clinical_area")
    @classmethod
    def check_required(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("field is required")
        return v.strip()


class StampUpdate(BaseModel):
    name: Optional[str] = None
    clinical_area: Optional[str] = None
    stamp_image: Optional[str] = None
    signature_image: Optional[str] = None
    is_default: Optional[bool] = None


class StampResponse(BaseModel):
    id: int
    name: str
    clinical_area: str
    stamp_image: Optional[str] = None
    signature_image: Optional[str] = None
    is_default: Optional[bool] = None

    class Config:
        from_attributes = True
