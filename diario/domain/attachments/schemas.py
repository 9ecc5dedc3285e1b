"""Attachment domain schemas"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator

from ...models import ATTACHMENT_PARENT_TYPES
from ...shared.validators import validate_choice

MAX_FILE_SIZE = 20 * 1024 * 1024  # 20MB

DANGEROUS_PATH_PARTS = ("..", "\\", "<", ">", ":", '"', "|", "?", "*")


class AttachmentCreate(BaseModel):
    """Registers an object already uploaded to storage"""

    parent_id: int
    parent_type: str
    name: str
    file_path: str
    file_type: str
    file_size: Optional[int] = None

    @field_validator("parent_type")
    @classmethod
    def check_parent_type(cls, v):
        return validate_choice(v, ATTACHMENT_PARENT_TYPES, "parent_type")

    @field_validator("file_path")
    @classmethod
    def check_file_path(cls, v: str) -> str:
        v = v.strip().lstrip("/")
        if not v:
            raise ValueError("file_path is required")
        for part in DANGEROUS_PATH_PARTS:
            if part in v:
                raise ValueError(f"Invalid file_path - contains dangerous character '{part}'")
        if len(v) > 500:
            raise ValueError("file_path too long - maximum 500 characters")
        return v

    @field_validator("name")
    @classmethod
    def check_name(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("name is required")
        if len(v) > 255:
            raise ValueError("name too long - maximum 255 characters")
        return v.strip()

    @field_validator("file_size")
    @classmethod
    def check_file_size(cls, v):
        if v is not None and (v < 0 or v > MAX_FILE_SIZE):
            raise ValueError("file_size exceeds 20MB limit")
        return v


class AttachmentResponse(BaseModel):
    id: int
    parent_id: int
    parent_type: str
    name: str
    file_path: str
    file_type: str
    file_size: Optional[int] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class AttachmentUrlResponse(BaseModel):
    url: str
    expires_in: int
