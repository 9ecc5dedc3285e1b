"""Attachment router - FastAPI endpoints for attachment metadata"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import User
from .schemas import AttachmentCreate, AttachmentResponse, AttachmentUrlResponse
from .service import AttachmentService

router = APIRouter(prefix="/attachments", tags=["Attachments"])


def get_attachment_service(db: Session = Depends(get_db)) -> AttachmentService:
    """Dependency injection for AttachmentService"""
    return AttachmentService(db)


@router.get("", response_model=list[AttachmentResponse])
def get_attachments(
    parent_type: Optional[str] = Query(None),
    parent_id: Optional[int] = Query(None),
    current_user: User = Depends(get_current_user),
    service: AttachmentService = Depends(get_attachment_service),
):
    return service.get_attachments(current_user, parent_type, parent_id)


@router.post("", response_model=AttachmentResponse, status_code=201)
def create_attachment(
    data: AttachmentCreate,
    current_user: User = Depends(get_current_user),
    service: AttachmentService = Depends(get_attachment_service),
):
    return service.create_attachment(data, current_user)


@router.get("/{attachment_id}/url", response_model=AttachmentUrlResponse)
def get_attachment_url(
    attachment_id: int,
    current_user: User = Depends(get_current_user),
    service: AttachmentService = Depends(get_attachment_service),
):
    """Presigned download URL for a stored attachment"""
    return service.get_download_url(attachment_id, current_user)


@router.delete("/{attachment_id}")
def delete_attachment(
    attachment_id: int,
    current_user: User = Depends(get_current_user),
    service: AttachmentService = Depends(get_attachment_service),
):
    """Delete the metadata record and the stored object"""
    return service.delete_attachment(attachment_id, current_user)
