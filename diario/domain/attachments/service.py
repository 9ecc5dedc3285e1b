"""Attachment service - metadata records for files kept in object storage"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ... import storage
from ...models import Attachment, Clinic, Evolution, Patient, Task, User
from .repository import AttachmentRepository
from .schemas import AttachmentCreate

logger = logging.getLogger(__name__)

PARENT_MODELS = {
    "evolution": Evolution,
    "patient": Patient,
    "clinic": Clinic,
    "task": Task,
}


class AttachmentService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = AttachmentRepository()

    def get_attachments(
        self, user: User, parent_type: Optional[str] = None, parent_id: Optional[int] = None
    ) -> list[Attachment]:
        if parent_type and parent_type not in PARENT_MODELS:
            raise HTTPException(status_code=400, detail="Invalid parent_type")
        return self.repo.get_attachments(self.db, user.id, parent_type, parent_id)

    def get_attachment(self, attachment_id: int, user: User) -> Attachment:
        attachment = self.repo.get_attachment_by_id(self.db, attachment_id, user.id)
        if not attachment:
            raise HTTPException(status_code=404, detail="Attachment not found")
        return attachment

    def create_attachment(self, data: AttachmentCreate, user: User) -> Attachment:
        """
        Register an uploaded object.

        Objects live under the owner's folder (``<auth_uid>/...``) and must
        hang off a record the user owns.
        """
        if not data.file_path.startswith(f"{user.auth_uid}/"):
            logger.warning(f"❌ User {user.id} tried to register foreign path: {data.file_path}")
            raise HTTPException(status_code=403, detail="File path outside of your storage folder")

        model = PARENT_MODELS[data.parent_type]
        parent = (
            self.db.query(model)
            .filter(model.id == data.parent_id, model.user_id == user.id)
            .first()
        )
        if not parent:
            raise HTTPException(status_code=404, detail=f"{data.parent_type.capitalize()} not found")

        attachment = self.repo.create_attachment(self.db, user.id, **data.model_dump())
        logger.info(f"📎 Attachment {attachment.id} registered for {data.parent_type} {data.parent_id}")
        return attachment

    def get_download_url(self, attachment_id: int, user: User) -> dict:
        attachment = self.get_attachment(attachment_id, user)
        try:
            url = storage.generate_presigned_url(attachment.file_path)
        except Exception:
            raise HTTPException(status_code=502, detail="Failed to generate download URL")
        return {"url": url, "expires_in": storage.PRESIGNED_URL_EXPIRATION}

    def delete_attachment(self, attachment_id: int, user: User) -> dict:
        attachment = self.get_attachment(attachment_id, user)
        try:
            storage.delete_object(attachment.file_path)
        except Exception:
            raise HTTPException(status_code=502, detail="Failed to delete stored file")
        self.repo.delete_attachment(self.db, attachment)
        return {"message": "Attachment deleted"}
