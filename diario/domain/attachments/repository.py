"""Attachment repository - Database operations for attachment metadata"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Attachment


class AttachmentRepository:
    @staticmethod
    def get_attachments(
        db: Session,
        user_id: int,
        parent_type: Optional[str] = None,
        parent_id: Optional[int] = None,
    ) -> list[Attachment]:
        query = db.query(Attachment).filter(Attachment.user_id == user_id)
        if parent_type:
            query = query.filter(Attachment.parent_type == parent_type)
        if parent_id is not None:
            query = query.filter(Attachment.parent_id == parent_id)
        return query.order_by(Attachment.created_at.desc(), Attachment.id.desc()).all()

    @staticmethod
    def get_attachment_by_id(db: Session, attachment_id: int, user_id: int) -> Optional[Attachment]:
        return (
            db.query(Attachment)
            .filter(Attachment.id == attachment_id, Attachment.user_id == user_id)
            .first()
        )

    @staticmethod
    def create_attachment(db: Session, user_id: int, **attachment_data) -> Attachment:
        attachment = Attachment(user_id=user_id, **attachment_data)
        db.add(attachment)
        db.commit()
        db.refresh(attachment)
        return attachment

    @staticmethod
    def delete_attachment(db: Session, attachment: Attachment) -> None:
        db.delete(attachment)
        db.commit()
