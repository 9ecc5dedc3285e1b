"""Profile service - the professional's own data and stamps"""

import logging

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import Stamp, User
from .repository import ProfileRepository
from .schemas import ProfileUpdate, StampCreate, StampUpdate

logger = logging.getLogger(__name__)


class ProfileService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = ProfileRepository()

    def update_profile(self, user: User, data: ProfileUpdate) -> User:
        updates = data.model_dump(exclude_unset=True)
        user = self.repo.update_user(self.db, user, **updates)
        logger.info(f"👤 Profile updated for user {user.id}")
        return user

    def get_stamps(self, user: User) -> list[Stamp]:
        return self.repo.get_stamps(self.db, user.id)

    def get_stamp(self, stamp_id: int, user: User) -> Stamp:
        stamp = self.repo.get_stamp_by_id(self.db, stamp_id, user.id)
        if not stamp:
            raise HTTPException(status_code=404, detail="Stamp not found")
        return stamp

    def create_stamp(self, data: StampCreate, user: User) -> Stamp:
        if data.is_default:
            self.repo.clear_default_stamps(self.db, user.id)
        return self.repo.create_stamp(self.db, user.id, **data.model_dump())

    def update_stamp(self, stamp_id: int, data: StampUpdate, user: User) -> Stamp:
        stamp = self.get_stamp(stamp_id, user)
        updates = data.model_dump(exclude_unset=True)
        for field in ("name", "clinical_area", "is_default"):
            if field in updates and updates[field] is None:
                del updates[field]
        if updates.get("is_default"):
            self.repo.clear_default_stamps(self.db, user.id, keep_id=stamp.id)
        return self.repo.update_stamp(self.db, stamp, **updates)

    def delete_stamp(self, stamp_id: int, user: User) -> dict:
        stamp = self.get_stamp(stamp_id, user)
        self.repo.delete_stamp(self.db, stamp)
        return {"message": "Stamp deleted"}
