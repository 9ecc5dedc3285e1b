"""Profile repository - Database operations for the user profile and stamps"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Evolution, Stamp, User


class ProfileRepository:
    @staticmethod
    def update_user(db: Session, user: User, **updates) -> User:
        for key, value in updates.items():
            if hasattr(user, key):
                setattr(user, key, value)
        db.commit()
        db.refresh(user)
        return user

    @staticmethod
    def get_stamps(db: Session, user_id: int) -> list[Stamp]:
        return (
            db.query(Stamp)
            .filter(Stamp.user_id == user_id)
            .order_by(Stamp.is_default.desc(), Stamp.name)
            .all()
        )

    @staticmethod
    def get_stamp_by_id(db: Session, stamp_id: int, user_id: int) -> Optional[Stamp]:
        return db.query(Stamp).filter(Stamp.id == stamp_id, Stamp.user_id == user_id).first()

    @staticmethod
    def clear_default_stamps(db: Session, user_id: int, keep_id: Optional[int] = None) -> None:
        """Unset the default flag on every stamp of the user except ``keep_id``"""
        query = db.query(Stamp).filter(Stamp.user_id == user_id, Stamp.is_default == True)  # noqa: E712
        if keep_id is not None:
            query = query.filter(Stamp.id != keep_id)
        query.update({Stamp.is_default: False}, synchronize_session=False)

    @staticmethod
    def create_stamp(db: Session, user_id: int, **stamp_data) -> Stamp:
        stamp = Stamp(user_id=user_id, **stamp_data)
        db.add(stamp)
        db.commit()
        db.refresh(stamp)
        return stamp

    @staticmethod
    def update_stamp(db: Session, stamp: Stamp, **updates) -> Stamp:
        for key, value in updates.items():
            if hasattr(stamp, key):
                setattr(stamp, key, value)
        db.commit()
        db.refresh(stamp)
        return stamp

    @staticmethod
    def delete_stamp(db: Session, stamp: Stamp) -> None:
        db.query(Evolution).filter(Evolution.stamp_id == stamp.id).update(
            {Evolution.stamp_id: None}, synchronize_session=False
        )
        db.delete(stamp)
        db.commit()
