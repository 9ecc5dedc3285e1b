"""Evolution repository - Database operations for evolutions"""

from datetime import date
from typing import Optional

from sqlalchemy.orm import Session

from ...models import Evolution


class EvolutionRepository:
    """Repository for evolution database operations"""

    @staticmethod
    def get_evolutions(
        db: Session,
        user_id: int,
        patient_id: Optional[int] = None,
        clinic_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        ascending: bool = True,
        limit: Optional[int] = None,
    ) -> list[Evolution]:
        """Get evolutions for a user; date bounds are inclusive"""
        query = db.query(Evolution).filter(Evolution.user_id == user_id)

        if patient_id is not None:
            query = query.filter(Evolution.patient_id == patient_id)
        if clinic_id is not None:
            query = query.filter(Evolution.clinic_id == clinic_id)
        if start_date:
            query = query.filter(Evolution.date >= start_date)
        if end_date:
            query = query.filter(Evolution.date <= end_date)

        if ascending:
            query = query.order_by(Evolution.date.asc(), Evolution.id.asc())
        else:
            query = query.order_by(Evolution.date.desc(), Evolution.id.desc())

        if limit:
            query = query.limit(limit)

        return query.all()

    @staticmethod
    def get_evolution_by_id(db: Session, evolution_id: int, user_id: int) -> Optional[Evolution]:
        return (
            db.query(Evolution)
            .filter(Evolution.id == evolution_id, Evolution.user_id == user_id)
            .first()
        )

    @staticmethod
    def create_evolution(db: Session, user_id: int, **evolution_data) -> Evolution:
        evolution = Evolution(user_id=user_id, **evolution_data)
        db.add(evolution)
        db.commit()
        db.refresh(evolution)
        return evolution

    @staticmethod
    def update_evolution(db: Session, evolution: Evolution, **updates) -> Evolution:
        for key, value in updates.items():
            if hasattr(evolution, key):
                setattr(evolution, key, value)
        db.commit()
        db.refresh(evolution)
        return evolution

    @staticmethod
    def delete_evolution(db: Session, evolution: Evolution) -> None:
        db.delete(evolution)
        db.commit()
