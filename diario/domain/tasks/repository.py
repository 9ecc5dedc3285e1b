"""Task repository - Database operations for tasks"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Task


class TaskRepository:
    @staticmethod
    def get_tasks(
        db: Session,
        user_id: int,
        completed: Optional[bool] = None,
        patient_id: Optional[int] = None,
    ) -> list[Task]:
        """Pending tasks first, newest first within each group"""
        query = db.query(Task).filter(Task.user_id == user_id)
        if completed is not None:
            query = query.filter(Task.completed == completed)
        if patient_id is not None:
            query = query.filter(Task.patient_id == patient_id)
        return query.order_by(Task.completed.asc(), Task.created_at.desc(), Task.id.desc()).all()

    @staticmethod
    def get_task_by_id(db: Session, task_id: int, user_id: int) -> Optional[Task]:
        return db.query(Task).filter(Task.id == task_id, Task.user_id == user_id).first()

    @staticmethod
    def create_task(db: Session, user_id: int, **task_data) -> Task:
        task = Task(user_id=user_id, **task_data)
        db.add(task)
        db.commit()
        db.refresh(task)
        return task

    @staticmethod
    def update_task(db: Session, task: Task, **updates) -> Task:
        for key, value in updates.items():
            if hasattr(task, key):
                setattr(task, key, value)
        db.commit()
        db.refresh(task)
        return task

    @staticmethod
    def delete_task(db: Session, task: Task) -> None:
        db.delete(task)
        db.commit()
