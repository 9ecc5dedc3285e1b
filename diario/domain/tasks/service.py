"""Task service - Business logic for the professional's to-do list"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import Task, User
from ..patients.repository import PatientRepository
from .repository import TaskRepository
from .schemas import TaskCreate, TaskUpdate

logger = logging.getLogger(__name__)


class TaskService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = TaskRepository()
        self.patient_repo = PatientRepository()

    def _check_patient(self, patient_id: Optional[int], user: User) -> None:
        if patient_id is None:
            return
        if not self.patient_repo.get_patient_by_id(self.db, patient_id, user.id):
            raise HTTPException(status_code=404, detail="Patient not found")

    def get_tasks(
        self, user: User, completed: Optional[bool] = None, patient_id: Optional[int] = None
    ) -> list[Task]:
        return self.repo.get_tasks(self.db, user.id, completed, patient_id)

    def get_task(self, task_id: int, user: User) -> Task:
        task = self.repo.get_task_by_id(self.db, task_id, user.id)
        if not task:
            raise HTTPException(status_code=404, detail="Task not found")
        return task

    def create_task(self, data: TaskCreate, user: User) -> Task:
        self._check_patient(data.patient_id, user)
        return self.repo.create_task(self.db, user.id, **data.model_dump())

    def update_task(self, task_id: int, data: TaskUpdate, user: User) -> Task:
        task = self.get_task(task_id, user)
        updates = data.model_dump(exclude_unset=True)
        for field in ("title", "completed"):
            if field in updates and updates[field] is None:
                del updates[field]
        if "patient_id" in updates:
            self._check_patient(updates["patient_id"], user)
        return self.repo.update_task(self.db, task, **updates)

    def toggle_task(self, task_id: int, user: User) -> Task:
        task = self.get_task(task_id, user)
        return self.repo.update_task(self.db, task, completed=not task.completed)

    def delete_task(self, task_id: int, user: User) -> dict:
        task = self.get_task(task_id, user)
        self.repo.delete_task(self.db, task)
        return {"message": "Task deleted"}
