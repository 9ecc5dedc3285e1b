"""Task router - FastAPI endpoints for tasks"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import User
from .schemas import TaskCreate, TaskResponse, TaskUpdate
from .service import TaskService

router = APIRouter(prefix="/tasks", tags=["Tasks"])


def get_task_service(db: Session = Depends(get_db)) -> TaskService:
    """Dependency injection for TaskService"""
    return TaskService(db)


@router.get("", response_model=list[TaskResponse])
def get_tasks(
    completed: Optional[bool] = Query(None),
    patient_id: Optional[int] = Query(None),
    current_user: User = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
):
    return service.get_tasks(current_user, completed, patient_id)


@router.post("", response_model=TaskResponse, status_code=201)
def create_task(
    data: TaskCreate,
    current_user: User = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
):
    return service.create_task(data, current_user)


@router.put("/{task_id}", response_model=TaskResponse)
def update_task(
    task_id: int,
    data: TaskUpdate,
    current_user: User = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
):
    return service.update_task(task_id, data, current_user)


@router.post("/{task_id}/toggle", response_model=TaskResponse)
def toggle_task(
    task_id: int,
    current_user: User = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
):
    """Flip a task between pending and completed"""
    return service.toggle_task(task_id, current_user)


@router.delete("/{task_id}")
def delete_task(
    task_id: int,
    current_user: User = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
):
    return service.delete_task(task_id, current_user)
