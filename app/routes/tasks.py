from typing import Optional
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from ..auth import get_current_user_id
from ..db import get_db
from ..schemas import (
    MessageResponse,
    TaskCreate,
    TaskEnvelope,
    TaskListEnvelope,
    TaskStatusUpdate,
    TaskUpdate,
)
from ..services.task_service import TaskService

router = APIRouter(prefix="/tasks", tags=["tasks"])


def get_task_service(db: AsyncSession = Depends(get_db)) -> TaskService:
    return TaskService(db)


@router.get("", response_model=TaskListEnvelope)
async def list_tasks(
    user_id: Optional[str] = Depends(get_current_user_id),
    service: TaskService = Depends(get_task_service)
):
    """Get all tasks created by the caller"""
    tasks = await service.list_tasks(user_id)
    return {"message": "Tasks retrieved successfully", "tasks": tasks}


@router.post("", response_model=TaskEnvelope, status_code=status.HTTP_201_CREATED)
async def create_task(
    task: TaskCreate,
    user_id: Optional[str] = Depends(get_current_user_id),
    service: TaskService = Depends(get_task_service)
):
    """Create a new task"""
    created = await service.create_task(user_id, task)
    return {"message": "Task created successfully", "task": created}


@router.get("/{task_id}", response_model=TaskEnvelope)
async def get_task(
    task_id: str,
    user_id: Optional[str] = Depends(get_current_user_id),
    service: TaskService = Depends(get_task_service)
):
    """Get a specific task by ID"""
    task = await service.get_task(user_id, task_id)
    return {"message": "Task retrieved successfully", "task": task}


@router.delete("/{task_id}", response_model=MessageResponse)
async def delete_task(
    task_id: str,
    user_id: Optional[str] = Depends(get_current_user_id),
    service: TaskService = Depends(get_task_service)
):
    """Delete a specific task"""
    await service.delete_task(user_id, task_id)
    return {"message": "Task deleted successfully"}


@router.patch("/{task_id}", response_model=TaskEnvelope)
async def update_task(
    task_id: str,
    task_update: TaskUpdate,
    user_id: Optional[str] = Depends(get_current_user_id),
    service: TaskService = Depends(get_task_service)
):
    """Update a specific task"""
    task = await service.update_task(user_id, task_id, task_update)
    return {"message": "Task updated successfully", "task": task}


@router.patch("/{task_id}/status", response_model=TaskEnvelope)
async def update_task_status(
    task_id: str,
    status_update: TaskStatusUpdate,
    user_id: Optional[str] = Depends(get_current_user_id),
    service: TaskService = Depends(get_task_service)
):
    """Change the status of a specific task"""
    task = await service.update_task_status(user_id, task_id, status_update.new_status)
    return {"message": "Task status updated successfully", "task": task}
