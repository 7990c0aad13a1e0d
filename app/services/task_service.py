"""Task operations scoped to the authenticated user.

Every operation receives the caller's user id explicitly. Reads and writes
only ever touch tasks whose ``created_by`` matches that id, and every task
returned is enriched with its creator's ``{id, name}``.
"""
import logging
from contextlib import asynccontextmanager
from typing import List, Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from .. import crud
from ..exceptions import InternalFault, NotFound, Unauthenticated, ValidationError
from ..models import Task
from ..schemas import (
    OwnerResponse,
    TaskCreate,
    TaskPriority,
    TaskResponse,
    TaskStatus,
    TaskUpdate,
)
from ..utils import (
    from_storage_datetime,
    parse_choice,
    parse_due_date,
    parse_task_id,
    to_storage_datetime,
)

logger = logging.getLogger(__name__)


def to_response(view: crud.TaskView) -> TaskResponse:
    """Shape a task joined with its creator into the public representation"""
    task, owner = view
    return TaskResponse(
        id=task.id,
        title=task.title,
        status=task.status,
        priority=task.priority,
        category=task.category,
        due_date=from_storage_datetime(task.due_date),
        created_by=OwnerResponse(id=owner.id, name=owner.name),
    )


class TaskService:
    def __init__(self, db: AsyncSession):
        self.db = db

    @asynccontextmanager
    async def _store(self, action: str):
        try:
            yield
        except SQLAlchemyError as e:
            logger.exception("Database error while %s", action)
            await self.db.rollback()
            raise InternalFault() from e

    @staticmethod
    def _require_user(user_id: Optional[str]) -> str:
        if not user_id:
            raise Unauthenticated()
        return user_id

    @staticmethod
    def _require_task_id(task_id: str) -> str:
        parsed = parse_task_id(task_id)
        if parsed is None:
            raise ValidationError("Invalid format for task ID")
        return parsed

    async def _view(self, task_id: str, user_id: str) -> TaskResponse:
        async with self._store("loading task"):
            view = await crud.get_task_view(self.db, task_id, user_id)
        if view is None:
            # The task row exists, so only its creator failed to join
            logger.error("Task %s has no resolvable creator", task_id)
            raise InternalFault()
        return to_response(view)

    async def _owned(self, task_id: Optional[str], user_id: str) -> Task:
        if task_id is None:
            raise NotFound()
        async with self._store("looking up task"):
            task = await crud.get_owned_task(self.db, task_id, user_id)
        if task is None:
            raise NotFound()
        return task

    async def list_tasks(self, user_id: Optional[str]) -> List[TaskResponse]:
        user_id = self._require_user(user_id)
        async with self._store("listing tasks"):
            views = await crud.get_tasks(self.db, user_id)
        return [to_response(view) for view in views]

    async def create_task(self, user_id: Optional[str], payload: TaskCreate) -> TaskResponse:
        user_id = self._require_user(user_id)

        if not payload.title or not payload.category or not payload.due_date:
            raise ValidationError("Missing required fields: title, category, or dueDate")

        priority = TaskPriority.MEDIUM
        if payload.priority:
            priority = parse_choice(TaskPriority, payload.priority)
            if priority is None:
                raise ValidationError("Invalid priority")

        due_date = parse_due_date(payload.due_date)
        if due_date is None:
            raise ValidationError("Invalid due date")

        task = Task(
            title=payload.title,
            status=TaskStatus.TODO.value,
            priority=priority.value,
            category=payload.category,
            due_date=to_storage_datetime(due_date),
            created_by=user_id,
        )
        async with self._store("creating task"):
            owner = await crud.get_user(self.db, user_id)
            if owner is None:
                logger.error("Cannot create task for unknown user %s", user_id)
                raise InternalFault()
            task = await crud.save_task(self.db, task)

        logger.info("User %s created task %s", user_id, task.id)
        return await self._view(task.id, user_id)

    async def get_task(self, user_id: Optional[str], task_id: str) -> TaskResponse:
        user_id = self._require_user(user_id)
        task = await self._owned(self._require_task_id(task_id), user_id)
        return await self._view(task.id, user_id)

    async def delete_task(self, user_id: Optional[str], task_id: str) -> None:
        user_id = self._require_user(user_id)
        task = await self._owned(self._require_task_id(task_id), user_id)
        async with self._store("deleting task"):
            await crud.delete_task(self.db, task.id)
        logger.info("User %s deleted task %s", user_id, task.id)

    async def update_task(
        self,
        user_id: Optional[str],
        task_id: str,
        payload: TaskUpdate
    ) -> TaskResponse:
        """Apply the fields that are present and truthy.

        A malformed id matches no task and is reported as not found. Empty
        values are skipped, so a field cannot be cleared through an update.
        """
        user_id = self._require_user(user_id)
        task = await self._owned(parse_task_id(task_id), user_id)

        due_date = None
        if payload.due_date:
            due_date = parse_due_date(payload.due_date)
            if due_date is None:
                raise ValidationError("Invalid due date")

        status = None
        if payload.status:
            status = parse_choice(TaskStatus, payload.status)
            if status is None:
                raise ValidationError("Invalid status")

        priority = None
        if payload.priority:
            priority = parse_choice(TaskPriority, payload.priority)
            if priority is None:
                raise ValidationError("Invalid priority")

        updates = {
            "title": payload.title,
            "status": status.value if status else None,
            "priority": priority.value if priority else None,
            "category": payload.category,
            "due_date": to_storage_datetime(due_date) if due_date else None,
        }
        for field, value in updates.items():
            if value:
                setattr(task, field, value)

        async with self._store("updating task"):
            task = await crud.save_task(self.db, task)

        logger.info("User %s updated task %s", user_id, task.id)
        return await self._view(task.id, user_id)

    async def update_task_status(
        self,
        user_id: Optional[str],
        task_id: str,
        new_status: Optional[str]
    ) -> TaskResponse:
        user_id = self._require_user(user_id)

        if not new_status:
            raise ValidationError("Missing required fields: newStatus")

        task_id = self._require_task_id(task_id)

        status = parse_choice(TaskStatus, new_status)
        if status is None:
            raise ValidationError("Invalid status")

        task = await self._owned(task_id, user_id)
        task.status = status.value
        async with self._store("updating task status"):
            task = await crud.save_task(self.db, task)

        logger.info("User %s moved task %s to %s", user_id, task.id, status.value)
        return await self._view(task.id, user_id)
