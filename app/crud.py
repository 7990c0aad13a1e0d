from typing import List, Optional, Tuple
from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from .models import Task, User

# A task joined with the user that created it
TaskView = Tuple[Task, User]


async def create_user(db: AsyncSession, name: str, user_id: Optional[str] = None) -> User:
    """Create a user that tasks can reference"""
    db_user = User(id=user_id, name=name) if user_id else User(name=name)
    db.add(db_user)
    await db.commit()
    await db.refresh(db_user)
    return db_user


async def get_user(db: AsyncSession, user_id: str) -> Optional[User]:
    """Get a user by ID"""
    result = await db.execute(select(User).filter(User.id == user_id))
    return result.scalar_one_or_none()


def _populated():
    return select(Task, User).join(User, Task.created_by == User.id)


async def get_tasks(db: AsyncSession, owner_id: str) -> List[TaskView]:
    """Get every task created by a user, joined with its creator"""
    result = await db.execute(_populated().filter(Task.created_by == owner_id))
    return [tuple(row) for row in result.all()]


async def get_owned_task(db: AsyncSession, task_id: str, owner_id: str) -> Optional[Task]:
    """Get a task by ID, only if it was created by the given user"""
    result = await db.execute(
        select(Task).filter(Task.id == task_id, Task.created_by == owner_id)
    )
    return result.scalar_one_or_none()


async def get_task_view(
    db: AsyncSession,
    task_id: str,
    owner_id: str
) -> Optional[TaskView]:
    """Get a task by ID joined with its creator, only if the owner matches"""
    result = await db.execute(
        _populated().filter(Task.id == task_id, Task.created_by == owner_id)
    )
    row = result.one_or_none()
    return tuple(row) if row else None


async def save_task(db: AsyncSession, task: Task) -> Task:
    """Insert or update a task"""
    db.add(task)
    await db.commit()
    await db.refresh(task)
    return task


async def delete_task(db: AsyncSession, task_id: str) -> bool:
    """Delete a task by ID"""
    result = await db.execute(delete(Task).where(Task.id == task_id))
    await db.commit()
    return result.rowcount > 0
