from datetime import datetime
from enum import Enum
from typing import Any, List, Optional
from pydantic import BaseModel, ConfigDict, Field


class TaskStatus(str, Enum):
    TODO = "todo"
    IN_PROGRESS = "in-progress"
    DONE = "done"


class TaskPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


# Request bodies. Values are kept loose here so the service can answer
# with its own validation messages instead of a schema error.
class TaskCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = None
    priority: Optional[str] = None
    category: Optional[str] = None
    due_date: Optional[Any] = Field(None, alias="dueDate")


class TaskUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = None
    status: Optional[str] = None
    priority: Optional[str] = None
    category: Optional[str] = None
    due_date: Optional[Any] = Field(None, alias="dueDate")


class TaskStatusUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    new_status: Optional[str] = Field(None, alias="newStatus")


# Responses
class OwnerResponse(BaseModel):
    id: str
    name: str


class TaskResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    status: TaskStatus
    priority: TaskPriority
    category: str
    due_date: datetime = Field(..., alias="dueDate")
    created_by: OwnerResponse = Field(..., alias="createdBy")


class MessageResponse(BaseModel):
    message: str


class TaskEnvelope(MessageResponse):
    task: TaskResponse


class TaskListEnvelope(MessageResponse):
    tasks: List[TaskResponse]
