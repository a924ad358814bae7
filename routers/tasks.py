# routers/tasks.py
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel, Field, StrictBool, StrictStr, field_validator
from starlette.status import (
    HTTP_201_CREATED,
    HTTP_204_NO_CONTENT,
    HTTP_400_BAD_REQUEST,
    HTTP_404_NOT_FOUND,
)

from dependencies import get_storage
from exceptions import InvalidInputError, TaskNotFoundError
from storage import TaskFileStorage
from task_store import (
    TaskFilter,
    append_task,
    complete_task,
    create_task,
    filter_tasks,
    parse_bool_flag,
    remove_task,
    update_task_content,
)

logger = logging.getLogger(__name__)

# --- Router Setup ---
router = APIRouter(
    prefix="/tasks",
    tags=["Task Management"],
)

# --- Data Models ---
class TaskContentRequest(BaseModel):
    content: StrictStr = Field(..., min_length=1)

    @field_validator("content")
    @classmethod
    def content_not_blank(cls, value: str) -> str:
        # same rule as the CLI: whitespace alone is not a task
        if not value.strip():
            raise ValueError("task content must not be empty")
        return value

class CreateTaskRequest(TaskContentRequest):
    pass

class UpdateTaskRequest(TaskContentRequest):
    pass

class CompleteTaskRequest(BaseModel):
    isComplete: StrictBool

# --- Endpoints ---

@router.get("")
async def get_tasks(
    isComplete: Optional[str] = None,
    content: Optional[str] = None,
    storage: TaskFileStorage = Depends(get_storage),
):
    """List tasks, optionally filtered by completion state and content tokens."""
    try:
        is_complete = parse_bool_flag(isComplete, "isComplete") if isComplete else None
    except InvalidInputError as e:
        raise HTTPException(status_code=HTTP_400_BAD_REQUEST, detail=str(e))

    tasks = storage.load()
    task_filter = TaskFilter(is_complete=is_complete, content=content)
    return [task.to_dict() for task in filter_tasks(tasks, task_filter)]

@router.post("", status_code=HTTP_201_CREATED)
async def create(request: CreateTaskRequest, storage: TaskFileStorage = Depends(get_storage)):
    """Create a new task and append it to the list."""
    new_task = create_task(request.content)
    with storage.transaction() as tasks:
        append_task(tasks, new_task)
    logger.info("Created task %s", new_task.id)
    return new_task.to_dict()

@router.put("/{task_id}")
async def update(task_id: str, request: UpdateTaskRequest, storage: TaskFileStorage = Depends(get_storage)):
    """Replace the content of a task."""
    try:
        with storage.transaction() as tasks:
            task = update_task_content(tasks, task_id, request.content)
    except TaskNotFoundError as e:
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail=str(e))
    logger.info("Updated task %s", task_id)
    return task.to_dict()

@router.patch("/{task_id}")
async def complete(task_id: str, request: CompleteTaskRequest, storage: TaskFileStorage = Depends(get_storage)):
    """Mark a task as complete. Reopening a task is not supported."""
    if not request.isComplete:
        raise HTTPException(
            status_code=HTTP_400_BAD_REQUEST,
            detail="isComplete must be true; reopening a task is not supported",
        )
    try:
        with storage.transaction() as tasks:
            task = complete_task(tasks, task_id)
    except TaskNotFoundError as e:
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail=str(e))
    logger.info("Completed task %s", task_id)
    return task.to_dict()

@router.delete("/{task_id}", status_code=HTTP_204_NO_CONTENT)
async def delete_task(task_id: str, storage: TaskFileStorage = Depends(get_storage)):
    """Delete a task."""
    try:
        with storage.transaction() as tasks:
            remove_task(tasks, task_id)
    except TaskNotFoundError as e:
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail=str(e))
    logger.info("Deleted task %s", task_id)
    return Response(status_code=HTTP_204_NO_CONTENT)
