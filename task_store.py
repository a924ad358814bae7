# task_store.py
"""
In-memory task operations.

Every function works on a list of tasks owned by the caller for the length of
one load-operate-save cycle. Nothing here touches the filesystem.
"""
import logging
import uuid
from dataclasses import dataclass
from typing import List, Optional

from exceptions import InvalidInputError, TaskNotFoundError
from task_models import ZERO_TIME, Task, now

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TaskFilter:
    is_complete: Optional[bool] = None
    content: Optional[str] = None

    def is_empty(self) -> bool:
        return self.is_complete is None and not (self.content or "").split()


def create_task(content: str) -> Task:
    """Builds a new, incomplete task. It is not added to any collection."""
    return Task(
        id=str(uuid.uuid4()),
        content=content,
        create_date=now(),
        complete_date=ZERO_TIME,
        is_complete=False,
    )


def append_task(tasks: List[Task], task: Task) -> None:
    tasks.append(task)


def _index_of(tasks: List[Task], task_id: str) -> int:
    for index, task in enumerate(tasks):
        if task.id == task_id:
            return index
    logger.debug("Task %s not found among %d tasks", task_id, len(tasks))
    raise TaskNotFoundError(task_id)


def find_task(tasks: List[Task], task_id: str) -> Task:
    return tasks[_index_of(tasks, task_id)]


def update_task_content(tasks: List[Task], task_id: str, content: str) -> Task:
    task = find_task(tasks, task_id)
    task.content = content
    return task


def complete_task(tasks: List[Task], task_id: str) -> Task:
    """
    Marks a task complete. The completion date is refreshed on every call,
    including for tasks that are already complete.
    """
    task = find_task(tasks, task_id)
    task.is_complete = True
    task.complete_date = now()
    return task


def remove_task(tasks: List[Task], task_id: str) -> Task:
    return tasks.pop(_index_of(tasks, task_id))


def _matches(task: Task, task_filter: TaskFilter) -> bool:
    if task_filter.is_complete is not None and task.is_complete != task_filter.is_complete:
        return False
    if task_filter.content:
        haystack = task.content.lower()
        # every token has to appear somewhere in the content
        for token in task_filter.content.split():
            if token.lower() not in haystack:
                return False
    return True


def filter_tasks(tasks: List[Task], task_filter: Optional[TaskFilter] = None) -> List[Task]:
    """Returns a new list with the tasks matching every predicate of the filter, in order."""
    if task_filter is None or task_filter.is_empty():
        return list(tasks)
    return [task for task in tasks if _matches(task, task_filter)]


def parse_bool_flag(raw: str, name: str) -> bool:
    """Accepts exactly 'true' or 'false'; used to validate filter input at the boundary."""
    if raw == "true":
        return True
    if raw == "false":
        return False
    raise InvalidInputError(f"{name} must be 'true' or 'false'")
