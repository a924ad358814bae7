# exceptions.py
from pathlib import Path
from typing import Union


class TodoError(Exception):
    """Base class for every error raised by the task service."""


class TaskNotFoundError(TodoError, LookupError):
    def __init__(self, task_id: str):
        super().__init__(f"task with id {task_id} not found")
        self.task_id = task_id


class InvalidInputError(TodoError, ValueError):
    """Malformed or missing caller input, rejected before any mutation."""


class CorruptStoreError(TodoError):
    def __init__(self, path: Union[str, Path], reason: str):
        super().__init__(f"tasks file {path} is corrupt: {reason}")
        self.path = Path(path)
        self.reason = reason


class StorageIOError(TodoError):
    def __init__(self, path: Union[str, Path], reason: str):
        super().__init__(f"cannot access tasks file {path}: {reason}")
        self.path = Path(path)
        self.reason = reason
