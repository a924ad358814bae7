# dependencies.py
from fastapi import Request

from storage import TaskFileStorage


def get_storage(request: Request) -> TaskFileStorage:
    """
    Returns the storage configured on the application at startup.
    Each request then runs its own load-operate-save cycle against it.
    """
    return request.app.state.storage
