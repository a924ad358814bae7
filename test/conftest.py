import pytest
from pathlib import Path

from fastapi.testclient import TestClient

from config import Settings
from main import create_app
from storage import TaskFileStorage


@pytest.fixture
def tasks_file(tmp_path: Path) -> Path:
    """
    Path of a tasks file inside a per-test temporary directory.
    The file itself is not created, so every test starts from the first-run state.
    """
    return tmp_path / "tasks.json"


@pytest.fixture
def settings(tasks_file: Path) -> Settings:
    return Settings(tasks_file=tasks_file)


@pytest.fixture
def storage(tasks_file: Path) -> TaskFileStorage:
    return TaskFileStorage(tasks_file)


@pytest.fixture
def client(settings: Settings):
    # 'with' runs the lifespan, which creates the empty tasks file
    with TestClient(create_app(settings)) as test_client:
        yield test_client
