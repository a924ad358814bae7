# config.py
"""
Settings loaded from environment variables, with an optional .env file.

The storage location is part of the settings object and is handed to the
storage layer explicitly; nothing keeps a module-level tasks path.
"""
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import find_dotenv, load_dotenv

ENV_PREFIX = "TODO"

DEFAULT_TASKS_FILE = "tasks.json"
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8000

logger = logging.getLogger(__name__)


def _k(suffix: str) -> str:
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return value.strip()


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring invalid %s=%r, using %d", name, raw, default)
        return default


@dataclass(frozen=True)
class Settings:
    tasks_file: Path = Path(DEFAULT_TASKS_FILE)
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    log_level: str = "INFO"
    log_file: Optional[Path] = None


def get_settings(load_env_file: bool = True) -> Settings:
    if load_env_file:
        load_dotenv(find_dotenv(usecwd=True), override=False)

    log_file = os.getenv(_k("LOG_FILE"))
    return Settings(
        tasks_file=Path(_env(_k("TASKS_FILE"), DEFAULT_TASKS_FILE)).expanduser(),
        host=_env(_k("HOST"), DEFAULT_HOST),
        port=_env_int(_k("PORT"), DEFAULT_PORT),
        log_level=_env(_k("LOG_LEVEL"), "INFO").upper(),
        log_file=Path(log_file).expanduser() if log_file and log_file.strip() else None,
    )
