# storage.py
import json
import logging
import os
import stat
import tempfile
import threading
import weakref
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Union

from exceptions import CorruptStoreError, StorageIOError
from task_models import Task

logger = logging.getLogger(__name__)


class _LocationLock:
    """A mutex for one storage path. Plain thread locks cannot be weakly referenced."""
    __slots__ = ("_lock", "__weakref__")

    def __init__(self):
        self._lock = threading.Lock()

    def __enter__(self):
        self._lock.acquire()
        return self

    def __exit__(self, *exc_info):
        self._lock.release()


# One lock per resolved storage path, shared by every live TaskFileStorage in the
# process; entries disappear once no storage for that path remains
_location_locks: "weakref.WeakValueDictionary[Path, _LocationLock]" = weakref.WeakValueDictionary()
_location_locks_guard = threading.Lock()


def _lock_for(path: Path) -> _LocationLock:
    key = path.resolve()
    with _location_locks_guard:
        lock = _location_locks.get(key)
        if lock is None:
            lock = _LocationLock()
            _location_locks[key] = lock
        return lock


def _target_mode(path: Path) -> int:
    """Permission bits the saved file should carry: the current ones, or the umask default for a new file."""
    try:
        return stat.S_IMODE(os.stat(path).st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


class TaskFileStorage:
    """
    Reads and writes the whole task collection as a JSON array in a single file.
    A missing file is the same as an empty collection.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._lock = _lock_for(self.path)

    def __repr__(self) -> str:
        return f"TaskFileStorage({str(self.path)!r})"

    def load(self) -> List[Task]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug("Tasks file %s does not exist yet, starting empty", self.path)
            return []
        except UnicodeDecodeError as e:
            raise CorruptStoreError(self.path, f"not valid UTF-8 ({e})") from e
        except OSError as e:
            raise StorageIOError(self.path, e.strerror or str(e)) from e

        if not raw.strip():
            return []

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.error("Tasks file %s is not valid JSON: %s", self.path, e)
            raise CorruptStoreError(self.path, f"invalid JSON ({e})") from e

        if data is None:
            return []
        if not isinstance(data, list):
            raise CorruptStoreError(self.path, f"expected a JSON array, got {type(data).__name__}")

        tasks = []
        for position, entry in enumerate(data):
            try:
                tasks.append(Task.from_dict(entry))
            except KeyError as e:
                raise CorruptStoreError(self.path, f"task #{position} is missing field {e}") from e
            except (TypeError, ValueError) as e:
                raise CorruptStoreError(self.path, f"task #{position}: {e}") from e

        seen = set()
        for task in tasks:
            if task.id in seen:
                logger.warning("Tasks file %s contains duplicate id %s", self.path, task.id)
            seen.add(task.id)

        logger.debug("Loaded %d tasks from %s", len(tasks), self.path)
        return tasks

    def save(self, tasks: List[Task]) -> None:
        """
        Writes the collection to a temporary file next to the target and moves
        it into place, so readers never observe a half-written file.
        """
        payload = json.dumps([task.to_dict() for task in tasks], indent=2, ensure_ascii=False)
        directory = self.path.parent
        tmp_name = None
        try:
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=directory,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                delete=False,
            ) as tmp:
                tmp_name = tmp.name
                tmp.write(payload)
                tmp.flush()
                os.fsync(tmp.fileno())
            # temporary files are created 0600; keep the target readable as before
            os.chmod(tmp_name, _target_mode(self.path))
            os.replace(tmp_name, self.path)
        except OSError as e:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StorageIOError(self.path, e.strerror or str(e)) from e
        logger.debug("Saved %d tasks to %s", len(tasks), self.path)

    def initialize(self) -> None:
        if not self.path.exists():
            self.save([])
            logger.info("Created empty tasks file %s", self.path)

    @contextmanager
    def transaction(self) -> Iterator[List[Task]]:
        """
        One load-operate-save cycle. The yielded list is written back only when
        the block finishes without raising.
        """
        with self._lock:
            tasks = self.load()
            yield tasks
            self.save(tasks)
