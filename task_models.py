# task_models.py
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict

# Go-style zero time, used as "not completed yet"
ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)

_RFC3339_RE = re.compile(
    r"^(\d{4}-\d{2}-\d{2})[Tt](\d{2}:\d{2}:\d{2})(?:\.(\d+))?([Zz]|[+-]\d{2}:\d{2})$"
)


def now() -> datetime:
    """Current local time, timezone-aware."""
    return datetime.now().astimezone()


def is_zero(value: datetime) -> bool:
    return value.utcoffset() == ZERO_TIME.utcoffset() and value.replace(tzinfo=None) == datetime(1, 1, 1)


def format_timestamp(value: datetime) -> str:
    """
    Renders an aware datetime as RFC 3339.
    Fractional seconds are only written when non-zero, without trailing zeros,
    and UTC is written as 'Z'.
    """
    if value.tzinfo is None:
        raise ValueError("timestamps must be timezone-aware")
    # strftime does not zero-pad years below 1000 on every platform
    text = (
        f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
        f"T{value.hour:02d}:{value.minute:02d}:{value.second:02d}"
    )
    if value.microsecond:
        text += "." + f"{value.microsecond:06d}".rstrip("0")
    offset = value.utcoffset()
    if not offset:
        return text + "Z"
    total_minutes = int(offset.total_seconds() // 60)
    sign = "+" if total_minutes >= 0 else "-"
    hours, minutes = divmod(abs(total_minutes), 60)
    return f"{text}{sign}{hours:02d}:{minutes:02d}"


def parse_timestamp(text: str) -> datetime:
    """
    Parses an RFC 3339 timestamp. Any number of fractional digits is accepted;
    digits past microseconds are dropped.
    """
    match = _RFC3339_RE.match(text)
    if not match:
        raise ValueError(f"invalid RFC 3339 timestamp: {text!r}")
    date_part, time_part, fraction, offset = match.groups()
    if offset in ("Z", "z"):
        offset = "+00:00"
    fraction = (fraction or "0")[:6].ljust(6, "0")
    return datetime.fromisoformat(f"{date_part}T{time_part}.{fraction}{offset}")


@dataclass
class Task:
    """A single to-do item as held in memory during one load-operate-save cycle."""
    id: str
    content: str
    create_date: datetime
    complete_date: datetime = ZERO_TIME
    is_complete: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "content": self.content,
            "createDate": format_timestamp(self.create_date),
            "completeDate": format_timestamp(self.complete_date),
            "isComplete": self.is_complete,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Task":
        """
        Builds a Task from its on-disk JSON object.
        Raises ValueError/TypeError/KeyError on malformed input; the storage
        layer turns those into CorruptStoreError.
        """
        if not isinstance(data, dict):
            raise TypeError(f"task entry must be an object, got {type(data).__name__}")

        task_id = data["id"]
        content = data["content"]
        create_date = data["createDate"]
        complete_date = data.get("completeDate")
        is_complete = data.get("isComplete", False)

        for name, value in (("id", task_id), ("content", content), ("createDate", create_date)):
            if not isinstance(value, str):
                raise TypeError(f"'{name}' must be a string")
        if complete_date is not None and not isinstance(complete_date, str):
            raise TypeError("'completeDate' must be a string")
        if not isinstance(is_complete, bool):
            raise TypeError("'isComplete' must be a boolean")

        return cls(
            id=task_id,
            content=content,
            create_date=parse_timestamp(create_date),
            complete_date=parse_timestamp(complete_date) if complete_date is not None else ZERO_TIME,
            is_complete=is_complete,
        )
