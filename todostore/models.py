"""
Task record model.

A task lives in its owner's partition and is addressed by (owner, taskId).
All attributes are kept as plain strings so every backend can store them
as scalars.
"""

import threading
import uuid
from dataclasses import dataclass, asdict
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Dict, Any


class TaskStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"


# Attributes a partial update may touch
UPDATABLE_FIELDS = ("title", "description", "status")


_clock_lock = threading.Lock()
_last_stamp = datetime.min.replace(tzinfo=timezone.utc)


def now_iso() -> str:
    """UTC timestamp with microseconds, strictly increasing within this process.

    The fixed width keeps string comparison in step with time order.
    """
    global _last_stamp
    with _clock_lock:
        now = datetime.now(timezone.utc)
        if now <= _last_stamp:
            now = _last_stamp + timedelta(microseconds=1)
        _last_stamp = now
    return now.isoformat(timespec="microseconds")


def new_task_id() -> str:
    return str(uuid.uuid4())


@dataclass
class Task:
    """Represents a stored task record."""
    owner: str
    taskId: str
    title: str
    description: str
    status: str
    createdAt: str
    updatedAt: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for storage and the wire."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Task':
        """Create Task from a stored item."""
        return cls(
            owner=data["owner"],
            taskId=data["taskId"],
            title=data.get("title") or "",
            description=data.get("description") or "",
            status=data.get("status") or TaskStatus.PENDING.value,
            createdAt=data.get("createdAt") or "",
            updatedAt=data.get("updatedAt") or "",
        )


@dataclass
class DeletedTask:
    """Confirmation returned after a successful delete."""
    owner: str
    taskId: str

    @property
    def message(self) -> str:
        return f"Task '{self.taskId}' deleted successfully for owner '{self.owner}'"

    def to_dict(self) -> Dict[str, Any]:
        return {"message": self.message, "owner": self.owner, "taskId": self.taskId}
