"""
todostore - per-owner task records over a composite-key store

Tasks are addressed by (owner, taskId) and support create, list by owner,
partial update and delete. Redis is the default backend; DynamoDB and an
in-memory store are also available.

Usage:
    from todostore import TaskRepository, InMemoryTaskStore

    repo = TaskRepository(InMemoryTaskStore())
    task = repo.create("u1", "Buy milk")
    repo.update_partial("u1", task.taskId, {"status": "completed"})
"""

from .exceptions import TodoStoreError, ValidationError, NotFoundError, StoreUnavailable
from .models import Task, TaskStatus, DeletedTask
from .store import TaskStore, InMemoryTaskStore, build_store
from .repository import TaskRepository
from .handlers import Request, Response, TaskHandlers

__version__ = "0.1.0"
__all__ = [
    "TodoStoreError",
    "ValidationError",
    "NotFoundError",
    "StoreUnavailable",
    "Task",
    "TaskStatus",
    "DeletedTask",
    "TaskStore",
    "InMemoryTaskStore",
    "build_store",
    "TaskRepository",
    "Request",
    "Response",
    "TaskHandlers",
]
