"""
Serverless entry points, one per operation, for API Gateway proxy events.

The handler set is built on first use and reused across warm invocations.
"""

import logging
from typing import Any, Dict, Optional

from .config import configure_logging
from .handlers import INTERNAL_ERROR, Request, Response, TaskHandlers
from .repository import TaskRepository
from .store import build_store

logger = logging.getLogger(__name__)

_handlers: Optional[TaskHandlers] = None


def _get_handlers() -> TaskHandlers:
    global _handlers
    if _handlers is None:
        configure_logging()
        _handlers = TaskHandlers(TaskRepository(build_store()))
    return _handlers


def set_handlers(handlers: Optional[TaskHandlers]) -> None:
    """Replace the cached handler set (None rebuilds it from config)."""
    global _handlers
    _handlers = handlers


def _invoke(operation: str, event: Dict[str, Any]) -> Dict[str, Any]:
    try:
        handlers = _get_handlers()
    except Exception:
        logger.exception(f"{operation}: could not initialise the task store")
        return Response.json(500, {"message": INTERNAL_ERROR}).to_dict()
    return getattr(handlers, operation)(Request.from_event(event)).to_dict()


def create_handler(event: Dict[str, Any], context: Any = None) -> Dict[str, Any]:
    return _invoke("create", event)


def list_handler(event: Dict[str, Any], context: Any = None) -> Dict[str, Any]:
    return _invoke("list", event)


def update_handler(event: Dict[str, Any], context: Any = None) -> Dict[str, Any]:
    return _invoke("update", event)


def delete_handler(event: Dict[str, Any], context: Any = None) -> Dict[str, Any]:
    return _invoke("delete", event)
