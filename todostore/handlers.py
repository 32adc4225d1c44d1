"""
Operation handlers.

Each handler validates its request, makes one repository call and turns the
outcome into a JSON response envelope. No exception gets past a handler.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from .codec import decode_create, decode_update, encode_task, parse_body, resolve_owner, resolve_task_id
from .exceptions import NotFoundError, StoreUnavailable, ValidationError
from .repository import TaskRepository

logger = logging.getLogger(__name__)

JSON_HEADERS = {"Content-Type": "application/json"}
INTERNAL_ERROR = "Internal server error"


@dataclass
class Request:
    """Transport-neutral request: body plus path and query identifiers."""
    body: Any = None
    path_params: Dict[str, str] = field(default_factory=dict)
    query_params: Dict[str, str] = field(default_factory=dict)
    is_base64: bool = False

    @classmethod
    def from_event(cls, event: Dict[str, Any]) -> 'Request':
        """Build a request from an API Gateway proxy event."""
        return cls(
            body=event.get("body"),
            path_params=event.get("pathParameters") or {},
            query_params=event.get("queryStringParameters") or {},
            is_base64=bool(event.get("isBase64Encoded")),
        )


@dataclass
class Response:
    status_code: int
    body: str
    headers: Dict[str, str] = field(default_factory=lambda: dict(JSON_HEADERS))

    @classmethod
    def json(cls, status_code: int, payload: Any) -> 'Response':
        return cls(status_code=status_code, body=json.dumps(payload))

    def payload(self) -> Any:
        return json.loads(self.body)

    def to_dict(self) -> Dict[str, Any]:
        return {"statusCode": self.status_code, "headers": self.headers, "body": self.body}


def _error(status_code: int, message: str, code: Optional[str] = None) -> Response:
    payload = {"message": message}
    if code:
        payload["code"] = code
    return Response.json(status_code, payload)


class TaskHandlers:
    """Binds each repository operation to a request/response contract."""

    def __init__(self, repository: TaskRepository):
        self.repository = repository

    def _dispatch(self, operation: str, func: Callable[[], Response]) -> Response:
        try:
            return func()
        except ValidationError as e:
            logger.info(f"{operation}: rejected request ({e.code}): {e.message}")
            return _error(400, e.message, e.code)
        except NotFoundError as e:
            return _error(404, str(e))
        except StoreUnavailable as e:
            logger.error(f"{operation}: store unavailable: {e}")
            return _error(500, INTERNAL_ERROR)
        except Exception:
            logger.exception(f"{operation}: unexpected error")
            return _error(500, INTERNAL_ERROR)

    def create(self, request: Request) -> Response:
        def _create():
            body = parse_body(request.body, request.is_base64)
            owner = resolve_owner(body, request.path_params, request.query_params)
            decoded = decode_create({**body, "owner": owner} if owner else body)
            task = self.repository.create(decoded.owner, decoded.title, decoded.description)
            return Response.json(200, encode_task(task))

        return self._dispatch("create", _create)

    def list(self, request: Request) -> Response:
        def _list():
            owner = resolve_owner(request.query_params, request.path_params)
            if not owner:
                raise ValidationError("Missing 'owner' in query parameters", code="missing_owner")
            tasks = self.repository.list_by_owner(owner)
            return Response.json(200, [encode_task(task) for task in tasks])

        return self._dispatch("list", _list)

    def update(self, request: Request) -> Response:
        def _update():
            task_id = resolve_task_id(request.path_params)
            owner = resolve_owner(request.path_params, request.query_params)
            if not task_id or not owner:
                raise ValidationError("Missing 'taskId' or 'owner'", code="missing_required_field")
            decoded = decode_update(parse_body(request.body, request.is_base64))
            task = self.repository.update_partial(owner, task_id, decoded.fields)
            return Response.json(200, encode_task(task))

        return self._dispatch("update", _update)

    def delete(self, request: Request) -> Response:
        def _delete():
            task_id = resolve_task_id(request.path_params, request.query_params)
            owner = resolve_owner(request.path_params, request.query_params)
            if not task_id or not owner:
                raise ValidationError(
                    "Missing 'owner' or 'taskId' in path parameters",
                    code="missing_required_field",
                )
            deleted = self.repository.delete(owner, task_id)
            return Response.json(200, deleted.to_dict())

        return self._dispatch("delete", _delete)
