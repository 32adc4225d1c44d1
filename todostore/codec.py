"""
Translation between loosely typed request payloads and task records.

Decoding produces one validated request object per operation so nothing
downstream has to look at a raw body again.
"""

import base64
import json
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from .exceptions import ValidationError
from .models import Task, UPDATABLE_FIELDS

# Names historically used for the same identifier, most canonical first
OWNER_ALIASES = ("owner", "ownerId", "ownerID", "userId", "userID")
TASK_ID_ALIASES = ("taskId", "taskID", "id")


@dataclass
class CreateRequest:
    owner: str
    title: str
    description: str = ""


@dataclass
class UpdateRequest:
    fields: Dict[str, str]


def _lookup(aliases, sources) -> Optional[str]:
    for source in sources:
        if not source:
            continue
        for name in aliases:
            value = source.get(name)
            if isinstance(value, str) and value.strip():
                return value
    return None


def resolve_owner(*sources: Optional[Mapping[str, Any]]) -> Optional[str]:
    """Return the owner from the first source carrying any of its aliases."""
    return _lookup(OWNER_ALIASES, sources)


def resolve_task_id(*sources: Optional[Mapping[str, Any]]) -> Optional[str]:
    return _lookup(TASK_ID_ALIASES, sources)


def parse_body(raw: Any, is_base64: bool = False) -> Dict[str, Any]:
    """Turn a request body (text, bytes or mapping) into a dict."""
    if raw is None or raw == "" or raw == b"":
        raise ValidationError("Request body is missing", code="missing_body")

    if isinstance(raw, Mapping):
        return dict(raw)

    if is_base64:
        try:
            raw = base64.b64decode(raw)
        except (ValueError, TypeError) as e:
            raise ValidationError("Request body is not valid base64", code="invalid_body") from e

    try:
        body = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise ValidationError("Request body is not valid JSON", code="invalid_body") from e

    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object", code="invalid_body")
    return body


def decode_create(body: Mapping[str, Any]) -> CreateRequest:
    owner = resolve_owner(body)
    title = body.get("title")
    if not owner or not isinstance(title, str) or not title.strip():
        raise ValidationError(
            "Missing required fields: 'owner' and 'title' are required",
            code="missing_required_field",
        )

    description = body.get("description")
    if description is None:
        description = ""
    elif not isinstance(description, str):
        raise ValidationError("Field 'description' must be a string", code="invalid_field")

    return CreateRequest(owner=owner, title=title, description=description)


def decode_update(body: Mapping[str, Any]) -> UpdateRequest:
    """Keep the updatable fields of ``body``; anything else is ignored.

    A null ``title`` or ``status`` counts as not supplied. A null
    ``description`` clears it, since the stored form of no description is ``""``.
    """
    fields = {name: body[name] for name in UPDATABLE_FIELDS if body.get(name) is not None}
    if "description" in body and body["description"] is None:
        fields["description"] = ""
    if not fields:
        raise ValidationError("No valid fields to update", code="no_updatable_fields")

    for name, value in fields.items():
        if not isinstance(value, str):
            raise ValidationError(f"Field '{name}' must be a string", code="invalid_field")
        if name != "description" and not value.strip():
            raise ValidationError(f"Field '{name}' cannot be empty", code="invalid_field")

    return UpdateRequest(fields=fields)


def encode_task(task: Task) -> Dict[str, str]:
    return task.to_dict()


def decode_task(item: Mapping[str, Any]) -> Task:
    return Task.from_dict(dict(item))
