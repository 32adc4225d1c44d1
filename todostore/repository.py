"""
Task repository: create, list, partial update and delete over a TaskStore.

Each operation makes exactly one store call. Concurrent callers are not
coordinated here; the store's point-operation atomicity is the only
guarantee.
"""

import logging
from typing import Callable, Dict, List, Optional

from .codec import decode_task, encode_task
from .exceptions import NotFoundError, ValidationError
from .models import DeletedTask, Task, TaskStatus, UPDATABLE_FIELDS, new_task_id, now_iso
from .store import TaskStore

logger = logging.getLogger(__name__)


def _require(value: Optional[str], name: str, code: str) -> None:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"Missing '{name}'", code=code)


class TaskRepository:
    """Per-owner task records in a composite-key store."""

    def __init__(
        self,
        store: TaskStore,
        clock: Callable[[], str] = now_iso,
        id_factory: Callable[[], str] = new_task_id
    ):
        self.store = store
        self.clock = clock
        self.id_factory = id_factory

    def create(self, owner: str, title: str, description: str = "") -> Task:
        """Create a new pending task in ``owner``'s partition."""
        _require(owner, "owner", "missing_required_field")
        _require(title, "title", "missing_required_field")

        timestamp = self.clock()
        task = Task(
            owner=owner,
            taskId=self.id_factory(),
            title=title,
            description=description or "",
            status=TaskStatus.PENDING.value,
            createdAt=timestamp,
            updatedAt=timestamp,
        )
        self.store.put_item(encode_task(task))

        logger.info(f"Created task {task.taskId} for {owner}: {title}")
        return task

    def list_by_owner(self, owner: str) -> List[Task]:
        """Every task in ``owner``'s partition, in store key order."""
        _require(owner, "owner", "missing_owner")
        return [decode_task(item) for item in self.store.query(owner)]

    def update_partial(self, owner: str, task_id: str, fields: Dict[str, str]) -> Task:
        """
        Overwrite the supplied fields and refresh ``updatedAt``.

        Fields not supplied are left untouched. A missing key is reported as
        NotFoundError rather than creating a new item.

        Returns:
            The full task after the update
        """
        _require(owner, "owner", "missing_owner")
        _require(task_id, "taskId", "missing_task_id")

        attributes = {name: value for name, value in fields.items() if name in UPDATABLE_FIELDS}
        if not attributes:
            raise ValidationError("No valid fields to update", code="no_updatable_fields")
        attributes["updatedAt"] = self.clock()

        updated = self.store.update_item(owner, task_id, attributes)
        if updated is None:
            logger.warning(f"Update of missing task {owner}/{task_id}")
            raise NotFoundError(owner, task_id)

        logger.info(f"Updated task {task_id} for {owner}: {sorted(fields)}")
        return decode_task(updated)

    def delete(self, owner: str, task_id: str) -> DeletedTask:
        """Delete a task; deleting an absent key raises NotFoundError."""
        _require(owner, "owner", "missing_owner")
        _require(task_id, "taskId", "missing_task_id")

        previous = self.store.delete_item(owner, task_id)
        if not previous:
            logger.warning(f"Delete of missing task {owner}/{task_id}")
            raise NotFoundError(owner, task_id)

        logger.info(f"Deleted task {task_id} for {owner}")
        return DeletedTask(owner=owner, taskId=task_id)
