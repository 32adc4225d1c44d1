"""
Composite-key store port.

Every backend keeps one item per (owner, taskId) and offers the four point
or partition-scoped operations the repository needs. Items are plain
dictionaries of string attributes.
"""

import copy
import logging
import threading
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Tuple

from .config import config
from .exceptions import TodoStoreError

logger = logging.getLogger(__name__)

Item = Dict[str, str]


class TaskStore(ABC):
    """Abstract base class for task stores."""

    @abstractmethod
    def put_item(self, item: Item) -> None:
        """
        Write a full item unconditionally.

        Args:
            item: Attributes including the ``owner`` and ``taskId`` key
        """
        pass

    @abstractmethod
    def query(self, owner: str) -> List[Item]:
        """
        Read every item in an owner's partition.

        Returns:
            Items in ascending ``taskId`` order
        """
        pass

    @abstractmethod
    def update_item(self, owner: str, task_id: str, attributes: Item) -> Optional[Item]:
        """
        Set the named attributes on an existing item.

        Args:
            owner: Partition key
            task_id: Sort key
            attributes: Attributes to overwrite; all others are left as they are

        Returns:
            The item after the update, or None if no item has this key
        """
        pass

    @abstractmethod
    def delete_item(self, owner: str, task_id: str) -> Optional[Item]:
        """
        Remove an item.

        Returns:
            The item as it was before deletion, or None if it did not exist
        """
        pass

    def ping(self) -> bool:
        """Check the store is reachable."""
        return True


class InMemoryTaskStore(TaskStore):
    """Dictionary-backed store for tests and local runs."""

    def __init__(self):
        self._items: Dict[Tuple[str, str], Item] = {}
        self._lock = threading.RLock()

    def put_item(self, item: Item) -> None:
        with self._lock:
            self._items[(item["owner"], item["taskId"])] = dict(item)

    def query(self, owner: str) -> List[Item]:
        with self._lock:
            keys = sorted(key for key in self._items if key[0] == owner)
            return [copy.deepcopy(self._items[key]) for key in keys]

    def update_item(self, owner: str, task_id: str, attributes: Item) -> Optional[Item]:
        with self._lock:
            item = self._items.get((owner, task_id))
            if item is None:
                return None
            item.update(attributes)
            return dict(item)

    def delete_item(self, owner: str, task_id: str) -> Optional[Item]:
        with self._lock:
            return self._items.pop((owner, task_id), None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)


def build_store(backend: Optional[str] = None) -> TaskStore:
    """Create the store selected by ``backend`` or ``TODOSTORE_BACKEND``."""
    backend = (backend or config.BACKEND).lower()

    if backend == "memory":
        return InMemoryTaskStore()

    if backend == "redis":
        from .redis_store import RedisTaskStore
        return RedisTaskStore.from_config()

    if backend == "dynamodb":
        from .dynamo_store import DynamoTaskStore
        return DynamoTaskStore.from_config()

    raise TodoStoreError(f"Unknown store backend: {backend}")
