"""
Redis-backed task store.

Layout (owner and taskId are percent-encoded in keys, so ":" inside
either part cannot collide with the separator):
    {prefix}:task:{owner}:{taskId}  hash with every task attribute
    {prefix}:owner:{owner}          sorted set of the owner's task ids, all
                                    scored 0 so ranges come back in taskId order

Point mutations WATCH the item hash and run inside MULTI/EXEC so the
existence check and the write are applied together.
"""

import logging
from typing import List, Optional
from urllib.parse import quote

import redis
from redis.exceptions import RedisError, WatchError

from .config import config
from .exceptions import StoreUnavailable
from .store import Item, TaskStore

logger = logging.getLogger(__name__)


class RedisTaskStore(TaskStore):
    """Composite-key task store on Redis hashes and sorted sets."""

    def __init__(self, redis_client, prefix: str = "todos"):
        self.redis = redis_client
        self.prefix = prefix

    @classmethod
    def from_config(cls) -> 'RedisTaskStore':
        # Timeouts surface to the caller; nothing is retried client-side
        client = redis.Redis.from_url(
            config.REDIS_URL,
            max_connections=config.REDIS_MAX_CONNECTIONS,
            socket_connect_timeout=config.REDIS_SOCKET_CONNECT_TIMEOUT,
            socket_timeout=config.REDIS_SOCKET_TIMEOUT,
            retry_on_timeout=False,
            decode_responses=True
        )
        return cls(client, prefix=config.REDIS_KEY_PREFIX)

    def _item_key(self, owner: str, task_id: str) -> str:
        return f"{self.prefix}:task:{quote(owner, safe='')}:{quote(task_id, safe='')}"

    def _index_key(self, owner: str) -> str:
        return f"{self.prefix}:owner:{quote(owner, safe='')}"

    def put_item(self, item: Item) -> None:
        owner, task_id = item["owner"], item["taskId"]
        try:
            pipe = self.redis.pipeline(transaction=True)
            pipe.hset(self._item_key(owner, task_id), mapping=item)
            pipe.zadd(self._index_key(owner), {task_id: 0})
            pipe.execute()
        except RedisError as e:
            raise StoreUnavailable(f"put_item failed for {owner}/{task_id}: {e}") from e

    def query(self, owner: str) -> List[Item]:
        try:
            task_ids = self.redis.zrange(self._index_key(owner), 0, -1)
            if not task_ids:
                return []
            pipe = self.redis.pipeline(transaction=False)
            for task_id in task_ids:
                pipe.hgetall(self._item_key(owner, task_id))
            rows = pipe.execute()
        except RedisError as e:
            raise StoreUnavailable(f"query failed for owner {owner}: {e}") from e

        # Index entries whose hash vanished mid-read are skipped
        return [row for row in rows if row]

    def update_item(self, owner: str, task_id: str, attributes: Item) -> Optional[Item]:
        item_key = self._item_key(owner, task_id)
        try:
            with self.redis.pipeline() as pipe:
                while True:
                    try:
                        pipe.watch(item_key)
                        if not pipe.exists(item_key):
                            return None
                        pipe.multi()
                        pipe.hset(item_key, mapping=attributes)
                        pipe.hgetall(item_key)
                        _, updated = pipe.execute()
                        return updated
                    except WatchError:
                        logger.debug(f"Concurrent write on {item_key}, re-checking")
                        continue
        except RedisError as e:
            raise StoreUnavailable(f"update_item failed for {owner}/{task_id}: {e}") from e

    def delete_item(self, owner: str, task_id: str) -> Optional[Item]:
        item_key = self._item_key(owner, task_id)
        try:
            with self.redis.pipeline() as pipe:
                while True:
                    try:
                        pipe.watch(item_key)
                        previous = pipe.hgetall(item_key)
                        if not previous:
                            return None
                        pipe.multi()
                        pipe.delete(item_key)
                        pipe.zrem(self._index_key(owner), task_id)
                        pipe.execute()
                        return previous
                    except WatchError:
                        logger.debug(f"Concurrent write on {item_key}, re-checking")
                        continue
        except RedisError as e:
            raise StoreUnavailable(f"delete_item failed for {owner}/{task_id}: {e}") from e

    def ping(self) -> bool:
        try:
            return bool(self.redis.ping())
        except RedisError as e:
            logger.error(f"Redis ping failed: {e}")
            return False
