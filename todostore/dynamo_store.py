"""DynamoDB-backed task store: partition key ``owner``, sort key ``taskId``."""

import logging
from typing import Any, Dict, List, Optional

import boto3
from boto3.dynamodb.conditions import Key
from botocore.config import Config as BotoConfig
from botocore.exceptions import BotoCoreError, ClientError

from .config import config
from .exceptions import StoreUnavailable
from .store import Item, TaskStore

logger = logging.getLogger(__name__)


class DynamoTaskStore(TaskStore):
    """Task store on a DynamoDB table with a composite primary key."""

    def __init__(self, table):
        self.table = table

    @classmethod
    def from_config(cls) -> 'DynamoTaskStore':
        boto_config = BotoConfig(
            connect_timeout=config.STORE_TIMEOUT,
            read_timeout=config.STORE_TIMEOUT,
            retries={"total_max_attempts": 1},
        )
        resource = boto3.resource(
            "dynamodb",
            region_name=config.AWS_REGION,
            endpoint_url=config.DYNAMODB_ENDPOINT_URL,
            config=boto_config,
        )
        return cls(resource.Table(config.TABLE_NAME))

    def put_item(self, item: Item) -> None:
        try:
            self.table.put_item(Item=item)
        except (BotoCoreError, ClientError) as e:
            raise StoreUnavailable(f"put_item failed: {e}") from e

    def query(self, owner: str) -> List[Item]:
        items: List[Item] = []
        kwargs: Dict[str, Any] = {"KeyConditionExpression": Key("owner").eq(owner)}
        try:
            while True:
                result = self.table.query(**kwargs)
                items.extend(result.get("Items", []))
                last_key = result.get("LastEvaluatedKey")
                if not last_key:
                    break
                kwargs["ExclusiveStartKey"] = last_key
        except (BotoCoreError, ClientError) as e:
            raise StoreUnavailable(f"query failed for owner {owner}: {e}") from e
        return items

    def update_item(self, owner: str, task_id: str, attributes: Item) -> Optional[Item]:
        names = {f"#{name}": name for name in attributes}
        values = {f":{name}": value for name, value in attributes.items()}
        assignments = ", ".join(f"#{name} = :{name}" for name in attributes)

        # Update-only: the condition keeps a missing key from becoming a sparse item
        names["#owner"] = "owner"
        try:
            result = self.table.update_item(
                Key={"owner": owner, "taskId": task_id},
                UpdateExpression=f"SET {assignments}",
                ConditionExpression="attribute_exists(#owner)",
                ExpressionAttributeNames=names,
                ExpressionAttributeValues=values,
                ReturnValues="ALL_NEW",
            )
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") == "ConditionalCheckFailedException":
                return None
            raise StoreUnavailable(f"update_item failed for {owner}/{task_id}: {e}") from e
        except BotoCoreError as e:
            raise StoreUnavailable(f"update_item failed for {owner}/{task_id}: {e}") from e
        return result.get("Attributes")

    def delete_item(self, owner: str, task_id: str) -> Optional[Item]:
        try:
            result = self.table.delete_item(
                Key={"owner": owner, "taskId": task_id},
                ReturnValues="ALL_OLD",
            )
        except (BotoCoreError, ClientError) as e:
            raise StoreUnavailable(f"delete_item failed for {owner}/{task_id}: {e}") from e
        return result.get("Attributes") or None

    def ping(self) -> bool:
        try:
            self.table.load()
            return True
        except (BotoCoreError, ClientError) as e:
            logger.error(f"DynamoDB table check failed: {e}")
            return False
