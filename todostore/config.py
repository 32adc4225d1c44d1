import logging
import os
from typing import Optional


class Config:
    BACKEND: str = os.getenv('TODOSTORE_BACKEND', 'redis')
    REDIS_URL: str = os.getenv('REDIS_URL', 'redis://localhost:6379')
    REDIS_MAX_CONNECTIONS: int = int(os.getenv('REDIS_MAX_CONNECTIONS', '50'))
    REDIS_SOCKET_CONNECT_TIMEOUT: int = int(os.getenv('REDIS_SOCKET_CONNECT_TIMEOUT', '5'))
    REDIS_SOCKET_TIMEOUT: int = int(os.getenv('REDIS_SOCKET_TIMEOUT', '5'))
    REDIS_KEY_PREFIX: str = os.getenv('REDIS_KEY_PREFIX', 'todos')
    TABLE_NAME: str = os.getenv('TABLE_NAME', 'todos')
    AWS_REGION: Optional[str] = os.getenv('AWS_REGION') or None
    DYNAMODB_ENDPOINT_URL: Optional[str] = os.getenv('DYNAMODB_ENDPOINT_URL') or None
    STORE_TIMEOUT: float = float(os.getenv('STORE_TIMEOUT', '5'))
    LOG_LEVEL: str = os.getenv('LOG_LEVEL', 'INFO')

config = Config()


def configure_logging(level: Optional[str] = None) -> None:
    """Set up root logging once for an entry point."""
    logging.basicConfig(
        level=(level or config.LOG_LEVEL).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
