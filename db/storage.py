"""
Persistent storage initialization for the bot process.
"""

import logging
from dataclasses import dataclass
from typing import Any

from config.base_config import BaseConfig
from core.exceptions import DatabaseError, RedisConnectionError
from core.utils import get_error_details
from db.postgres_utils import setup_database
from db.redis_utils import connect_redis

logger = logging.getLogger(__name__)

@dataclass
class Storage:
    """Initialized storage handles made available to the handlers"""
    pool: Any
    redis: Any

    async def close(self) -> None:
        await self.redis.aclose()
        await self.pool.close()

async def initialize_storage(config: BaseConfig) -> Storage:
    """Set up PostgreSQL and Redis before the bot connects to Telegram

    Raises:
        DatabaseError: If the PostgreSQL schema or pool could not be set up
        RedisConnectionError: If Redis does not answer
    """
    logger.info("Setting up database connection")
    try:
        pool = await setup_database(config.pg_connection)
    except Exception as e:
        raise DatabaseError(f"Database setup failed: {get_error_details(e)}") from e

    logger.info(f"Connecting to Redis at {config.redis_url}")
    try:
        redis = await connect_redis(config.redis_url)
    except Exception as e:
        await pool.close()
        raise RedisConnectionError(f"Redis connection failed: {get_error_details(e)}") from e

    return Storage(pool=pool, redis=redis)
