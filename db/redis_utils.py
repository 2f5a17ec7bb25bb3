"""
Redis connection utilities.
"""

import logging
from redis.asyncio import Redis

logger = logging.getLogger(__name__)

async def connect_redis(redis_url: str) -> Redis:
    """Create a Redis client and check that the server answers
    
    Args:
        redis_url: Redis connection URL
        
    Returns:
        Redis: Connected client with decoded responses
    """
    redis = Redis.from_url(redis_url, decode_responses=True)
    try:
        await redis.ping()
    except Exception:
        await redis.aclose()
        raise
    return redis
