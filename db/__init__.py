"""
Database utilities package.
"""

from db.postgres_utils import setup_database
from db.redis_utils import connect_redis
from db.storage import Storage, initialize_storage

__all__ = [
    'setup_database',
    'connect_redis',
    'Storage',
    'initialize_storage'
]
