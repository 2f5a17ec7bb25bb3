"""
PostgreSQL database utilities for schema setup and connection management.
"""

import logging
from psycopg import AsyncConnection
from psycopg.rows import dict_row
from psycopg_pool import AsyncConnectionPool

logger = logging.getLogger(__name__)

# Applied on every start, so every statement must be idempotent
SCHEMA_STATEMENTS = (
    """
    CREATE TABLE IF NOT EXISTS bot_users (
        user_id BIGINT PRIMARY KEY,
        username TEXT,
        first_seen TIMESTAMPTZ NOT NULL DEFAULT now(),
        last_seen TIMESTAMPTZ NOT NULL DEFAULT now()
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS bot_chats (
        chat_id BIGINT PRIMARY KEY,
        chat_type TEXT NOT NULL,
        created_at TIMESTAMPTZ NOT NULL DEFAULT now()
    )
    """,
)

async def apply_schema(conn: AsyncConnection) -> None:
    """Create the bot tables if they do not exist yet"""
    for statement in SCHEMA_STATEMENTS:
        await conn.execute(statement)
    logger.info(f"Applied {len(SCHEMA_STATEMENTS)} schema statements")

async def setup_database(pg_connection: str, max_size: int = 20) -> AsyncConnectionPool:
    """Initialize database schema and connection pool
    
    Args:
        pg_connection: PostgreSQL connection string
        max_size: Maximum number of pooled connections
        
    Returns:
        AsyncConnectionPool: Connection pool for database operations
    """
    # Schema setup connection with dict_row cursor factory
    setup_conn = await AsyncConnection.connect(
        pg_connection, 
        autocommit=True,
        row_factory=dict_row
    )
    try:
        await apply_schema(setup_conn)
    finally:
        await setup_conn.close()

    # Main connection pool with dict_row cursor factory
    pool = AsyncConnectionPool(
        conninfo=pg_connection,
        max_size=max_size,
        timeout=30,
        kwargs={"row_factory": dict_row},
        open=False
    )
    await pool.open()
    return pool
