import logging
from typing import Optional

import asyncpg

logger = logging.getLogger(__name__)


async def _init_connection(conn: asyncpg.Connection) -> None:
    # ratings, differentials and handicap indexes are NUMERIC columns
    await conn.set_type_codec(
        "numeric", encoder=str, decoder=float, schema="pg_catalog", format="text"
    )


class DatabasePool:
    """Owns the asyncpg pool shared by every repository."""

    def __init__(self):
        self._pool: Optional[asyncpg.Pool] = None

    async def initialize(
        self,
        dsn: Optional[str] = None,
        *,
        host: str = "localhost",
        port: int = 5432,
        database: str = "golf_handicap",
        user: str = "postgres",
        password: str = "",
        min_size: int = 2,
        max_size: int = 10,
        command_timeout: float = 30.0,
    ) -> None:
        """Create the pool once at app startup. Connection keywords are ignored when a DSN is given."""
        if self._pool is not None:
            return
        connect_kwargs = {"dsn": dsn} if dsn else {
            "host": host, "port": port, "database": database,
            "user": user, "password": password,
        }
        self._pool = await asyncpg.create_pool(
            **connect_kwargs,
            min_size=min_size,
            max_size=max_size,
            command_timeout=command_timeout,
            init=_init_connection,
        )
        logger.info("Database pool ready (min=%d, max=%d)", min_size, max_size)

    async def close(self) -> None:
        if self._pool:
            await self._pool.close()
            self._pool = None
            logger.info("Database pool closed")

    @property
    def pool(self) -> asyncpg.Pool:
        if self._pool is None:
            raise RuntimeError(
                "Database pool not initialized. Call await db.initialize() first."
            )
        return self._pool

    async def health_check(self) -> bool:
        """SELECT 1 against the pool; False (and a warning) on any connection problem."""
        try:
            async with self.pool.acquire() as conn:
                await conn.fetchval("SELECT 1")
            return True
        except (RuntimeError, OSError, asyncpg.PostgresError) as e:
            logger.warning("Database health check failed: %s", e)
            return False


db = DatabasePool()
