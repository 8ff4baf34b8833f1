"""Facade bundling the async repositories over one asyncpg pool."""

from pathlib import Path

import asyncpg

from database.repositories import CourseRepositoryDB, RoundRepositoryDB, UserRepositoryDB

SCHEMA_PATH = Path(__file__).with_name("schema.sql")


class DatabaseManager:
    """
    Entry point the API uses for persistence.

    Notes:
    - Repositories use raw SQL (no ORM) to keep behavior explicit.
    - Handicap recomputation reads and writes through ``rounds`` and ``users``
      with no locking; concurrent updates for one player are last-writer-wins.
    """

    def __init__(self, pool: asyncpg.Pool):
        self._pool = pool
        self.courses = CourseRepositoryDB(pool)
        self.users = UserRepositoryDB(pool)
        self.rounds = RoundRepositoryDB(pool)

    async def initialize_schema(self) -> None:
        """Create schemas, tables and indexes if they do not exist."""
        sql = SCHEMA_PATH.read_text(encoding="utf-8")
        async with self._pool.acquire() as conn:
            await conn.execute(sql)
