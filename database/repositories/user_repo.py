"""CRUD operations for the users.users table."""

import asyncpg
from typing import Iterable, List, Optional

from models import User
from database.converters import parse_id, parse_ids, user_from_row, user_to_row
from database.exceptions import DuplicateError, NotFoundError

# Profile fields a user may edit. handicap_index only changes via update_handicap.
_EDITABLE_FIELDS = ("first_name", "last_name", "email")


class UserRepositoryDB:
    """Async CRUD for users."""

    def __init__(self, pool: asyncpg.Pool):
        self._pool = pool

    # ================================================================
    # Read
    # ================================================================

    async def get_user(self, user_id: str) -> Optional[User]:
        """Get user by ID."""
        uid = parse_id(user_id)
        if uid is None:
            return None
        async with self._pool.acquire() as conn:
            row = await conn.fetchrow(
                "SELECT * FROM users.users WHERE id = $1", uid
            )
            return user_from_row(row) if row else None

    async def get_users(self, user_ids: Iterable[str]) -> List[User]:
        """Users for ``user_ids`` in request order. Unknown ids are skipped."""
        ids = parse_ids(user_ids)
        if not ids:
            return []
        async with self._pool.acquire() as conn:
            rows = await conn.fetch(
                "SELECT * FROM users.users WHERE id = ANY($1::uuid[])", ids
            )
        by_id = {r["id"]: user_from_row(r) for r in rows}
        return [by_id[i] for i in ids if i in by_id]

    async def get_user_by_email(self, email: str) -> Optional[User]:
        """Get user by email."""
        async with self._pool.acquire() as conn:
            row = await conn.fetchrow(
                "SELECT * FROM users.users WHERE email = $1", email
            )
            return user_from_row(row) if row else None

    async def missing_user_ids(self, user_ids: Iterable[str]) -> List[str]:
        """Return the ids from ``user_ids`` that have no user row."""
        wanted = list(dict.fromkeys(user_ids))
        async with self._pool.acquire() as conn:
            rows = await conn.fetch(
                "SELECT id FROM users.users WHERE id = ANY($1::uuid[])",
                parse_ids(wanted),
            )
        found = {r["id"] for r in rows}
        return [u for u in wanted if parse_id(u) not in found]

    # ================================================================
    # Create
    # ================================================================

    async def create_user(self, user: User) -> User:
        """Create a new user. Returns User with DB-generated id."""
        data = user_to_row(user)
        try:
            async with self._pool.acquire() as conn:
                row = await conn.fetchrow(
                    """INSERT INTO users.users (first_name, last_name, email, handicap_index)
                       VALUES ($1, $2, $3, $4) RETURNING *""",
                    data["first_name"], data["last_name"],
                    data["email"], data["handicap_index"],
                )
                return user_from_row(row)
        except asyncpg.UniqueViolationError as e:
            raise DuplicateError(f"Email already in use: {e}") from e

    # ================================================================
    # Update
    # ================================================================

    async def update_user(self, user_id: str, **fields) -> Optional[User]:
        """Update profile fields (first_name, last_name, email). None if no such user."""
        updates = {k: v for k, v in fields.items() if k in _EDITABLE_FIELDS}
        if not updates:
            return await self.get_user(user_id)
        uid = parse_id(user_id)
        if uid is None:
            return None

        set_clause = ", ".join(f"{k} = ${i + 2}" for i, k in enumerate(updates))
        try:
            async with self._pool.acquire() as conn:
                row = await conn.fetchrow(
                    f"UPDATE users.users SET {set_clause} WHERE id = $1 RETURNING *",
                    uid, *updates.values(),
                )
                return user_from_row(row) if row else None
        except asyncpg.UniqueViolationError as e:
            raise DuplicateError(f"Email already in use: {e}") from e

    async def update_handicap(self, user_id: str, handicap: float) -> None:
        """Overwrite handicap_index and set last_handicap_update to NOW()."""
        uid = parse_id(user_id)
        if uid is None:
            raise NotFoundError("User", user_id)
        async with self._pool.acquire() as conn:
            result = await conn.execute(
                """UPDATE users.users
                   SET handicap_index = $2, last_handicap_update = NOW()
                   WHERE id = $1""",
                uid, handicap,
            )
            if result == "UPDATE 0":
                raise NotFoundError("User", user_id)

    # ================================================================
    # Delete
    # ================================================================

    async def delete_user(self, user_id: str) -> bool:
        """Delete user and all their rounds (CASCADE). Returns True if deleted."""
        uid = parse_id(user_id)
        if uid is None:
            return False
        async with self._pool.acquire() as conn:
            result = await conn.execute(
                "DELETE FROM users.users WHERE id = $1", uid
            )
            return result == "DELETE 1"
