"""CRUD operations for rounds and hole_scores."""

import asyncpg
from datetime import date
from typing import Iterable, List, Optional

from models import HoleScore, Round
from database.converters import hole_score_to_row, parse_id, parse_ids, round_from_rows, round_to_row
from database.exceptions import IntegrityError, NotFoundError

# Most recent first. created_at breaks ties between rounds on the same day.
_NEWEST_FIRST = "ORDER BY round_date DESC, created_at DESC"
_OLDEST_FIRST = "ORDER BY round_date ASC, created_at ASC"


class RoundRepositoryDB:
    """Async CRUD for rounds and their hole scores."""

    def __init__(self, pool: asyncpg.Pool):
        self._pool = pool

    # ================================================================
    # Private helpers
    # ================================================================

    async def _assemble_round(self, conn, round_row) -> Round:
        """Build a full Round model from a round row."""
        score_rows = await conn.fetch(
            """SELECT * FROM users.hole_scores
               WHERE round_id = $1 ORDER BY hole_number""",
            round_row["id"],
        )
        return round_from_rows(round_row, score_rows)

    async def _insert_round(self, conn, round_: Round):
        data = round_to_row(round_)
        row = await conn.fetchrow(
            """INSERT INTO users.rounds
               (user_id, course_id, course_name, tee_color, number_of_holes,
                round_date, players, total_score, total_par,
                score_differential, notes)
               VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9, $10, $11)
               RETURNING *""",
            data["user_id"], data["course_id"], data["course_name"],
            data["tee_color"], data["number_of_holes"], data["round_date"],
            data["players"], data["total_score"], data["total_par"],
            data["score_differential"], data["notes"],
        )
        if round_.hole_scores:
            await conn.executemany(
                """INSERT INTO users.hole_scores
                   (round_id, hole_number, par, strokes, putts,
                    fairway_hit, green_in_regulation)
                   VALUES ($1, $2, $3, $4, $5, $6, $7)""",
                [hole_score_to_row(hs, row["id"]) for hs in round_.hole_scores],
            )
        return row

    # ================================================================
    # Read
    # ================================================================

    async def get_round(self, round_id: str) -> Optional[Round]:
        """Get a round with its hole scores."""
        rid = parse_id(round_id)
        if rid is None:
            return None
        async with self._pool.acquire() as conn:
            row = await conn.fetchrow(
                "SELECT * FROM users.rounds WHERE id = $1", rid
            )
            if not row:
                return None
            return await self._assemble_round(conn, row)

    async def get_rounds_for_user(
        self, user_id: str, *, limit: int = 20, offset: int = 0
    ) -> List[Round]:
        """Get a user's rounds, newest first."""
        uid = parse_id(user_id)
        if uid is None:
            return []
        async with self._pool.acquire() as conn:
            rows = await conn.fetch(
                f"""SELECT * FROM users.rounds
                    WHERE user_id = $1
                    {_NEWEST_FIRST}
                    LIMIT $2 OFFSET $3""",
                uid, limit, offset,
            )
            return [await self._assemble_round(conn, r) for r in rows]

    async def get_recent_differentials(self, user_id: str, *, limit: int = 20) -> List[float]:
        """Stored differentials of the user's latest ``limit`` rounds, newest first."""
        uid = parse_id(user_id)
        if uid is None:
            return []
        async with self._pool.acquire() as conn:
            rows = await conn.fetch(
                f"""SELECT score_differential FROM users.rounds
                    WHERE user_id = $1 AND score_differential IS NOT NULL
                    {_NEWEST_FIRST}
                    LIMIT $2""",
                uid, limit,
            )
            return [float(r["score_differential"]) for r in rows]

    async def get_rounds_chronological(self, user_id: str) -> List[Round]:
        """All of a user's rounds, oldest first, without hole scores."""
        uid = parse_id(user_id)
        if uid is None:
            return []
        async with self._pool.acquire() as conn:
            rows = await conn.fetch(
                f"""SELECT * FROM users.rounds
                    WHERE user_id = $1
                    {_OLDEST_FIRST}""",
                uid,
            )
            return [round_from_rows(r, []) for r in rows]

    async def find_group_rounds(
        self, user_ids: Iterable[str], round_date: date, course_id: str
    ) -> List[Round]:
        """Rounds played by any of ``user_ids`` on ``round_date`` at ``course_id``."""
        cid = parse_id(course_id)
        if cid is None:
            return []
        async with self._pool.acquire() as conn:
            rows = await conn.fetch(
                f"""SELECT * FROM users.rounds
                    WHERE user_id = ANY($1::uuid[])
                      AND round_date = $2
                      AND course_id = $3
                    {_NEWEST_FIRST}""",
                parse_ids(user_ids), round_date, cid,
            )
            return [await self._assemble_round(conn, r) for r in rows]

    # ================================================================
    # Create
    # ================================================================

    async def create_round(self, round_: Round) -> Round:
        """Create a round with all hole scores in a transaction."""
        created = await self.create_rounds([round_])
        return created[0]

    async def create_rounds(self, rounds: List[Round]) -> List[Round]:
        """Create several rounds (e.g. one per player of a group) in one transaction."""
        try:
            async with self._pool.acquire() as conn:
                async with conn.transaction():
                    rows = [await self._insert_round(conn, r) for r in rounds]
                return [await self._assemble_round(conn, row) for row in rows]
        except asyncpg.ForeignKeyViolationError as e:
            raise IntegrityError(str(e)) from e
        except asyncpg.CheckViolationError as e:
            raise IntegrityError(str(e)) from e

    # ================================================================
    # Update
    # ================================================================

    async def update_round(
        self,
        round_id: str,
        *,
        hole_scores: Optional[List[HoleScore]] = None,
        notes: Optional[str] = None,
    ) -> Round:
        """Replace hole scores and/or notes.

        total_score, total_par and score_differential keep the values fixed
        when the round was created.
        """
        rid = parse_id(round_id)
        if rid is None:
            raise NotFoundError("Round", round_id)
        async with self._pool.acquire() as conn:
            async with conn.transaction():
                row = await conn.fetchrow(
                    """UPDATE users.rounds
                       SET notes = COALESCE($2, notes), updated_at = NOW()
                       WHERE id = $1 RETURNING *""",
                    rid, notes,
                )
                if not row:
                    raise NotFoundError("Round", round_id)

                if hole_scores is not None:
                    await conn.execute(
                        "DELETE FROM users.hole_scores WHERE round_id = $1", row["id"]
                    )
                    await conn.executemany(
                        """INSERT INTO users.hole_scores
                           (round_id, hole_number, par, strokes, putts,
                            fairway_hit, green_in_regulation)
                           VALUES ($1, $2, $3, $4, $5, $6, $7)""",
                        [hole_score_to_row(hs, row["id"]) for hs in hole_scores],
                    )
            return await self._assemble_round(conn, row)

    # ================================================================
    # Delete
    # ================================================================

    async def delete_rounds(self, round_ids: Iterable[str]) -> int:
        """Delete rounds and their hole_scores (CASCADE). Returns count deleted."""
        ids = parse_ids(round_ids)
        if not ids:
            return 0
        async with self._pool.acquire() as conn:
            result = await conn.execute(
                "DELETE FROM users.rounds WHERE id = ANY($1::uuid[])", ids
            )
            return int(result.split()[-1])
