"""CRUD operations for the courses schema (courses, holes, tee_ratings)."""

import asyncpg
from typing import List, Optional

from models import Course
from database.converters import course_from_rows, course_to_row, hole_to_row, parse_id, tee_ratings_to_rows
from database.exceptions import DuplicateError, IntegrityError


class CourseRepositoryDB:
    """Async CRUD for courses and their child tables."""

    def __init__(self, pool: asyncpg.Pool):
        self._pool = pool

    # ================================================================
    # Private helpers
    # ================================================================

    async def _assemble(self, conn, course_row) -> Course:
        """Build a full Course model from a course row + children."""
        hole_rows = await conn.fetch(
            "SELECT * FROM courses.holes WHERE course_id = $1 ORDER BY hole_number",
            course_row["id"],
        )
        rating_rows = await conn.fetch(
            "SELECT * FROM courses.tee_ratings WHERE course_id = $1 ORDER BY tee_color",
            course_row["id"],
        )
        return course_from_rows(course_row, hole_rows, rating_rows)

    # ================================================================
    # Read
    # ================================================================

    async def get_course(self, course_id: str) -> Optional[Course]:
        """Get a fully-populated Course by ID."""
        cid = parse_id(course_id)
        if cid is None:
            return None
        async with self._pool.acquire() as conn:
            row = await conn.fetchrow(
                "SELECT * FROM courses.courses WHERE id = $1",
                cid,
            )
            if not row:
                return None
            return await self._assemble(conn, row)

    async def list_courses(self, *, limit: int = 50, offset: int = 0) -> List[Course]:
        """List courses alphabetically."""
        async with self._pool.acquire() as conn:
            rows = await conn.fetch(
                """SELECT * FROM courses.courses
                   ORDER BY name
                   LIMIT $1 OFFSET $2""",
                limit, offset,
            )
            return [await self._assemble(conn, r) for r in rows]

    # ================================================================
    # Create
    # ================================================================

    async def create_course(self, course: Course) -> Course:
        """Create a course with its holes and tee ratings in a transaction."""
        data = course_to_row(course)
        try:
            async with self._pool.acquire() as conn:
                async with conn.transaction():
                    row = await conn.fetchrow(
                        """INSERT INTO courses.courses (name, location, par)
                           VALUES ($1, $2, $3) RETURNING *""",
                        data["name"], data["location"], data["par"],
                    )
                    course_id = row["id"]

                    if course.holes:
                        await conn.executemany(
                            """INSERT INTO courses.holes
                               (course_id, hole_number, par, stroke_index)
                               VALUES ($1, $2, $3, $4)""",
                            [hole_to_row(h, course_id) for h in course.holes],
                        )
                    rating_rows = tee_ratings_to_rows(course, course_id)
                    if rating_rows:
                        await conn.executemany(
                            """INSERT INTO courses.tee_ratings
                               (course_id, tee_color, course_rating, slope_rating)
                               VALUES ($1, $2, $3, $4)""",
                            rating_rows,
                        )
                return await self._assemble(conn, row)
        except asyncpg.UniqueViolationError as e:
            raise DuplicateError(f"Course already exists: {e}") from e
        except asyncpg.CheckViolationError as e:
            raise IntegrityError(str(e)) from e
