"""asyncpg repositories, one per aggregate: courses, users and their rounds."""

from .course_repo import CourseRepositoryDB
from .round_repo import RoundRepositoryDB
from .user_repo import UserRepositoryDB

__all__ = ["CourseRepositoryDB", "RoundRepositoryDB", "UserRepositoryDB"]
