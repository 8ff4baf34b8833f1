"""PostgreSQL persistence for courses, users, rounds and stored handicap indexes."""

from database.connection import DatabasePool, db
from database.db_manager import DatabaseManager
from database.exceptions import DatabaseError, DuplicateError, IntegrityError, NotFoundError
from database.repositories import CourseRepositoryDB, RoundRepositoryDB, UserRepositoryDB

__all__ = [
    "DatabasePool",
    "db",
    "DatabaseManager",
    "CourseRepositoryDB",
    "RoundRepositoryDB",
    "UserRepositoryDB",
    "DatabaseError",
    "DuplicateError",
    "IntegrityError",
    "NotFoundError",
]
