class DatabaseError(Exception):
    """Base for all database errors."""


class NotFoundError(DatabaseError):
    """A user, course or round that an update targets does not exist."""

    def __init__(self, entity: str, entity_id: str):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} {entity_id} not found")


class DuplicateError(DatabaseError):
    """Unique constraint violation (user email, course name and location)."""


class IntegrityError(DatabaseError):
    """Foreign key or check constraint violation, e.g. a round for an unknown course."""
