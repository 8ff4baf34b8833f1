from fastapi import HTTPException, Request

from database.db_manager import DatabaseManager


def get_db(request: Request) -> DatabaseManager:
    """The DatabaseManager the app lifespan stored on ``app.state``."""
    db_manager = getattr(request.app.state, "db_manager", None)
    if db_manager is None:
        raise HTTPException(503, "Database not available")
    return db_manager
