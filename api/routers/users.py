"""User API endpoints, including the handicap history view."""

from fastapi import APIRouter, Depends, HTTPException
from typing import List

from api.dependencies import get_db
from api.schemas import BatchUsersRequest, CreateUserRequest, UpdateUserRequest
from database.db_manager import DatabaseManager
from database.exceptions import DuplicateError
from handicap import (
    HandicapHistoryPoint,
    HandicapUpdateResult,
    handicap_history,
    log_update_results,
    update_user_handicap,
)
from models import User

router = APIRouter()


async def _require_user(db: DatabaseManager, user_id: str) -> User:
    user = await db.users.get_user(user_id)
    if not user:
        raise HTTPException(404, "User not found")
    return user


@router.get("/by-email/{email}", response_model=User)
async def get_user_by_email(email: str, db: DatabaseManager = Depends(get_db)):
    user = await db.users.get_user_by_email(email)
    if not user:
        raise HTTPException(404, "User not found")
    return user


@router.post("/batch", response_model=List[User])
async def get_users_batch(req: BatchUsersRequest, db: DatabaseManager = Depends(get_db)):
    """Several users at once, in the order asked for. Unknown ids are left out."""
    return await db.users.get_users(req.user_ids)


@router.get("/{user_id}", response_model=User)
async def get_user(user_id: str, db: DatabaseManager = Depends(get_db)):
    return await _require_user(db, user_id)


@router.put("/{user_id}", response_model=User)
async def update_user(
    user_id: str,
    req: UpdateUserRequest,
    db: DatabaseManager = Depends(get_db),
):
    try:
        user = await db.users.update_user(user_id, **req.model_dump(exclude_unset=True))
    except DuplicateError:
        raise HTTPException(409, f"Email '{req.email}' is already registered")
    if not user:
        raise HTTPException(404, "User not found")
    return user


@router.post("", response_model=User, status_code=201)
async def create_user(req: CreateUserRequest, db: DatabaseManager = Depends(get_db)):
    """Register a golfer. New players start at the maximum index."""
    user = User(first_name=req.first_name, last_name=req.last_name, email=req.email)
    try:
        return await db.users.create_user(user)
    except DuplicateError:
        raise HTTPException(409, f"Email '{req.email}' is already registered")


@router.delete("/{user_id}", status_code=204)
async def delete_user(user_id: str, db: DatabaseManager = Depends(get_db)):
    deleted = await db.users.delete_user(user_id)
    if not deleted:
        raise HTTPException(404, "User not found")


# ================================================================
# Handicap
# ================================================================

@router.get("/{user_id}/handicap-history", response_model=List[HandicapHistoryPoint])
async def get_handicap_history(user_id: str, db: DatabaseManager = Depends(get_db)):
    """Approximate index after each of the user's rounds, oldest first."""
    await _require_user(db, user_id)
    rounds = await db.rounds.get_rounds_chronological(user_id)
    return handicap_history(rounds)


@router.post("/{user_id}/handicap/recalculate", response_model=HandicapUpdateResult)
async def recalculate_handicap(user_id: str, db: DatabaseManager = Depends(get_db)):
    """Recompute the stored index on demand and report the outcome."""
    await _require_user(db, user_id)
    result = await update_user_handicap(db, user_id)
    log_update_results([result])
    return result
