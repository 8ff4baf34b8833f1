"""Round API endpoints.

Every create or delete recomputes the affected players' handicap indexes
afterwards. That step is best effort: its failures are logged and never turn
a successful round write into an error response.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from typing import List

from api.dependencies import get_db
from api.schemas import (
    CreateMultiPlayerRoundRequest,
    CreateRoundRequest,
    DeleteRoundsResponse,
    MultiPlayerRoundResponse,
    RoundsByCriteriaRequest,
    RoundSummaryResponse,
    UpdateRoundRequest,
)
from database.db_manager import DatabaseManager
from database.exceptions import IntegrityError, NotFoundError
from handicap import build_group_rounds, build_round, log_update_results, update_handicaps
from models import Round

logger = logging.getLogger(__name__)

router = APIRouter()


def summarize_round(r: Round) -> RoundSummaryResponse:
    """Project a full Round model into a lightweight summary."""
    return RoundSummaryResponse(
        id=r.id,
        course_name=r.course_name,
        tee_color=r.tee_color,
        number_of_holes=r.number_of_holes,
        date=r.date,
        total_score=r.total_score,
        to_par=r.total_to_par(),
        front_nine=r.calculate_front_nine(),
        back_nine=r.calculate_back_nine(),
        score_differential=r.score_differential,
        players=r.players,
    )


async def _refresh_handicaps(db: DatabaseManager, user_ids) -> None:
    results = await update_handicaps(db, user_ids)
    log_update_results(results)


async def _load_course(db: DatabaseManager, course_id: str):
    course = await db.courses.get_course(course_id)
    if not course:
        raise HTTPException(404, "Course not found")
    return course


@router.get("/user/{user_id}", response_model=List[RoundSummaryResponse])
async def get_rounds_for_user(
    user_id: str,
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    db: DatabaseManager = Depends(get_db),
):
    rounds = await db.rounds.get_rounds_for_user(user_id, limit=limit, offset=offset)
    return [summarize_round(r) for r in rounds]


@router.get("/{round_id}", response_model=Round)
async def get_round(round_id: str, db: DatabaseManager = Depends(get_db)):
    round_ = await db.rounds.get_round(round_id)
    if not round_:
        raise HTTPException(404, "Round not found")
    return round_


@router.post("/by-criteria", response_model=List[Round])
async def get_rounds_by_criteria(
    req: RoundsByCriteriaRequest,
    db: DatabaseManager = Depends(get_db),
):
    """Each listed user's round on a date at a course (at most one per user)."""
    rounds = await db.rounds.find_group_rounds(req.user_ids, req.date, req.course_id)
    first_per_user = {}
    for r in rounds:
        first_per_user.setdefault(r.user_id, r)
    return list(first_per_user.values())


@router.post("", response_model=Round, status_code=201)
async def create_round(req: CreateRoundRequest, db: DatabaseManager = Depends(get_db)):
    """Record a round, fix its score differential and refresh the player's handicap."""
    if not await db.users.get_user(req.user_id):
        raise HTTPException(404, "User not found")
    course = await _load_course(db, req.course_id)

    try:
        round_ = build_round(
            req.user_id,
            course,
            tee_color=req.tee_color,
            date=req.date,
            hole_scores=[h.to_model() for h in req.holes],
            number_of_holes=req.number_of_holes,
            notes=req.notes,
        )
        saved = await db.rounds.create_round(round_)
    except ValueError as e:
        raise HTTPException(400, str(e))
    except IntegrityError as e:
        raise HTTPException(400, str(e))

    await _refresh_handicaps(db, [req.user_id])
    return saved


@router.post("/multi-player", response_model=MultiPlayerRoundResponse, status_code=201)
async def create_multi_player_round(
    req: CreateMultiPlayerRoundRequest,
    db: DatabaseManager = Depends(get_db),
):
    """Record one round per player of a group, each linked to the others."""
    player_ids = [ps.player_id for ps in req.player_scores]
    if len(set(player_ids)) != len(player_ids):
        raise HTTPException(400, "Each player can only appear once")
    missing = await db.users.missing_user_ids(player_ids)
    if missing:
        raise HTTPException(400, f"Unknown players: {', '.join(missing)}")
    course = await _load_course(db, req.course_id)

    try:
        rounds = build_group_rounds(
            course,
            {ps.player_id: [h.to_model() for h in ps.holes] for ps in req.player_scores},
            tee_color=req.tee_color,
            date=req.date,
            number_of_holes=req.number_of_holes,
        )
        saved = await db.rounds.create_rounds(rounds)
    except ValueError as e:
        raise HTTPException(400, str(e))
    except IntegrityError as e:
        raise HTTPException(400, str(e))

    await _refresh_handicaps(db, player_ids)
    return MultiPlayerRoundResponse(
        message=f"Successfully created {len(saved)} rounds",
        rounds=saved,
    )


@router.put("/{round_id}", response_model=Round)
async def update_round(
    round_id: str,
    req: UpdateRoundRequest,
    db: DatabaseManager = Depends(get_db),
):
    """Edit hole scores and/or notes. The stored differential is left as it was."""
    existing = await db.rounds.get_round(round_id)
    if not existing:
        raise HTTPException(404, "Round not found")

    try:
        hole_scores = None
        if req.holes is not None:
            hole_scores = [h.to_model() for h in req.holes]
            # must still match the round's hole count
            existing.hole_scores = hole_scores
        return await db.rounds.update_round(round_id, hole_scores=hole_scores, notes=req.notes)
    except ValueError as e:
        raise HTTPException(400, str(e))
    except NotFoundError:
        raise HTTPException(404, "Round not found")


@router.delete("/{round_id}", response_model=DeleteRoundsResponse)
async def delete_round(round_id: str, db: DatabaseManager = Depends(get_db)):
    """Delete a round; for a group round, the other players' rounds go too."""
    round_ = await db.rounds.get_round(round_id)
    if not round_:
        raise HTTPException(404, "Round not found")

    to_delete = [round_]
    if round_.is_group_round and round_.course_id:
        related = await db.rounds.find_group_rounds(
            [round_.user_id, *round_.players], round_.date, round_.course_id
        )
        to_delete.extend(r for r in related if r.id != round_.id)

    deleted = await db.rounds.delete_rounds([r.id for r in to_delete])
    await _refresh_handicaps(db, [r.user_id for r in to_delete])

    return DeleteRoundsResponse(
        message=f"{deleted} round{'s' if deleted != 1 else ''} deleted",
        deleted_count=deleted,
    )
