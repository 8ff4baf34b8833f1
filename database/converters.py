"""Conversion between asyncpg database rows and Pydantic domain models.

Centralizes all mapping logic between the normalized DB schema
and the nested Pydantic models.
"""

from typing import Iterable, List, Optional
from uuid import UUID

from models import Course, Hole, HoleScore, Round, User


# ================================================================
# Ids
# ================================================================

def parse_id(value: Optional[str]) -> Optional[UUID]:
    """Request id -> UUID, or None when malformed (it can match no row)."""
    try:
        return UUID(value)
    except (TypeError, ValueError, AttributeError):
        return None


def parse_ids(values: Iterable[str]) -> List[UUID]:
    """Distinct well-formed ids, in first-seen order."""
    parsed = (parse_id(v) for v in dict.fromkeys(values))
    return [u for u in parsed if u is not None]


# ================================================================
# Row -> Model (reads)
# ================================================================

def hole_from_row(row) -> Hole:
    """courses.holes row -> Hole model."""
    return Hole(
        number=row["hole_number"],
        par=row["par"],
        stroke_index=row["stroke_index"],
    )


def course_from_rows(course_row, hole_rows: list, rating_rows: list) -> Course:
    """Assemble a Course from its row, hole rows and tee rating rows."""
    holes = sorted(
        [hole_from_row(r) for r in hole_rows],
        key=lambda h: h.number or 0,
    )
    return Course(
        id=str(course_row["id"]),
        name=course_row["name"],
        location=course_row["location"],
        par=course_row["par"],
        course_rating={r["tee_color"]: float(r["course_rating"]) for r in rating_rows},
        slope_rating={r["tee_color"]: float(r["slope_rating"]) for r in rating_rows},
        holes=holes,
    )


def hole_score_from_row(row) -> HoleScore:
    """users.hole_scores row -> HoleScore model."""
    return HoleScore(
        hole_number=row["hole_number"],
        par=row["par"],
        strokes=row["strokes"],
        putts=row["putts"],
        fairway_hit=row["fairway_hit"],
        green_in_regulation=row["green_in_regulation"],
    )


def round_from_rows(round_row, hole_score_rows: list) -> Round:
    """Assemble a Round from its row and hole score rows."""
    hole_scores = sorted(
        [hole_score_from_row(r) for r in hole_score_rows],
        key=lambda hs: hs.hole_number,
    )
    differential = round_row["score_differential"]
    return Round(
        id=str(round_row["id"]),
        user_id=str(round_row["user_id"]),
        course_id=str(round_row["course_id"]) if round_row["course_id"] else None,
        course_name=round_row["course_name"],
        tee_color=round_row["tee_color"],
        number_of_holes=round_row["number_of_holes"],
        date=round_row["round_date"],
        players=[str(p) for p in (round_row["players"] or [])],
        hole_scores=hole_scores,
        total_score=round_row["total_score"],
        total_par=round_row["total_par"],
        score_differential=float(differential) if differential is not None else None,
        notes=round_row["notes"],
        created_at=round_row["created_at"],
        updated_at=round_row["updated_at"],
    )


def user_from_row(user_row) -> User:
    """users.users row -> User model."""
    return User(
        id=str(user_row["id"]),
        first_name=user_row["first_name"],
        last_name=user_row["last_name"],
        email=user_row["email"],
        handicap_index=float(user_row["handicap_index"]),
        last_handicap_update=user_row["last_handicap_update"],
        created_at=user_row["created_at"],
    )


# ================================================================
# Model -> Row (writes)
# ================================================================

def course_to_row(course: Course) -> dict:
    """Course -> dict for courses.courses INSERT."""
    return {
        "name": course.name,
        "location": course.location,
        "par": course.get_par(),
    }


def hole_to_row(hole: Hole, course_id: UUID) -> tuple:
    """Hole -> tuple for courses.holes INSERT (for executemany)."""
    return (course_id, hole.number, hole.par, hole.stroke_index)


def tee_ratings_to_rows(course: Course, course_id: UUID) -> List[tuple]:
    """Course ratings -> tuples for courses.tee_ratings INSERT."""
    return [
        (course_id, tee_color, course.course_rating[tee_color], int(course.slope_rating[tee_color]))
        for tee_color in course.tee_colors
    ]


def hole_score_to_row(hs: HoleScore, round_id: UUID) -> tuple:
    """HoleScore -> tuple for users.hole_scores INSERT."""
    return (
        round_id, hs.hole_number, hs.par, hs.strokes,
        hs.putts, hs.fairway_hit, hs.green_in_regulation,
    )


def round_to_row(round_: Round) -> dict:
    """Round -> dict for users.rounds INSERT."""
    return {
        "user_id": UUID(round_.user_id),
        "course_id": UUID(round_.course_id) if round_.course_id else None,
        "course_name": round_.course_name,
        "tee_color": round_.tee_color,
        "number_of_holes": round_.number_of_holes,
        "round_date": round_.date,
        "players": [UUID(p) for p in round_.players],
        "total_score": round_.total_score,
        "total_par": round_.total_par,
        "score_differential": round_.score_differential,
        "notes": round_.notes,
    }


def user_to_row(user: User) -> dict:
    """User -> dict for users.users INSERT."""
    return {
        "first_name": user.first_name,
        "last_name": user.last_name,
        "email": user.email,
        "handicap_index": user.handicap_index,
    }

