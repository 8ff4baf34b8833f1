"""Building rounds for storage, with their differential fixed at creation."""

from datetime import date as date_type
from typing import Dict, List, Optional, Sequence

from handicap.differential import compute_differential, course_rating_for_holes
from models.course import Course
from models.hole_score import HoleScore
from models.round import Round


def build_round(
    user_id: str,
    course: Course,
    *,
    tee_color: str,
    date: date_type,
    hole_scores: Sequence[HoleScore],
    number_of_holes: int = 18,
    players: Optional[List[str]] = None,
    notes: Optional[str] = None,
) -> Round:
    """
    Assemble a new Round and compute its score differential.

    Raises ValueError if the course has no ratings for ``tee_color`` or the
    hole scores do not cover ``number_of_holes``.
    The differential is never recomputed once the round is stored.
    """
    eighteen_hole_rating, slope_rating = course.ratings_for(tee_color)
    course_rating = course_rating_for_holes(eighteen_hole_rating, number_of_holes)

    round_ = Round(
        user_id=user_id,
        course_id=course.id,
        course_name=course.name,
        tee_color=tee_color,
        number_of_holes=number_of_holes,
        date=date,
        players=players or [],
        hole_scores=list(hole_scores),
        notes=notes,
    )
    total_score = round_.calculate_total_score()
    if total_score is None:
        raise ValueError("A round needs hole scores to be rated")
    round_.total_score = total_score
    round_.total_par = round_.calculate_total_par()
    round_.score_differential = compute_differential(
        total_score, course_rating, slope_rating, number_of_holes
    )
    return round_


def build_group_rounds(
    course: Course,
    player_scores: Dict[str, Sequence[HoleScore]],
    *,
    tee_color: str,
    date: date_type,
    number_of_holes: int = 18,
) -> List[Round]:
    """One round per player; each round lists the other players in the group."""
    player_ids = list(player_scores)
    return [
        build_round(
            player_id,
            course,
            tee_color=tee_color,
            date=date,
            hole_scores=scores,
            number_of_holes=number_of_holes,
            players=[p for p in player_ids if p != player_id],
        )
        for player_id, scores in player_scores.items()
    ]
