from .aggregator import (
    MAX_HANDICAP,
    MIN_HANDICAP,
    HandicapStrategy,
    compute_handicap,
    compute_history_handicap,
    handicap_for,
)
from .differential import STANDARD_SLOPE, compute_differential, course_rating_for_holes
from .history import HandicapHistoryPoint, handicap_history
from .rounds import build_group_rounds, build_round
from .updater import HandicapUpdateResult, log_update_results, update_handicaps, update_user_handicap

__all__ = [
    "MAX_HANDICAP",
    "MIN_HANDICAP",
    "STANDARD_SLOPE",
    "HandicapStrategy",
    "HandicapHistoryPoint",
    "HandicapUpdateResult",
    "compute_differential",
    "course_rating_for_holes",
    "compute_handicap",
    "compute_history_handicap",
    "handicap_for",
    "handicap_history",
    "build_round",
    "build_group_rounds",
    "update_user_handicap",
    "update_handicaps",
    "log_update_results",
]
