"""
Handicap index aggregation.

Two strategies live here:

- ``WHS``: the authoritative index published on the player record. Uses the
  WHS count table over the most recent 20 differentials.
- ``HISTORY``: the approximation used to draw the handicap history chart.
  Coarser count rule, a 0.96 bonus factor, and no 20-round window.

Both share ``average_of_best``.
"""

from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Optional, Sequence

MIN_HANDICAP = 0.0
MAX_HANDICAP = 54.0
MAX_ROUNDS_CONSIDERED = 20
HISTORY_BONUS_FACTOR = 0.96

# (minimum round count, scores to use), checked top-down.
WHS_COUNT_TABLE = (
    (20, 8),
    (19, 7),
    (16, 6),
    (12, 5),
    (9, 4),
    (6, 3),
    (3, 2),
    (1, 1),
)


class HandicapStrategy(str, Enum):
    """Which aggregation rule to apply."""
    WHS = "whs"
    HISTORY = "history"


def round_half_up(value: float, places: int = 1) -> float:
    """Round with .5 going away from zero (2.25 -> 2.3, -2.25 -> -2.3)."""
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def clamp_handicap(value: float) -> float:
    return max(MIN_HANDICAP, min(MAX_HANDICAP, value))


def average_of_best(differentials: Sequence[float], count: int) -> float:
    """Mean of the ``count`` lowest differentials."""
    best = sorted(differentials)[:count]
    return sum(best) / len(best)


def whs_scores_to_use(round_count: int) -> int:
    """Number of best differentials counted for ``round_count`` rounds."""
    for minimum, scores in WHS_COUNT_TABLE:
        if round_count >= minimum:
            return scores
    return 0


def history_scores_to_use(round_count: int) -> Optional[int]:
    """Count rule for the history chart. None means no index yet."""
    if round_count >= 20:
        return 8
    if round_count >= 6:
        return int(round_count * 0.4)
    if round_count >= 3:
        return 1
    return None


def compute_handicap(recent_differentials: Sequence[float]) -> float:
    """
    Handicap index from a player's differentials, most recent first.

    Only the first MAX_ROUNDS_CONSIDERED entries are used. With no rounds the
    player sits at the maximum index.
    """
    considered = list(recent_differentials)[:MAX_ROUNDS_CONSIDERED]
    if not considered:
        return MAX_HANDICAP

    count = whs_scores_to_use(len(considered))
    average = average_of_best(considered, count)
    return clamp_handicap(round_half_up(average))


def compute_history_handicap(differentials: Sequence[float]) -> float:
    """Approximate index after a run of rounds, for the history view."""
    differentials = list(differentials)
    count = history_scores_to_use(len(differentials))
    if count is None:
        return MAX_HANDICAP

    average = average_of_best(differentials, count)
    return round_half_up(clamp_handicap(average * HISTORY_BONUS_FACTOR))


def handicap_for(
    differentials: Sequence[float],
    strategy: HandicapStrategy = HandicapStrategy.WHS,
) -> float:
    """Dispatch to the named strategy."""
    if strategy == HandicapStrategy.HISTORY:
        return compute_history_handicap(differentials)
    return compute_handicap(differentials)
