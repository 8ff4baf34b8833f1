"""Replay of the history strategy over a player's chronological rounds."""

from datetime import date as date_type, datetime
from typing import Iterable, List, Optional, Union

from pydantic import BaseModel

from handicap.aggregator import compute_history_handicap
from models.round import Round


class HandicapHistoryPoint(BaseModel):
    """Approximate handicap right after one round."""
    date: Optional[Union[datetime, date_type]] = None
    handicap: float
    score_differential: Optional[float] = None


def handicap_history(rounds: Iterable[Round]) -> List[HandicapHistoryPoint]:
    """
    One point per round, oldest first.

    ``rounds`` must already be ordered by date ascending. Each point uses every
    round up to and including its own. Rounds without a stored differential
    still get a point but do not count towards the index.
    """
    points: List[HandicapHistoryPoint] = []
    differentials: List[float] = []

    for round_obj in rounds:
        if round_obj.score_differential is not None:
            differentials.append(round_obj.score_differential)

        points.append(
            HandicapHistoryPoint(
                date=round_obj.date,
                handicap=compute_history_handicap(differentials),
                score_differential=round_obj.score_differential,
            )
        )

    return points
