"""Best-effort recompute of a player's stored handicap index.

Round mutations call these after their own write has succeeded. A failed
update is returned as a HandicapUpdateResult, never raised, so a stale index
can never fail the round save that triggered it. Concurrent updates for the
same player are last-writer-wins.
"""

import asyncio
import logging
from typing import Iterable, List, Optional

from pydantic import BaseModel

from handicap.aggregator import MAX_ROUNDS_CONSIDERED, compute_handicap

logger = logging.getLogger(__name__)


class HandicapUpdateResult(BaseModel):
    """Outcome of one recompute-and-overwrite."""
    user_id: str
    success: bool
    handicap: Optional[float] = None
    rounds_used: int = 0
    error: Optional[str] = None


async def update_user_handicap(db, user_id: str) -> HandicapUpdateResult:
    """Recompute ``user_id``'s index from their latest rounds and store it."""
    try:
        differentials = await db.rounds.get_recent_differentials(
            user_id, limit=MAX_ROUNDS_CONSIDERED
        )
        handicap = compute_handicap(differentials)
        await db.users.update_handicap(user_id, handicap)
    except Exception as e:
        return HandicapUpdateResult(
            user_id=user_id,
            success=False,
            error=f"{type(e).__name__}: {e}",
        )

    return HandicapUpdateResult(
        user_id=user_id,
        success=True,
        handicap=handicap,
        rounds_used=len(differentials),
    )


async def update_handicaps(db, user_ids: Iterable[str]) -> List[HandicapUpdateResult]:
    """Update several players independently. Order of completion is not defined."""
    unique_ids = list(dict.fromkeys(user_ids))
    return list(await asyncio.gather(
        *(update_user_handicap(db, user_id) for user_id in unique_ids)
    ))


def log_update_results(results: Iterable[HandicapUpdateResult]) -> None:
    for result in results:
        if result.success:
            logger.info(
                "Updated handicap for user %s: %.1f (from %d rounds)",
                result.user_id, result.handicap, result.rounds_used,
            )
        else:
            logger.warning(
                "Handicap update failed for user %s: %s", result.user_id, result.error
            )
