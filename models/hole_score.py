from pydantic import Field, model_validator
from typing import Optional

from .base import BaseGolfModel


class HoleScore(BaseGolfModel):
    """A player's result on one hole, with the par it was played to."""
    hole_number: int = Field(..., ge=1, le=18)
    par: int = Field(..., ge=3, le=6)
    strokes: int = Field(..., ge=1, le=15)
    putts: Optional[int] = Field(None, ge=0, le=10)
    fairway_hit: Optional[bool] = None
    green_in_regulation: Optional[bool] = None

    @model_validator(mode='after')
    def validate_score_consistency(self):
        if self.putts is not None and self.putts > self.strokes:
            raise ValueError(f"Putts ({self.putts}) cannot exceed strokes ({self.strokes})")

        # No fairway to hit on a par 3
        if self.par == 3 and self.fairway_hit is not None:
            raise ValueError("Fairway hit should be None for par 3 holes")

        return self

    def to_par(self) -> int:
        """Score relative to par (+2, -1, etc.)."""
        return self.strokes - self.par

    def get_score_type(self) -> str:
        """Name for this score (eagle, birdie, par, bogey, etc.)."""
        relative = self.to_par()
        if relative <= -3:
            return "albatross"
        if relative >= 5:
            return "5+ over"

        score_names = {
            -2: "eagle",
            -1: "birdie",
            0: "par",
            1: "bogey",
            2: "double bogey",
            3: "triple bogey",
            4: "quadruple bogey",
        }
        return score_names[relative]
