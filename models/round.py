from datetime import date as date_type, datetime
from pydantic import Field, model_validator
from typing import List, Literal, Optional

from .base import BaseGolfModel
from .hole_score import HoleScore


class Round(BaseGolfModel):
    """
    A round of golf played by one user.

    score_differential is computed once when the round is created and stored
    with it. Later edits to the hole scores never change it.
    """
    id: Optional[str] = None
    user_id: Optional[str] = None
    course_id: Optional[str] = None
    course_name: Optional[str] = None
    tee_color: Optional[str] = None
    number_of_holes: Literal[9, 18] = 18
    date: Optional[date_type] = None
    players: List[str] = Field(default_factory=list)  # other players in a group round
    hole_scores: List[HoleScore] = Field(default_factory=list)
    total_score: Optional[int] = None
    total_par: Optional[int] = None
    score_differential: Optional[float] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @model_validator(mode='after')
    def validate_hole_count(self):
        if self.hole_scores and len(self.hole_scores) != self.number_of_holes:
            raise ValueError(
                f"Expected {self.number_of_holes} hole scores, got {len(self.hole_scores)}"
            )
        numbers = [s.hole_number for s in self.hole_scores]
        if len(set(numbers)) != len(numbers):
            raise ValueError("Duplicate hole numbers in hole scores")
        return self

    @property
    def is_group_round(self) -> bool:
        return bool(self.players)

    def calculate_total_score(self) -> Optional[int]:
        """Total strokes for the round."""
        if not self.hole_scores:
            return None
        return sum(s.strokes for s in self.hole_scores)

    def calculate_total_par(self) -> Optional[int]:
        if not self.hole_scores:
            return None
        return sum(s.par for s in self.hole_scores)

    def calculate_front_nine(self) -> Optional[int]:
        """Total strokes for holes 1-9."""
        front = [s.strokes for s in self.hole_scores if s.hole_number <= 9]
        return sum(front) if front else None

    def calculate_back_nine(self) -> Optional[int]:
        """Total strokes for holes 10-18."""
        back = [s.strokes for s in self.hole_scores if s.hole_number >= 10]
        return sum(back) if back else None

    def is_complete(self) -> bool:
        return len(self.hole_scores) == self.number_of_holes

    def get_hole_score(self, hole_number: int) -> Optional[HoleScore]:
        for score in self.hole_scores:
            if score.hole_number == hole_number:
                return score
        return None

    def total_to_par(self) -> Optional[int]:
        total = self.total_score if self.total_score is not None else self.calculate_total_score()
        par = self.total_par if self.total_par is not None else self.calculate_total_par()
        if total is None or par is None:
            return None
        return total - par
