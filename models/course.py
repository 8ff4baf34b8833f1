from pydantic import Field, field_validator, model_validator
from typing import Dict, List, Optional, Tuple

from .base import BaseGolfModel
from .hole import Hole


class Course(BaseGolfModel):
    """Golf course with its holes and per-tee ratings."""

    id: Optional[str] = None
    name: Optional[str] = None
    location: Optional[str] = None
    # 18-hole values keyed by tee color
    slope_rating: Dict[str, float] = Field(default_factory=dict)
    course_rating: Dict[str, float] = Field(default_factory=dict)
    par: Optional[int] = Field(None, ge=27, le=80)
    holes: List[Hole] = Field(default_factory=list)

    @field_validator('slope_rating')
    @classmethod
    def validate_slope_values(cls, v):
        for tee_color, slope in v.items():
            if slope is not None and not 55 <= slope <= 155:
                raise ValueError(f"Slope {slope} for '{tee_color}' outside USGA range (55-155)")
        return v

    @field_validator('course_rating')
    @classmethod
    def validate_course_rating_values(cls, v):
        for tee_color, rating in v.items():
            if rating is not None and not 55.0 <= rating <= 85.0:
                raise ValueError(f"Course rating {rating} for '{tee_color}' outside range (55-85)")
        return v

    @model_validator(mode='after')
    def validate_tee_rating_consistency(self):
        """Every rated tee needs both a slope and a course rating."""
        for tee_color in self.course_rating:
            if tee_color not in self.slope_rating:
                raise ValueError(f"Tee '{tee_color}' missing slope rating")
        for tee_color in self.slope_rating:
            if tee_color not in self.course_rating:
                raise ValueError(f"Tee '{tee_color}' missing course rating")
        return self

    @property
    def tee_colors(self) -> List[str]:
        return sorted(self.course_rating)

    def _match_tee(self, color: str) -> Optional[str]:
        for tee_color in self.course_rating:
            if tee_color.lower() == color.lower():
                return tee_color
        return None

    def ratings_for(self, tee_color: str) -> Tuple[float, float]:
        """(18-hole course rating, slope) for a tee; raises ValueError if unrated."""
        key = self._match_tee(tee_color) if tee_color else None
        if key is None:
            raise ValueError(f"Course has no ratings for tee '{tee_color}'")
        return self.course_rating[key], self.slope_rating[key]

    @property
    def calculated_par(self) -> Optional[int]:
        if not self.holes or any(h.par is None for h in self.holes):
            return None
        return sum(h.par for h in self.holes)

    def get_par(self) -> Optional[int]:
        """Explicit par if set, otherwise summed from holes."""
        return self.par if self.par is not None else self.calculated_par

    @property
    def front_nine_par(self) -> Optional[int]:
        """Calculate par for holes 1-9."""
        front = [h for h in self.holes if h.number and 1 <= h.number <= 9]
        if not front or any(h.par is None for h in front):
            return None
        return sum(h.par for h in front)

    @property
    def back_nine_par(self) -> Optional[int]:
        """Calculate par for holes 10-18."""
        back = [h for h in self.holes if h.number and 10 <= h.number <= 18]
        if not back or any(h.par is None for h in back):
            return None
        return sum(h.par for h in back)
