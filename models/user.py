from datetime import datetime
from pydantic import Field
from typing import Optional

from .base import BaseGolfModel

DEFAULT_HANDICAP_INDEX = 54.0


class User(BaseGolfModel):
    """A golfer. handicap_index is the latest published value only."""
    id: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    handicap_index: float = Field(DEFAULT_HANDICAP_INDEX, ge=0.0, le=54.0)
    last_handicap_update: Optional[datetime] = None
    created_at: Optional[datetime] = None

    @property
    def full_name(self) -> str:
        return " ".join(p for p in (self.first_name, self.last_name) if p)
