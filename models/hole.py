from pydantic import Field
from typing import Optional

from .base import BaseGolfModel


class Hole(BaseGolfModel):
    """A single hole on a course. stroke_index 1 is the hardest hole."""
    number: Optional[int] = Field(None, ge=1, le=18)
    par: Optional[int] = Field(None, ge=3, le=6)
    stroke_index: Optional[int] = Field(None, ge=1, le=18)
