from .base import BaseGolfModel
from .course import Course
from .hole import Hole
from .hole_score import HoleScore
from .round import Round
from .user import User

__all__ = ["BaseGolfModel", "Course", "Hole", "HoleScore", "Round", "User"]
