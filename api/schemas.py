"""API request and response models."""

from datetime import date as date_type
from pydantic import BaseModel, Field
from typing import List, Literal, Optional

from models import HoleScore, Round


class HoleInput(BaseModel):
    hole_number: int
    par: int
    strokes: int
    putts: Optional[int] = None
    fairway_hit: Optional[bool] = None
    green_in_regulation: Optional[bool] = None

    def to_model(self) -> HoleScore:
        return HoleScore(**self.model_dump())


class CreateRoundRequest(BaseModel):
    user_id: str
    course_id: str
    tee_color: str
    number_of_holes: Literal[9, 18] = 18
    date: date_type
    holes: List[HoleInput] = Field(..., min_length=1)
    notes: Optional[str] = None


class PlayerScoresInput(BaseModel):
    player_id: str
    holes: List[HoleInput] = Field(..., min_length=1)


class CreateMultiPlayerRoundRequest(BaseModel):
    course_id: str
    tee_color: str
    number_of_holes: Literal[9, 18] = 18
    date: date_type
    player_scores: List[PlayerScoresInput] = Field(..., min_length=1)


class RoundsByCriteriaRequest(BaseModel):
    date: date_type
    course_id: str
    user_ids: List[str] = Field(..., min_length=1)


class UpdateRoundRequest(BaseModel):
    holes: Optional[List[HoleInput]] = None
    notes: Optional[str] = None


class RoundSummaryResponse(BaseModel):
    """Lightweight round for list views."""
    id: str
    course_name: Optional[str] = None
    tee_color: Optional[str] = None
    number_of_holes: int
    date: Optional[date_type] = None
    total_score: Optional[int] = None
    to_par: Optional[int] = None
    front_nine: Optional[int] = None
    back_nine: Optional[int] = None
    score_differential: Optional[float] = None
    players: List[str] = []


class MultiPlayerRoundResponse(BaseModel):
    message: str
    rounds: List[Round]


class DeleteRoundsResponse(BaseModel):
    message: str
    deleted_count: int


class CreateUserRequest(BaseModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: str


class UpdateUserRequest(BaseModel):
    """Profile edit. Only the fields sent are changed."""
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None


class BatchUsersRequest(BaseModel):
    user_ids: List[str] = Field(..., min_length=1, max_length=100)


class TeeRatingInput(BaseModel):
    color: str
    course_rating: float
    slope_rating: float


class HoleDefinitionInput(BaseModel):
    number: int
    par: Optional[int] = None
    stroke_index: Optional[int] = None


class CreateCourseRequest(BaseModel):
    name: str
    location: Optional[str] = None
    par: Optional[int] = None
    holes: List[HoleDefinitionInput] = []
    tees: List[TeeRatingInput] = []


class CourseSummaryResponse(BaseModel):
    """Course for card/list views."""
    id: str
    name: Optional[str] = None
    location: Optional[str] = None
    par: Optional[int] = None
    total_holes: int = 0
    tee_colors: List[str] = []
