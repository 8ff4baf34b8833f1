"""Course API endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query
from typing import List

from api.dependencies import get_db
from api.schemas import CourseSummaryResponse, CreateCourseRequest
from database.db_manager import DatabaseManager
from database.exceptions import DuplicateError, IntegrityError
from models import Course, Hole

router = APIRouter()


def _summarize_course(c: Course) -> CourseSummaryResponse:
    return CourseSummaryResponse(
        id=c.id,
        name=c.name,
        location=c.location,
        par=c.get_par(),
        total_holes=len(c.holes),
        tee_colors=c.tee_colors,
    )


@router.get("", response_model=List[CourseSummaryResponse])
async def list_courses(
    limit: int = Query(50, ge=1, le=100),
    offset: int = Query(0, ge=0),
    db: DatabaseManager = Depends(get_db),
):
    courses = await db.courses.list_courses(limit=limit, offset=offset)
    return [_summarize_course(c) for c in courses]


@router.get("/{course_id}", response_model=Course)
async def get_course(course_id: str, db: DatabaseManager = Depends(get_db)):
    course = await db.courses.get_course(course_id)
    if not course:
        raise HTTPException(404, "Course not found")
    return course


@router.post("", response_model=CourseSummaryResponse, status_code=201)
async def create_course(req: CreateCourseRequest, db: DatabaseManager = Depends(get_db)):
    """Create a course with its per-tee 18-hole ratings."""
    try:
        course = Course(
            name=req.name,
            location=req.location,
            par=req.par,
            holes=[Hole(number=h.number, par=h.par, stroke_index=h.stroke_index) for h in req.holes],
            course_rating={t.color: t.course_rating for t in req.tees},
            slope_rating={t.color: t.slope_rating for t in req.tees},
        )
    except ValueError as e:
        raise HTTPException(400, str(e))

    try:
        created = await db.courses.create_course(course)
    except DuplicateError:
        raise HTTPException(409, "A course with that name and location already exists")
    except IntegrityError as e:
        raise HTTPException(400, str(e))
    return _summarize_course(created)
