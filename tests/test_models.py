import pytest
from datetime import date
from pydantic import ValidationError

from models import Course, Hole, HoleScore, Round, User


# ================================================================
# Hole
# ================================================================

def test_hole_validation():
    h = Hole(number=1, par=4, stroke_index=18)
    assert h.number == 1
    assert h.par == 4

    with pytest.raises(ValidationError):
        Hole(number=1, par=7)             # par > 6

    with pytest.raises(ValidationError):
        Hole(number=1, stroke_index=19)   # stroke index > 18


# ================================================================
# Course
# ================================================================

def test_course_par_calculations():
    holes = [Hole(number=i, par=4, stroke_index=i) for i in range(1, 19)]
    course = Course(name="Test Course", holes=holes)

    assert course.calculated_par == 72
    assert course.front_nine_par == 36
    assert course.back_nine_par == 36
    assert course.get_par() == 72

    # Explicit par field overrides calculated
    course.par = 71
    assert course.get_par() == 71


def test_course_ratings_for_tee():
    course = Course(course_rating={"White": 70.4}, slope_rating={"White": 126})

    assert course.ratings_for("white") == (70.4, 126.0)
    assert course.tee_colors == ["White"]

    with pytest.raises(ValueError):
        course.ratings_for("blue")


def test_course_rating_ranges():
    with pytest.raises(ValidationError):
        Course(course_rating={"white": 70.0}, slope_rating={"white": 50})    # slope < 55

    with pytest.raises(ValidationError):
        Course(course_rating={"white": 90.0}, slope_rating={"white": 120})   # rating > 85


def test_course_tee_needs_both_ratings():
    with pytest.raises(ValidationError, match="missing slope rating"):
        Course(course_rating={"white": 70.0})

    with pytest.raises(ValidationError, match="missing course rating"):
        Course(slope_rating={"white": 120})


def test_course_update_field_reports_error():
    course = Course(course_rating={"white": 70.0}, slope_rating={"white": 120})

    assert course.update_field("slope_rating", {"white": 200}) is not None
    assert course.slope_rating == {"white": 120}
    assert course.update_field("name", "Renamed") is None
    assert course.name == "Renamed"


# ================================================================
# HoleScore
# ================================================================

def test_hole_score_validation_and_logic():
    with pytest.raises(ValidationError):
        HoleScore(hole_number=1, par=4, strokes=4, putts=5)   # putts > strokes

    with pytest.raises(ValidationError):
        HoleScore(hole_number=1, par=3, strokes=3, fairway_hit=True)

    hs = HoleScore(hole_number=1, par=4, strokes=5, putts=2)
    assert hs.to_par() == 1
    assert hs.get_score_type() == "bogey"

    assert HoleScore(hole_number=1, par=5, strokes=3).get_score_type() == "eagle"
    assert HoleScore(hole_number=1, par=4, strokes=3).get_score_type() == "birdie"
    assert HoleScore(hole_number=1, par=4, strokes=6).get_score_type() == "double bogey"


def test_score_type_extremes():
    assert HoleScore(hole_number=1, par=5, strokes=2).get_score_type() == "albatross"
    assert HoleScore(hole_number=1, par=4, strokes=9).get_score_type() == "5+ over"


def test_hole_score_requires_strokes_and_par():
    with pytest.raises(ValidationError):
        HoleScore(hole_number=1, par=4)

    with pytest.raises(ValidationError):
        HoleScore(hole_number=1, strokes=4)


# ================================================================
# Round
# ================================================================

def _scores(n, strokes=5, par=4):
    return [HoleScore(hole_number=i, par=par, strokes=strokes) for i in range(1, n + 1)]


def test_round_totals():
    r = Round(hole_scores=_scores(18))

    assert r.calculate_total_score() == 90
    assert r.calculate_total_par() == 72
    assert r.calculate_front_nine() == 45
    assert r.calculate_back_nine() == 45
    assert r.total_to_par() == 18
    assert r.is_complete()


def test_round_nine_holes():
    r = Round(number_of_holes=9, hole_scores=_scores(9, strokes=4))

    assert r.calculate_total_score() == 36
    assert r.calculate_back_nine() is None
    assert r.is_complete()


def test_round_hole_count_must_match():
    with pytest.raises(ValidationError):
        Round(number_of_holes=18, hole_scores=_scores(9))

    with pytest.raises(ValidationError):
        Round(number_of_holes=12)   # only 9 or 18


def test_round_duplicate_hole_numbers():
    scores = _scores(9)
    scores[1] = HoleScore(hole_number=1, par=4, strokes=4)
    with pytest.raises(ValidationError):
        Round(number_of_holes=9, hole_scores=scores)


def test_round_stored_totals_win():
    r = Round(hole_scores=_scores(18), total_score=88, total_par=72)
    assert r.total_to_par() == 16


def test_round_without_scores():
    r = Round(date=date(2025, 1, 1), score_differential=12.1)
    assert r.calculate_total_score() is None
    assert r.total_to_par() is None
    assert not r.is_complete()
    assert not r.is_group_round


def test_round_get_hole_score():
    r = Round(hole_scores=_scores(18))
    assert r.get_hole_score(3).hole_number == 3
    assert r.get_hole_score(19) is None


# ================================================================
# User
# ================================================================

def test_user_defaults_to_maximum_handicap():
    u = User(first_name="Ada", last_name="Lovelace", email="ada@example.com")
    assert u.handicap_index == 54.0
    assert u.full_name == "Ada Lovelace"


def test_user_handicap_bounds():
    with pytest.raises(ValidationError):
        User(handicap_index=-0.1)

    with pytest.raises(ValidationError):
        User(handicap_index=54.1)

    u = User()
    assert u.update_field("handicap_index", 60) is not None
    assert u.handicap_index == 54.0
