import pytest

from handicap.differential import STANDARD_SLOPE, compute_differential, course_rating_for_holes


def test_scratch_round_on_standard_slope_is_zero():
    assert compute_differential(72, 72.0, 113, 18) == 0.0


def test_default_is_eighteen_holes():
    assert compute_differential(85, 71.3, 128) == compute_differential(85, 71.3, 128, 18)


def test_eighteen_hole_formula():
    # (85 - 71.3) * 113 / 128
    assert compute_differential(85, 71.3, 128) == pytest.approx(12.0945, abs=1e-4)


def test_nine_hole_round_matches_doubled_eighteen_hole_round():
    assert compute_differential(40, 36, 113, 9) == compute_differential(80, 72, 113, 18)


def test_nine_hole_keeps_full_slope():
    # score and rating doubled, slope untouched: (90 - 70) * 113 / 130
    assert compute_differential(45, 35.0, 130, 9) == pytest.approx(20 * 113 / 130)


def test_score_below_rating_gives_negative_differential():
    assert compute_differential(68, 72.0, 113) == pytest.approx(-4.0)


def test_steeper_slope_shrinks_differential():
    easy = compute_differential(90, 72.0, 100)
    hard = compute_differential(90, 72.0, 140)
    assert hard < easy


def test_no_rounding_applied():
    value = compute_differential(83, 70.1, 131)
    assert value == (83 - 70.1) * STANDARD_SLOPE / 131


def test_course_rating_for_holes():
    assert course_rating_for_holes(72.4, 18) == 72.4
    assert course_rating_for_holes(72.4, 9) == pytest.approx(36.2)
    assert course_rating_for_holes(72.4) == 72.4
