"""Score differential calculation (World Handicap System)."""

from typing import Union

Number = Union[int, float]

# Slope rating of a course of standard difficulty.
STANDARD_SLOPE = 113


def course_rating_for_holes(eighteen_hole_rating: float, number_of_holes: int = 18) -> float:
    """Rating to feed into compute_differential for the holes actually played.

    A 9-hole round is rated at half the published 18-hole rating for the tee.
    """
    if number_of_holes == 9:
        return eighteen_hole_rating / 2
    return eighteen_hole_rating


def compute_differential(
    total_score: Number,
    course_rating: Number,
    slope_rating: Number,
    number_of_holes: int = 18,
) -> float:
    """
    Convert one round into a score differential.

    For 9-hole rounds the score and the 9-hole course rating are both doubled
    to get an 18-hole equivalent. Slope is always the full 18-hole value.
    The result is not rounded.
    """
    adjusted_score = total_score * 2 if number_of_holes == 9 else total_score
    adjusted_rating = course_rating * 2 if number_of_holes == 9 else course_rating

    return ((adjusted_score - adjusted_rating) * STANDARD_SLOPE) / slope_rating
