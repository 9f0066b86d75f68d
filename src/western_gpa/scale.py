from __future__ import annotations

import math
from typing import NamedTuple, Optional, Tuple


class GradeScaleEntry(NamedTuple):
    min: int
    max: int
    grade_point: float
    letter: str


# Highest band first; bands are disjoint and cover 0-100 inclusive.
GRADE_SCALE: Tuple[GradeScaleEntry, ...] = (
    GradeScaleEntry(90, 100, 4.0, "A+"),
    GradeScaleEntry(85, 89, 3.9, "A"),
    GradeScaleEntry(80, 84, 3.7, "A-"),
    GradeScaleEntry(77, 79, 3.3, "B+"),
    GradeScaleEntry(73, 76, 3.0, "B"),
    GradeScaleEntry(70, 72, 2.7, "B-"),
    GradeScaleEntry(67, 69, 2.3, "C+"),
    GradeScaleEntry(63, 66, 2.0, "C"),
    GradeScaleEntry(60, 62, 1.7, "C-"),
    GradeScaleEntry(57, 59, 1.3, "D+"),
    GradeScaleEntry(53, 56, 1.0, "D"),
    GradeScaleEntry(50, 52, 0.7, "D-"),
    GradeScaleEntry(0, 49, 0.0, "F"),
)


def entry_for(percentage: float) -> Optional[GradeScaleEntry]:
    """Return the band containing ``percentage``.

    Fractional percentages belong to the band of their integer part, so 89.5
    is an ``A`` rather than falling between bands.
    """
    if isinstance(percentage, bool):
        return None
    try:
        value = float(percentage)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(value) or value < 0 or value > 100:
        return None
    for entry in GRADE_SCALE:
        if value >= entry.min:
            return entry
    return None


def grade_point_for(percentage: float) -> Optional[float]:
    entry = entry_for(percentage)
    return entry.grade_point if entry else None


def letter_for(percentage: float) -> Optional[str]:
    entry = entry_for(percentage)
    return entry.letter if entry else None


def percentage_floor_for(grade_point: float) -> Optional[int]:
    """Return the lowest percentage that earns exactly ``grade_point``.

    The grade point is rounded to one decimal before comparison. Values that
    are not on the scale (3.5, for example) have no floor and give ``None``.
    """
    if isinstance(grade_point, bool):
        return None
    try:
        value = float(grade_point)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(value):
        return None
    rounded = round(value, 1)
    for entry in GRADE_SCALE:
        if entry.grade_point == rounded:
            return entry.min
    return None
