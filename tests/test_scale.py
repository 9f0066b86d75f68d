import math

import pytest

from western_gpa.scale import (
    GRADE_SCALE,
    entry_for,
    grade_point_for,
    letter_for,
    percentage_floor_for,
)


def test_bands_partition_zero_to_hundred():
    bands = sorted(GRADE_SCALE, key=lambda e: e.min)
    assert len(bands) == 13
    assert bands[0].min == 0
    assert bands[-1].max == 100
    for lower, upper in zip(bands, bands[1:]):
        assert upper.min == lower.max + 1


@pytest.mark.parametrize("percentage", range(0, 101))
def test_every_integer_percentage_has_exactly_one_band(percentage):
    containing = [e for e in GRADE_SCALE if e.min <= percentage <= e.max]
    assert len(containing) == 1
    assert grade_point_for(percentage) == containing[0].grade_point


@pytest.mark.parametrize(
    "percentage, expected",
    [(100, 4.0), (90, 4.0), (89, 3.9), (85, 3.9), (84, 3.7), (50, 0.7), (49, 0.0), (0, 0.0)],
)
def test_grade_point_boundaries(percentage, expected):
    assert grade_point_for(percentage) == expected


def test_fractional_percentage_uses_band_of_integer_part():
    assert grade_point_for(89.5) == 3.9
    assert grade_point_for(49.99) == 0.0
    assert letter_for(72.4) == "B-"


@pytest.mark.parametrize("value", [-1, 101, 100.5, math.nan, math.inf, "abc", None, True])
def test_out_of_scale_values_have_no_grade_point(value):
    assert grade_point_for(value) is None
    assert entry_for(value) is None


def test_letters():
    assert letter_for(95) == "A+"
    assert letter_for(78) == "B+"
    assert letter_for(10) == "F"


def test_percentage_floor_for_exact_grade_points():
    assert percentage_floor_for(3.9) == 85
    assert percentage_floor_for(4.0) == 90
    assert percentage_floor_for(0.0) == 0
    assert percentage_floor_for(3.94) == 85


def test_percentage_floor_for_off_scale_grade_point():
    assert percentage_floor_for(3.5) is None
    assert percentage_floor_for(4.5) is None
    assert percentage_floor_for(math.nan) is None
