from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from .config import TERMS
from .records import CourseRecord, parse_number
from .scale import grade_point_for, percentage_floor_for


@dataclass(frozen=True)
class WhatIfProjection:
    target_gpa: float
    additional_credits: float
    required_gpa: float
    achievable: bool
    # Lowest percentage on the scale for ``required_gpa``; ``None`` unless the
    # required grade point (to one decimal) is exactly a scale value.
    required_percentage: Optional[int]


def _weighted(record: CourseRecord) -> Optional[Tuple[float, float]]:
    if not record.is_valid:
        return None
    percentage = parse_number(record.percentage)
    credits = parse_number(record.credits)
    if percentage is None or credits is None or credits <= 0:
        return None
    grade_point = grade_point_for(percentage)
    if grade_point is None:
        return None
    return grade_point * credits, credits


def _totals(records: Iterable[CourseRecord]) -> Tuple[float, float]:
    points = credits = 0.0
    for record in records:
        weighted = _weighted(record)
        if weighted:
            points += weighted[0]
            credits += weighted[1]
    return points, credits


def average_percentage(records: Iterable[CourseRecord]) -> Optional[float]:
    """Credit-weighted mean percentage over valid records."""
    total = credits = 0.0
    for record in records:
        if _weighted(record) is None:
            continue
        weight = parse_number(record.credits)
        total += parse_number(record.percentage) * weight
        credits += weight
    return total / credits if credits else None


def overall_gpa(records: Iterable[CourseRecord]) -> Optional[float]:
    """Credit-weighted mean grade point, or ``None`` with nothing to weigh."""
    points, credits = _totals(records)
    return points / credits if credits else None


def term_gpas(records: Iterable[CourseRecord]) -> Dict[str, float]:
    """GPA per term, known terms in calendar order, unknown ones as first seen."""
    by_term: "OrderedDict[str, List[CourseRecord]]" = OrderedDict()
    for record in records:
        by_term.setdefault(record.term, []).append(record)

    order = [term for term in TERMS if term in by_term]
    order += [term for term in by_term if term not in TERMS]

    result: Dict[str, float] = {}
    for term in order:
        gpa = overall_gpa(by_term[term])
        if gpa is not None:
            result[term] = gpa
    return result


def project_what_if(
    records: Iterable[CourseRecord], target_gpa: float, additional_credits: float
) -> WhatIfProjection:
    """Grade point needed over ``additional_credits`` to finish at ``target_gpa``."""
    if not 0.0 <= target_gpa <= 4.0:
        raise ValueError(f"Target GPA must be between 0.0 and 4.0, got {target_gpa}")
    if additional_credits <= 0:
        raise ValueError(f"Additional credits must be positive, got {additional_credits}")

    points, credits = _totals(records)
    required = (target_gpa * (credits + additional_credits) - points) / additional_credits
    return WhatIfProjection(
        target_gpa=target_gpa,
        additional_credits=additional_credits,
        required_gpa=required,
        achievable=0.0 <= required <= 4.0,
        required_percentage=percentage_floor_for(required),
    )
