"""
Snapshot persistence.

The on-disk shape is ``{"courses": [...], "gpa": ..., "semesterGPAs": {...}}``.
Courses are stored without their validity flag; every restored record is
marked valid again.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable, List

from .errors import UnreadableInputError
from .records import CourseRecord
from .stats import overall_gpa, term_gpas


def dump_snapshot(records: Iterable[CourseRecord]) -> str:
    records = list(records)
    data = {
        "courses": [record.to_dict() for record in records],
        "gpa": overall_gpa(records),
        "semesterGPAs": term_gpas(records),
    }
    return json.dumps(data, indent=2)


def load_snapshot(text: str) -> List[CourseRecord]:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise UnreadableInputError(f"Snapshot is not valid JSON: {exc}") from exc

    courses = data.get("courses", []) if isinstance(data, dict) else None
    if not isinstance(courses, list):
        raise UnreadableInputError("Snapshot 'courses' must be a list")

    try:
        return [CourseRecord.from_dict(course) for course in courses]
    except (KeyError, TypeError, AttributeError) as exc:
        raise UnreadableInputError(f"Snapshot contains a malformed course: {exc}") from exc


def save_snapshot(path: Path, records: Iterable[CourseRecord]) -> None:
    path.write_text(dump_snapshot(records), encoding="utf-8")


def read_snapshot(path: Path) -> List[CourseRecord]:
    return load_snapshot(path.read_text(encoding="utf-8"))
