from __future__ import annotations

import logging
import math
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

from .config import DEFAULT_TERM

logger = logging.getLogger(__name__)


@dataclass
class CourseRecord:
    """A single graded course in canonical form.

    ``percentage`` and ``credits`` keep their decimal text so values such as
    ``"0.5"`` display exactly as they were read; parse them before comparing.
    """

    id: int
    name: str
    percentage: str
    credits: str
    term: str
    is_valid: bool = True

    def to_dict(self) -> Dict[str, Any]:
        """Serializable form without the validity flag."""
        data = asdict(self)
        data.pop("is_valid")
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CourseRecord":
        return cls(
            id=data["id"],
            name=str(data.get("name", "")),
            percentage=str(data.get("percentage", "")),
            credits=str(data.get("credits", "")),
            term=str(data.get("term") or DEFAULT_TERM),
            is_valid=True,
        )


def parse_number(value) -> Optional[float]:
    """Parse a raw cell or regex capture into a finite float, else ``None``."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        try:
            number = float(str(value).strip())
        except ValueError:
            return None
    return number if math.isfinite(number) else None


def format_number(value: float) -> str:
    if value.is_integer():
        return str(int(value))
    return repr(value)


def build_record(
    name, percentage, credits, term: str, record_id: int
) -> Optional[CourseRecord]:
    """Validate one candidate course, returning ``None`` when it is unusable."""
    course_name = "" if name is None else str(name).strip()
    if not course_name:
        return None

    percent = parse_number(percentage)
    if percent is None or percent < 0 or percent > 100:
        logger.debug("Rejected %r: percentage %r out of range", course_name, percentage)
        return None

    weight = parse_number(credits)
    if weight is None or weight <= 0:
        logger.debug("Rejected %r: credits %r not positive", course_name, credits)
        return None

    return CourseRecord(
        id=record_id,
        name=course_name,
        percentage=format_number(percent),
        credits=format_number(weight),
        term=term,
    )
