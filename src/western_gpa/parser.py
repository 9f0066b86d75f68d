from __future__ import annotations

import csv
import logging
import re
from typing import Iterable, List, NamedTuple, Optional, Sequence, Tuple

from .config import DEFAULT_CREDITS, DEFAULT_TERM
from .records import CourseRecord, build_record, format_number, parse_number

logger = logging.getLogger(__name__)

HEADER_KEYWORDS = ("course", "name", "grade")

NAME_SYNONYMS = ("course", "name", "subject")
PERCENTAGE_SYNONYMS = ("percentage", "grade", "mark")
CREDITS_SYNONYMS = ("credits", "credit", "weight")
TERM_SYNONYMS = ("semester", "term", "session")

BOILERPLATE_KEYWORDS = (
    "student name",
    "print date",
    "manitoba grade",
    "basis of admission",
    "page",
    "faculty of",
    "beginning of undergraduate record",
    "program:",
    "plan:",
    "honor:",
    "term honor:",
    "scholarships and grants",
    "end of western university unofficial transcript",
    "the following table:",
)

TERM_HEADER = re.compile(r"(20\d{2})\s*(Fall/Winter|Fall|Winter|Summer)", re.IGNORECASE)

COURSE_CODE = r"[A-Z]{2,10}\s+\d{3,4}[A-Z]*"


class Candidate(NamedTuple):
    name: str
    percentage: str
    credits: str


class LineLayout(NamedTuple):
    label: str
    pattern: re.Pattern
    name_group: int
    percentage_group: int
    credits_group: int
    # Fallback layouts weight a non-positive credit field as a full course.
    defaults_credits: bool = True

    def match(self, line: str) -> Optional[Candidate]:
        found = self.pattern.search(line)
        if not found:
            return None
        return Candidate(
            name=found.group(self.name_group),
            percentage=found.group(self.percentage_group),
            credits=self._credits(found.group(self.credits_group)),
        )

    def _credits(self, raw: str) -> str:
        if not self.defaults_credits:
            return raw
        credits = parse_number(raw)
        if credits is None or credits <= 0:
            return format_number(DEFAULT_CREDITS)
        return raw


# Tried in order; the first layout that matches a line decides it.
LAYOUTS: Tuple[LineLayout, ...] = (
    LineLayout(
        "primary",
        re.compile(rf"({COURSE_CODE})\s+(.+?)\s+(\d+\.\d+)\s+(\d+\.\d+)\s+(\d{{1,3}})\s*$"),
        name_group=1,
        percentage_group=5,
        credits_group=3,
        defaults_credits=False,
    ),
    LineLayout(
        "code-credits-percentage",
        re.compile(rf"^({COURSE_CODE})\s+(\d+\.\d+)\s+(\d{{1,3}}(?:\.\d+)?)\s*$"),
        name_group=1,
        percentage_group=3,
        credits_group=2,
    ),
    LineLayout(
        "code-percentage-credits",
        re.compile(rf"^({COURSE_CODE})\s+(\d{{1,3}}(?:\.\d+)?)\s+(\d+\.\d+)\s*$"),
        name_group=1,
        percentage_group=2,
        credits_group=3,
    ),
    LineLayout(
        "comma-separated",
        re.compile(r'^"?(.*?)"?,\s*(\d{1,3}(?:\.\d*)?),\s*(\d+\.\d+)\s*$'),
        name_group=1,
        percentage_group=2,
        credits_group=3,
    ),
)


def _clean_text(value) -> str:
    if value is None:
        return ""
    return str(value).strip()


def find_column_index(headers: Sequence[str], synonyms: Iterable[str]) -> Optional[int]:
    """Return the index of the first header containing a synonym.

    Synonyms are tried in priority order and headers left to right; matching
    is a case-insensitive substring test, so ``"Final Grade %"`` answers to
    ``"grade"``.
    """
    lowered = [_clean_text(header).lower() for header in headers]
    for synonym in synonyms:
        needle = synonym.lower()
        for idx, header in enumerate(lowered):
            if needle in header:
                return idx
    return None


def _is_header(row: Sequence) -> bool:
    return any(
        keyword in _clean_text(cell).lower() for cell in row for keyword in HEADER_KEYWORDS
    )


def _cell(row: Sequence, idx: Optional[int], fallback: Optional[int]):
    position = fallback if idx is None else idx
    if position is None or position >= len(row):
        return None
    return row[position]


def parse_rows(rows: Sequence[Sequence]) -> List[CourseRecord]:
    """Turn table rows (header optional) into course records.

    Without a recognizable header the first three columns are read as name,
    percentage and credits. Rows that fail validation are dropped.
    """
    if not rows:
        return []

    headers: List[str] = []
    start = 0
    if _is_header(rows[0]):
        headers = [_clean_text(cell) for cell in rows[0]]
        start = 1
        logger.debug("Detected header row: %s", headers)

    name_idx = find_column_index(headers, NAME_SYNONYMS)
    percentage_idx = find_column_index(headers, PERCENTAGE_SYNONYMS)
    credits_idx = find_column_index(headers, CREDITS_SYNONYMS)
    term_idx = find_column_index(headers, TERM_SYNONYMS)

    records: List[CourseRecord] = []
    skipped = 0
    for row in rows[start:]:
        if not row or not any(_clean_text(cell) for cell in row):
            continue

        name = _clean_text(_cell(row, name_idx, 0))
        percentage = _cell(row, percentage_idx, 1)
        credits = parse_number(_cell(row, credits_idx, 2))
        if credits is None or credits <= 0:
            credits = DEFAULT_CREDITS
        term = _clean_text(_cell(row, term_idx, None)) or DEFAULT_TERM

        record = build_record(name, percentage, credits, term, len(records) + 1)
        if record is None:
            skipped += 1
            continue
        records.append(record)

    logger.debug("Table rows: %d accepted, %d skipped", len(records), skipped)
    return records


def _split_line(line: str) -> List[str]:
    try:
        fields = next(csv.reader([line], skipinitialspace=True), [])
    except csv.Error:
        # Unbalanced quotes or oversized fields: fall back to a plain split.
        fields = line.split(",")
    return [field.strip().strip('"').strip() for field in fields]


def split_delimited(text: str) -> List[List[str]]:
    """Split comma-separated text into fields, one line per row."""
    return [_split_line(line) for line in text.splitlines()]


def parse_delimited(text: str) -> List[CourseRecord]:
    """Parse comma-separated transcript text."""
    return parse_rows(split_delimited(text))


def parse_grid(grid: Sequence[Optional[Sequence]]) -> List[CourseRecord]:
    """Parse a decoded spreadsheet grid; ``None`` rows and cells count as missing."""
    return parse_rows([list(row) if row else [] for row in grid])


def _convert_term_header(line: str) -> Optional[str]:
    match = TERM_HEADER.search(line)
    if not match:
        return None
    year, season = match.groups()
    return f"{year}-{season.replace('/Winter', '-Winter')}"


def _is_noise(line: str) -> bool:
    lowered = line.lower()
    if any(keyword in lowered for keyword in BOILERPLATE_KEYWORDS):
        return True
    return "course" in lowered and "grade" in lowered and "credits" in lowered


def scan_line(line: str, term: str) -> Tuple[str, Optional[Candidate]]:
    """Fold one transcript line into ``(term, candidate)``.

    A term header changes the term and yields no candidate; a course line
    yields the candidate from the first matching layout.
    """
    line = line.strip()
    if not line or _is_noise(line):
        return term, None

    header_term = _convert_term_header(line)
    if header_term:
        logger.debug("Term header %r -> %s", line, header_term)
        return header_term, None

    for layout in LAYOUTS:
        candidate = layout.match(line)
        if candidate:
            return term, candidate
    return term, None


def parse_free_text(text: str, term: str = DEFAULT_TERM) -> List[CourseRecord]:
    """Parse plain or PDF-extracted transcript text line by line."""
    records: List[CourseRecord] = []
    for line in text.splitlines():
        term, candidate = scan_line(line, term)
        if candidate is None:
            continue
        record = build_record(
            candidate.name, candidate.percentage, candidate.credits, term, len(records) + 1
        )
        if record is None:
            logger.debug("Dropped line %r: matched but failed validation", line.strip())
            continue
        records.append(record)
    return records
