"""
Transcript ingestion entry points.

Each entry point returns a fresh :class:`IngestResult`; a new ingestion
replaces whatever records the caller held before rather than merging into them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import PurePath
from typing import List, Optional, Sequence

from .config import CSV_MEDIA_TYPE, PDF_MEDIA_TYPE, TEXT_MEDIA_TYPE, XLSX_MEDIA_TYPE
from .errors import TranscriptError, UnreadableInputError, UnsupportedFormatError
from .excel import read_first_sheet
from .parser import parse_delimited, parse_free_text, parse_grid
from .pdf import extract_text
from .records import CourseRecord

logger = logging.getLogger(__name__)


class SourceFormat(str, Enum):
    CSV = "CSV"
    EXCEL = "Excel"
    PDF = "PDF"
    TEXT = "TXT"


class IngestStatus(str, Enum):
    PARSED = "parsed"
    EMPTY = "empty"
    UNSUPPORTED = "unsupported"
    UNREADABLE = "unreadable"


MEDIA_TYPE_MAP = {
    CSV_MEDIA_TYPE: SourceFormat.CSV,
    XLSX_MEDIA_TYPE: SourceFormat.EXCEL,
    PDF_MEDIA_TYPE: SourceFormat.PDF,
    TEXT_MEDIA_TYPE: SourceFormat.TEXT,
}

EXTENSION_MAP = {
    ".csv": SourceFormat.CSV,
    ".xlsx": SourceFormat.EXCEL,
    ".pdf": SourceFormat.PDF,
    ".txt": SourceFormat.TEXT,
}


@dataclass
class IngestResult:
    """Records from one ingestion plus the outcome shown to the user."""

    status: IngestStatus
    message: str
    records: List[CourseRecord] = field(default_factory=list)
    source: Optional[SourceFormat] = None

    @property
    def parsed_count(self) -> int:
        return len(self.records)

    @property
    def ok(self) -> bool:
        return self.status in {IngestStatus.PARSED, IngestStatus.EMPTY}


def _summarize(records: List[CourseRecord], source: SourceFormat) -> IngestResult:
    if records:
        logger.info("Parsed %d records from %s", len(records), source.value)
        return IngestResult(
            status=IngestStatus.PARSED,
            message=f"Parsed {len(records)} records from {source.value}.",
            records=records,
            source=source,
        )
    logger.info("No records found in %s input", source.value)
    return IngestResult(
        status=IngestStatus.EMPTY,
        message=f"No records found in {source.value}.",
        source=source,
    )


def ingest_delimited_text(text: str) -> IngestResult:
    return _summarize(parse_delimited(text), SourceFormat.CSV)


def ingest_grid(grid: Sequence[Optional[Sequence]]) -> IngestResult:
    return _summarize(parse_grid(grid), SourceFormat.EXCEL)


def ingest_free_text(text: str, source: SourceFormat = SourceFormat.TEXT) -> IngestResult:
    return _summarize(parse_free_text(text), source)


def detect_format(filename: str, media_type: Optional[str] = None) -> SourceFormat:
    """Resolve the transcript format from the media type, then the extension."""
    if media_type:
        base_type = media_type.split(";", 1)[0].strip().lower()
        if base_type in MEDIA_TYPE_MAP:
            return MEDIA_TYPE_MAP[base_type]

    suffix = PurePath(filename).suffix.lower()
    if suffix in EXTENSION_MAP:
        return EXTENSION_MAP[suffix]

    raise UnsupportedFormatError(
        f"Unsupported file type: {suffix or media_type or filename!r}. "
        "Supported types: .pdf, .txt, .csv, .xlsx"
    )


def _decode_text(content: bytes) -> str:
    try:
        return content.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise UnreadableInputError(f"Text is not valid UTF-8: {exc}") from exc


def ingest_file(
    content: bytes, filename: str, media_type: Optional[str] = None
) -> IngestResult:
    """Dispatch raw file bytes to the matching parser.

    Unsupported and unreadable inputs are reported through the result status
    so callers can tell them apart from a transcript with no courses.
    """
    source: Optional[SourceFormat] = None
    try:
        source = detect_format(filename, media_type)
        if source is SourceFormat.CSV:
            return ingest_delimited_text(_decode_text(content))
        if source is SourceFormat.EXCEL:
            return ingest_grid(read_first_sheet(content))
        if source is SourceFormat.PDF:
            return ingest_free_text(extract_text(content), SourceFormat.PDF)
        return ingest_free_text(_decode_text(content))
    except UnsupportedFormatError as exc:
        logger.warning("Rejected %s: %s", filename, exc)
        return IngestResult(status=IngestStatus.UNSUPPORTED, message=str(exc))
    except TranscriptError as exc:
        logger.warning("Could not read %s: %s", filename, exc)
        return IngestResult(
            status=IngestStatus.UNREADABLE,
            message=f"Error reading {source.value if source else 'file'}: {exc}",
            source=source,
        )
