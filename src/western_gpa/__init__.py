"""
Western GPA Transcript Tools

Read transcripts exported as CSV, Excel, PDF or plain text into course
records and compute GPA statistics on the Western University scale.
"""

__all__ = [
    "CourseRecord",
    "IngestResult",
    "IngestStatus",
    "build_record",
    "grade_point_for",
    "ingest_delimited_text",
    "ingest_file",
    "ingest_free_text",
    "ingest_grid",
    "percentage_floor_for",
]

__version__ = "0.1.0"

from .ingest import (  # noqa: E402
    IngestResult,
    IngestStatus,
    ingest_delimited_text,
    ingest_file,
    ingest_free_text,
    ingest_grid,
)
from .records import CourseRecord, build_record  # noqa: E402
from .scale import grade_point_for, percentage_floor_for  # noqa: E402
