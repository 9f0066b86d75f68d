"""
Configuration constants for transcript ingestion.

Everything that describes the institution's calendar or the accepted upload
formats lives here so the parsers can stay free of magic values.
"""

# =============================================================================
# TERMS
# =============================================================================

# Known term labels, oldest first. The last entry is used whenever a source
# does not say which term a course belongs to.
TERMS = (
    "2023-Fall",
    "2024-Winter",
    "2024-Fall",
    "2025-Winter",
    "2025-Fall",
    "2026-Winter",
    "2026-Fall",
    "2027-Winter",
    "2027-Fall",
    "2028-Winter",
)

DEFAULT_TERM = TERMS[-1]


# =============================================================================
# RECORD DEFAULTS
# =============================================================================

# Table rows whose credit column is missing or not a positive number are
# weighted as a full course.
DEFAULT_CREDITS = 1.0


# =============================================================================
# UPLOADS
# =============================================================================

MAX_FILE_SIZE_BYTES = 10 * 1024 * 1024

CSV_MEDIA_TYPE = "text/csv"
XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
PDF_MEDIA_TYPE = "application/pdf"
TEXT_MEDIA_TYPE = "text/plain"
