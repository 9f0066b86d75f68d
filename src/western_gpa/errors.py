"""Exceptions raised when a transcript cannot be ingested as a whole."""


class TranscriptError(Exception):
    """Base class for input-level ingestion failures."""


class UnsupportedFormatError(TranscriptError):
    """Raised when a file type is not one of the accepted transcript formats."""


class UnreadableInputError(TranscriptError):
    """Raised when a buffer of a supported type cannot be decoded."""
