from __future__ import annotations

import io
import logging

import pdfplumber
from pdfminer.psparser import PSException
from pdfplumber.utils.exceptions import PdfminerException

from .errors import UnreadableInputError

logger = logging.getLogger(__name__)


def extract_text(content: bytes) -> str:
    """Extract the text layer of every page, one page after another.

    Image-only pages contribute nothing; there is no OCR fallback.
    """
    try:
        with pdfplumber.open(io.BytesIO(content)) as pdf:
            pages = [page.extract_text() or "" for page in pdf.pages]
    except (PdfminerException, PSException) as exc:
        raise UnreadableInputError(f"Could not read PDF: {exc}") from exc

    logger.debug("Extracted text from %d PDF pages", len(pages))
    return "\n".join(pages)
