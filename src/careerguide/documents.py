"""Concrete implementations for document-to-text readers."""

import base64
import io
import logging
from abc import ABC, abstractmethod

from pdfminer.high_level import extract_text

from .errors import DocumentError

logger = logging.getLogger(__name__)

PDF_MAGIC = b"%PDF-"


class DocumentReader(ABC):
    """Interface for turning an uploaded document into plain text."""

    @abstractmethod
    def extract_text(self, data: bytes, filename: str = "") -> str:
        """Returns the document's text, pages joined in document order.

        Raises
        ------
        DocumentError
            The document is not in a supported format, is corrupt, or has
            no extractable text.
        """
        pass


class PDFMiner(DocumentReader):
    """Extracts text from PDF files with pdfminer.six."""

    def extract_text(self, data: bytes, filename: str = "") -> str:
        if not data.startswith(PDF_MAGIC):
            raise DocumentError("Please upload a PDF file.")

        try:
            raw = extract_text(io.BytesIO(data))
        except Exception as e:
            logger.warning("PDF extraction failed for %r: %s", filename, e)
            raise DocumentError(
                "Failed to read PDF. Please try a different file."
            ) from e

        # pdfminer separates pages with form feeds
        pages = [page.strip() for page in raw.split("\f")]
        text = "\n".join(page for page in pages if page)
        if not text:
            raise DocumentError(
                "No text could be extracted from this PDF. Scanned documents are not supported."
            )
        return text


def decode_upload(contents: str) -> bytes:
    """Decodes a ``data:<mime>;base64,<payload>`` string from an upload widget."""
    try:
        _, payload = contents.split(",", 1)
        return base64.b64decode(payload, validate=True)
    except (AttributeError, ValueError) as e:
        raise DocumentError("The uploaded file could not be read.") from e
