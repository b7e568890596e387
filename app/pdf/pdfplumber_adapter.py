import io

import pdfplumber

from app.pdf.base import BasePdfTextParser
from app.pdf.exceptions import PdfExtractionError


class PdfPlumberAdapter(BasePdfTextParser):
    """Reads the text layer of a PDF using pdfplumber."""

    def pages(self, pdf_bytes: bytes) -> list[str]:
        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                return [(page.extract_text() or "").strip() for page in pdf.pages]
        except Exception as exc:
            raise PdfExtractionError(f"pdfplumber extraction failed: {exc}") from exc
