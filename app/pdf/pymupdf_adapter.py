import pymupdf

from app.pdf.base import BasePdfRenderer, BasePdfTextParser
from app.pdf.exceptions import PdfExtractionError, PdfRenderError


class PyMuPdfAdapter(BasePdfTextParser):
    """Reads the text layer of a PDF using PyMuPDF."""

    def pages(self, pdf_bytes: bytes) -> list[str]:
        try:
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                return [page.get_text().strip() for page in doc]
        except Exception as exc:
            raise PdfExtractionError(f"pymupdf extraction failed: {exc}") from exc


class PyMuPdfRenderer(BasePdfRenderer):
    """Rasterizes PDF pages to PNG using PyMuPDF."""

    def page_count(self, pdf_bytes: bytes) -> int:
        try:
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                return int(doc.page_count)
        except Exception as exc:
            raise PdfRenderError(f"pymupdf could not open document: {exc}") from exc

    def render_page(self, pdf_bytes: bytes, index: int, dpi: int) -> bytes:
        try:
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                pixmap = doc.load_page(index).get_pixmap(dpi=dpi)
                return bytes(pixmap.tobytes("png"))
        except Exception as exc:
            raise PdfRenderError(f"pymupdf could not render page {index + 1}: {exc}") from exc
