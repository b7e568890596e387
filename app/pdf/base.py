from abc import ABC, abstractmethod


class BasePdfTextParser(ABC):
    """Contract for adapters that read a PDF's embedded text layer."""

    @abstractmethod
    def pages(self, pdf_bytes: bytes) -> list[str]:
        """Return the text of every page, in page order.

        Pages without a text layer yield an empty string.

        Raises:
            PdfExtractionError: if the document cannot be parsed.
        """


class BasePdfRenderer(ABC):
    """Contract for adapters that rasterize PDF pages."""

    @abstractmethod
    def page_count(self, pdf_bytes: bytes) -> int:
        """Return the number of pages.

        Raises:
            PdfRenderError: if the document cannot be opened.
        """

    @abstractmethod
    def render_page(self, pdf_bytes: bytes, index: int, dpi: int) -> bytes:
        """Render the zero-based page ``index`` to PNG bytes at ``dpi``.

        Raises:
            PdfRenderError: if the page cannot be rendered.
        """
