class PdfError(Exception):
    """Base exception for PDF adapter errors."""


class PdfExtractionError(PdfError):
    """Raised when the text layer of a PDF cannot be read."""


class PdfRenderError(PdfError):
    """Raised when a PDF or one of its pages cannot be rasterized."""
