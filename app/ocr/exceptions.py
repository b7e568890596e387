class OcrError(Exception):
    """Base exception for OCR engine errors."""


class OcrConfigurationError(OcrError):
    """Raised when the OCR engine binary or its language data is unavailable."""


class OcrRecognitionError(OcrError):
    """Raised when recognition of a single page image fails."""
