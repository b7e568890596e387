from dataclasses import dataclass


@dataclass(frozen=True)
class OcrPage:
    """Recognized text of one page image with its 0-100 confidence."""

    text: str
    confidence: float
