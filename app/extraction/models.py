from dataclasses import dataclass


@dataclass(frozen=True)
class ExtractionOutcome:
    """Text pulled from a document and how it was obtained."""

    text: str
    confidence: float
    method: str
    page_count: int = 0
    recognized_pages: int = 0
