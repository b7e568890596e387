from abc import ABC, abstractmethod

from app.ocr.models import OcrPage


class BaseOcrEngine(ABC):
    """Contract for OCR engine adapters."""

    @abstractmethod
    def ensure_ready(self, languages: str) -> None:
        """Verify the engine and the language data for ``languages`` are installed.

        Args:
            languages: '+'-joined language codes, e.g. "pol+eng".

        Raises:
            OcrConfigurationError: if the engine or any language is missing.
        """

    @abstractmethod
    def recognize(self, image_bytes: bytes, languages: str) -> OcrPage:
        """Recognize the text of a single encoded page image.

        Raises:
            OcrRecognitionError: if the image cannot be recognized.
            OcrConfigurationError: if the engine became unavailable.
        """
