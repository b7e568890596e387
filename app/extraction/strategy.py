import threading

from app.config.settings import Settings
from app.extraction.models import ExtractionOutcome
from app.logging.logger import Log
from app.ocr.base import BaseOcrEngine
from app.ocr.exceptions import OcrRecognitionError
from app.pdf.base import BasePdfRenderer, BasePdfTextParser
from app.pdf.exceptions import PdfExtractionError, PdfRenderError
from app.processor.exceptions import ExtractionCancelledError

PAGE_SEPARATOR = "\n\n"


def page_marker(page_number: int) -> str:
    return f"--- Page {page_number} ---"


class ExtractionStrategy:
    """Direct text-layer extraction with a page-by-page OCR fallback.

    Documents whose text layer yields at least ``min_text_length`` characters
    are accepted as-is with ``direct_confidence``. Everything else is rendered
    page by page and passed through the OCR engine; the overall confidence is
    the mean over pages that produced text.
    """

    def __init__(
        self,
        parser: BasePdfTextParser,
        renderer: BasePdfRenderer,
        ocr_engine: BaseOcrEngine,
        languages: str = "pol+eng",
        min_text_length: int = 50,
        direct_confidence: float = 95.0,
        dpi: int = 300,
    ) -> None:
        self._parser = parser
        self._renderer = renderer
        self._ocr_engine = ocr_engine
        self._languages = languages
        self._min_text_length = min_text_length
        self._direct_confidence = direct_confidence
        self._dpi = dpi

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        parser: BasePdfTextParser,
        renderer: BasePdfRenderer,
        ocr_engine: BaseOcrEngine,
    ) -> "ExtractionStrategy":
        return cls(
            parser=parser,
            renderer=renderer,
            ocr_engine=ocr_engine,
            languages=settings.ocr_languages,
            min_text_length=settings.min_direct_text_length,
            direct_confidence=settings.direct_text_confidence,
            dpi=settings.ocr_dpi,
        )

    def extract(
        self,
        pdf_bytes: bytes,
        cancel_event: threading.Event | None = None,
    ) -> ExtractionOutcome:
        """Extract text from raw PDF bytes.

        Raises:
            OcrConfigurationError: if the OCR engine or its language data is missing.
            ExtractionCancelledError: if ``cancel_event`` is set between pages.
        """
        self._ocr_engine.ensure_ready(self._languages)

        direct = self._extract_direct(pdf_bytes)
        if direct is not None:
            return direct
        return self._extract_ocr(pdf_bytes, cancel_event)

    def _extract_direct(self, pdf_bytes: bytes) -> ExtractionOutcome | None:
        try:
            pages = self._parser.pages(pdf_bytes)
        except PdfExtractionError as exc:
            Log.warning(f"No readable text layer, falling back to OCR: {exc}")
            return None

        text = PAGE_SEPARATOR.join(pages).strip()
        if not text or len(text) < self._min_text_length:
            Log.info(
                f"Text layer yielded {len(text)} chars "
                f"(< {self._min_text_length}), falling back to OCR"
            )
            return None

        Log.info(f"Extracted {len(text)} chars from text layer of {len(pages)} pages")
        return ExtractionOutcome(
            text=text,
            confidence=self._direct_confidence,
            method="direct",
            page_count=len(pages),
            recognized_pages=len(pages),
        )

    def _extract_ocr(
        self,
        pdf_bytes: bytes,
        cancel_event: threading.Event | None,
    ) -> ExtractionOutcome:
        try:
            page_count = self._renderer.page_count(pdf_bytes)
        except PdfRenderError as exc:
            Log.warning(f"Document cannot be rendered, no pages to recognize: {exc}")
            page_count = 0

        texts: list[str] = []
        confidences: list[float] = []
        for index in range(page_count):
            if cancel_event is not None and cancel_event.is_set():
                raise ExtractionCancelledError(
                    f"Extraction cancelled before page {index + 1} of {page_count}"
                )
            try:
                image = self._renderer.render_page(pdf_bytes, index, self._dpi)
                page = self._ocr_engine.recognize(image, self._languages)
            except (PdfRenderError, OcrRecognitionError) as exc:
                Log.error(f"Skipping page {index + 1}: {exc}")
                continue

            page_text = page.text.strip()
            if not page_text:
                Log.debug(f"Page {index + 1} yielded no text")
                continue
            texts.append(f"{page_marker(index + 1)}\n{page_text}")
            confidences.append(page.confidence)

        confidence = sum(confidences) / len(confidences) if confidences else 0.0
        Log.info(
            f"OCR recognized text on {len(texts)} of {page_count} pages, "
            f"confidence {confidence:.1f}"
        )
        return ExtractionOutcome(
            text=PAGE_SEPARATOR.join(texts),
            confidence=confidence,
            method="ocr",
            page_count=page_count,
            recognized_pages=len(texts),
        )
