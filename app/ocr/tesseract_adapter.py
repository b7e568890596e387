import io
from pathlib import Path

import pytesseract
from PIL import Image, UnidentifiedImageError

from app.config.settings import Settings
from app.logging.logger import Log
from app.ocr.base import BaseOcrEngine
from app.ocr.exceptions import OcrConfigurationError, OcrRecognitionError
from app.ocr.models import OcrPage


class TesseractAdapter(BaseOcrEngine):
    """Runs Tesseract through pytesseract."""

    LANGUAGE_DATA_ERRORS = ("Failed loading language", "Error opening data file")

    def __init__(self, tessdata_dir: str = "", tesseract_cmd: str = "") -> None:
        self._tessdata_dir = tessdata_dir
        if tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = tesseract_cmd
        self._ready_languages: set[str] = set()

    @classmethod
    def from_settings(cls, settings: Settings) -> "TesseractAdapter":
        return cls(tessdata_dir=settings.tessdata_dir, tesseract_cmd=settings.tesseract_cmd)

    def ensure_ready(self, languages: str) -> None:
        if languages in self._ready_languages:
            return

        requested = [code for code in languages.split("+") if code]
        if not requested:
            raise OcrConfigurationError("No OCR languages configured")
        if self._tessdata_dir and not Path(self._tessdata_dir).is_dir():
            raise OcrConfigurationError(
                f"Tesseract data directory not found: {self._tessdata_dir}"
            )

        try:
            installed = set(pytesseract.get_languages(config=self._config()))
        except pytesseract.TesseractNotFoundError as exc:
            raise OcrConfigurationError(f"Tesseract is not installed: {exc}") from exc
        except (pytesseract.TesseractError, OSError) as exc:
            raise OcrConfigurationError(f"Tesseract is misconfigured: {exc}") from exc

        missing = [code for code in requested if code not in installed]
        if missing:
            raise OcrConfigurationError(
                f"Tesseract language data missing for: {', '.join(missing)}"
            )
        self._ready_languages.add(languages)
        Log.info(f"Tesseract ready for languages {languages}")

    def recognize(self, image_bytes: bytes, languages: str) -> OcrPage:
        try:
            with Image.open(io.BytesIO(image_bytes)) as image:
                data = pytesseract.image_to_data(
                    image,
                    lang=languages,
                    config=self._config(),
                    output_type=pytesseract.Output.DICT,
                )
        except pytesseract.TesseractNotFoundError as exc:
            raise OcrConfigurationError(f"Tesseract is not installed: {exc}") from exc
        except pytesseract.TesseractError as exc:
            if any(marker in str(exc) for marker in self.LANGUAGE_DATA_ERRORS):
                self._ready_languages.discard(languages)
                raise OcrConfigurationError(
                    f"Tesseract language data unavailable for {languages}: {exc}"
                ) from exc
            raise OcrRecognitionError(f"Tesseract recognition failed: {exc}") from exc
        except (UnidentifiedImageError, OSError) as exc:
            raise OcrRecognitionError(f"Tesseract recognition failed: {exc}") from exc
        return self._to_page(data)

    def _config(self) -> str:
        if not self._tessdata_dir:
            return ""
        return f'--tessdata-dir "{self._tessdata_dir}"'

    @staticmethod
    def _to_page(data: dict[str, list]) -> OcrPage:
        """Rebuild line text from word boxes; confidence is the mean word confidence."""
        lines: dict[tuple[int, int, int], list[str]] = {}
        confidences: list[float] = []
        for i, word in enumerate(data.get("text", [])):
            word = (word or "").strip()
            confidence = float(data["conf"][i])
            if not word or confidence < 0:
                continue
            key = (data["block_num"][i], data["par_num"][i], data["line_num"][i])
            lines.setdefault(key, []).append(word)
            confidences.append(confidence)

        text = "\n".join(" ".join(words) for words in lines.values())
        confidence = sum(confidences) / len(confidences) if confidences else 0.0
        return OcrPage(text=text, confidence=confidence)
