import threading

from app.config.settings import Settings
from app.database.models import ExtractionResultRecord, ProcessingStatus
from app.database.repositories.document_repository import DocumentRepository
from app.database.repositories.extraction_result_repository import ExtractionResultRepository
from app.extraction.strategy import ExtractionStrategy
from app.logging.logger import Log
from app.ocr.tesseract_adapter import TesseractAdapter
from app.pdf.factory import PdfParserFactory
from app.pdf.pymupdf_adapter import PyMuPdfRenderer
from app.processor.exceptions import DocumentNotFoundError, ExtractionCancelledError


class Processor:
    """Runs extraction for one document and records its status.

    Pipeline: load -> skip if completed -> mark processing -> extract -> persist.
    """

    def __init__(
        self,
        doc_repo: DocumentRepository,
        result_repo: ExtractionResultRepository,
        strategy: ExtractionStrategy,
    ) -> None:
        self._doc_repo = doc_repo
        self._result_repo = result_repo
        self._strategy = strategy

    def process(
        self,
        document_id: int,
        cancel_event: threading.Event | None = None,
    ) -> ExtractionResultRecord:
        """Extract text for a document and persist the outcome.

        A strategy failure is stored as a failed result and returned, not raised.

        Raises:
            DocumentNotFoundError: if no document with this ID exists.
            ExtractionCancelledError: if shutdown interrupted the extraction;
                the result is left in the processing state.
        """
        document = self._doc_repo.find_by_id(document_id)
        if document is None:
            raise DocumentNotFoundError(f"Document {document_id} not found")

        existing = self._result_repo.find_by_document_id(document_id)
        if existing is not None and existing.status == ProcessingStatus.COMPLETED:
            Log.info(f"Extraction already completed for document {document_id}")
            return existing

        self._result_repo.upsert(
            ExtractionResultRecord(document_id=document_id, status=ProcessingStatus.PROCESSING)
        )
        Log.info(f"Processing document {document_id} ({document.file_name})")

        try:
            outcome = self._strategy.extract(document.content or b"", cancel_event)
        except ExtractionCancelledError:
            raise
        except Exception as exc:
            Log.error(f"Extraction failed for document {document_id}: {exc}")
            return self._result_repo.upsert(
                ExtractionResultRecord(
                    document_id=document_id,
                    status=ProcessingStatus.FAILED,
                    error_message=str(exc) or type(exc).__name__,
                )
            )

        result = self._result_repo.upsert(
            ExtractionResultRecord(
                document_id=document_id,
                status=ProcessingStatus.COMPLETED,
                extracted_text=outcome.text,
                confidence=outcome.confidence,
            )
        )
        Log.info(
            f"Extraction completed for document {document_id} via {outcome.method}, "
            f"confidence {outcome.confidence:.1f}"
        )
        return result


def build_processor(settings: Settings) -> Processor:
    """Build a Processor with all required adapters."""
    strategy = ExtractionStrategy.from_settings(
        settings,
        parser=PdfParserFactory.create(settings),
        renderer=PyMuPdfRenderer(),
        ocr_engine=TesseractAdapter.from_settings(settings),
    )
    return Processor(
        doc_repo=DocumentRepository(),
        result_repo=ExtractionResultRepository(),
        strategy=strategy,
    )
