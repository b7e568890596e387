from pathlib import Path

from app.config.settings import Settings
from app.database.models import DocumentRecord, ExtractionResultRecord
from app.database.repositories.document_repository import DocumentRepository
from app.database.repositories.extraction_result_repository import ExtractionResultRepository
from app.ingestion.exceptions import ScanDirectoryNotConfiguredError
from app.ingestion.ingestor import DocumentIngestor
from app.ingestion.models import ScanSummary
from app.ingestion.scanner import FileScanner
from app.logging.logger import Log
from app.processor.exceptions import DocumentNotFoundError
from app.worker.work_queue import WorkQueue


class DocumentService:
    """Operations offered to callers: scanning, (re)queueing and lookups."""

    def __init__(
        self,
        scanner: FileScanner,
        ingestor: DocumentIngestor,
        doc_repo: DocumentRepository,
        result_repo: ExtractionResultRepository,
        queue: WorkQueue,
        settings: Settings,
    ) -> None:
        self._scanner = scanner
        self._ingestor = ingestor
        self._doc_repo = doc_repo
        self._result_repo = result_repo
        self._queue = queue
        self._settings = settings

    def scan(self, directory: str | Path) -> ScanSummary:
        """Scan a directory and ingest every file not seen before.

        Raises:
            DirectoryScanError: if the directory exists but cannot be listed.
        """
        Log.info(f"Starting directory scan: {directory}")
        candidates = self._scanner.scan(directory)
        new_count = self._ingestor.ingest(candidates)
        Log.info(
            f"Scan completed. Found {len(candidates)} files, {new_count} new files added."
        )
        return ScanSummary(scanned_count=len(candidates), new_count=new_count)

    def scan_configured(self) -> ScanSummary:
        """Scan the directory named by the SCAN_DIRECTORY setting."""
        if not self._settings.scan_directory:
            raise ScanDirectoryNotConfiguredError(
                "Scan directory is not configured. Set SCAN_DIRECTORY."
            )
        return self.scan(self._settings.scan_directory)

    def enqueue(self, document_id: int) -> None:
        """Queue a stored document for (re)processing.

        This is the only way to retry a failed extraction.

        Raises:
            DocumentNotFoundError: if no document with this ID exists.
        """
        if self._doc_repo.find_by_id(document_id) is None:
            raise DocumentNotFoundError(f"Document {document_id} not found")
        self._queue.put(document_id)
        Log.info(f"Enqueued document {document_id} for extraction")

    def recover_unprocessed(self) -> int:
        """Re-queue documents whose extraction never finished (e.g. after a restart)."""
        document_ids = self._doc_repo.find_unprocessed_ids()
        for document_id in document_ids:
            self._queue.put(document_id)
        if document_ids:
            Log.info(f"Re-queued {len(document_ids)} unprocessed documents")
        return len(document_ids)

    def get_result(self, document_id: int) -> ExtractionResultRecord | None:
        return self._result_repo.find_by_document_id(document_id)

    def get_document(self, document_id: int) -> DocumentRecord:
        """Load a document including its content.

        Raises:
            DocumentNotFoundError: if no document with this ID exists.
        """
        document = self._doc_repo.find_by_id(document_id)
        if document is None:
            raise DocumentNotFoundError(f"Document {document_id} not found")
        return document

    def get_content(self, document_id: int) -> bytes:
        """Return the stored bytes, or b"" for an unknown document."""
        return self._doc_repo.get_content(document_id)

    def list_documents(self, offset: int = 0, limit: int = 50) -> list[DocumentRecord]:
        Log.debug(f"Listing documents: offset={offset}, limit={limit}")
        return self._doc_repo.list_documents(offset, limit)

    def count_documents(self) -> int:
        return self._doc_repo.count_all()


def build_document_service(settings: Settings, queue: WorkQueue) -> DocumentService:
    doc_repo = DocumentRepository()
    return DocumentService(
        scanner=FileScanner(),
        ingestor=DocumentIngestor(doc_repo, queue),
        doc_repo=doc_repo,
        result_repo=ExtractionResultRepository(),
        queue=queue,
        settings=settings,
    )
