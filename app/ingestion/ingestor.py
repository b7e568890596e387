from collections.abc import Iterable

from app.database.repositories.document_repository import DocumentRepository
from app.ingestion.models import ScannedFile
from app.logging.logger import Log
from app.worker.work_queue import WorkQueue


class DocumentIngestor:
    """Stores unseen scanned files and queues them for extraction.

    Identical content is stored and queued once, whatever its name or path.
    The exists check is an early-out; the unique fingerprint constraint is
    what keeps concurrent scans from inserting the same bytes twice.
    """

    def __init__(self, doc_repo: DocumentRepository, queue: WorkQueue) -> None:
        self._doc_repo = doc_repo
        self._queue = queue

    def ingest(self, candidates: Iterable[ScannedFile]) -> int:
        """Persist and enqueue new candidates. Returns how many were new."""
        new_count = 0
        for candidate in candidates:
            if self._doc_repo.exists_by_fingerprint(candidate.fingerprint):
                Log.debug(f"Skipping known file {candidate.file_name} ({candidate.fingerprint})")
                continue

            document_id = self._doc_repo.insert(candidate)
            if document_id is None:
                Log.debug(f"File {candidate.file_name} was stored concurrently, skipping")
                continue

            self._queue.put(document_id)
            new_count += 1
            Log.info(f"Added new file: {candidate.file_name} (ID: {document_id})")
        return new_count
