from dataclasses import replace
from datetime import datetime, timezone

import pytest

from app.database.models import DocumentRecord, ExtractionResultRecord, ProcessingStatus
from app.ingestion.models import ScannedFile
from app.ocr.base import BaseOcrEngine
from app.ocr.models import OcrPage


class InMemoryDocumentRepository:
    """Stands in for DocumentRepository; enforces the unique fingerprint."""

    def __init__(self) -> None:
        self.documents: dict[int, DocumentRecord] = {}
        self.results: dict[int, ExtractionResultRecord] = {}

    def exists_by_fingerprint(self, fingerprint: str) -> bool:
        return any(d.fingerprint == fingerprint for d in self.documents.values())

    def insert(self, candidate: ScannedFile) -> int | None:
        if self.exists_by_fingerprint(candidate.fingerprint):
            return None
        document_id = len(self.documents) + 1
        self.documents[document_id] = DocumentRecord(
            id=document_id,
            file_name=candidate.file_name,
            file_path=candidate.file_path,
            file_size=candidate.file_size,
            fingerprint=candidate.fingerprint,
            created_at=candidate.created_at,
            modified_at=candidate.modified_at,
            content=candidate.content,
        )
        return document_id

    def find_by_id(self, document_id: int) -> DocumentRecord | None:
        return self.documents.get(document_id)

    def get_content(self, document_id: int) -> bytes:
        document = self.documents.get(document_id)
        if document is None:
            return b""
        return document.content or b""

    def list_documents(self, offset: int = 0, limit: int = 50) -> list[DocumentRecord]:
        ordered = sorted(self.documents.values(), key=lambda d: d.created_at, reverse=True)
        return [replace(d, content=None) for d in ordered[offset : offset + limit]]

    def count_all(self) -> int:
        return len(self.documents)

    def find_unprocessed_ids(self) -> list[int]:
        unfinished = {ProcessingStatus.PENDING, ProcessingStatus.PROCESSING}
        return [
            document_id
            for document_id in sorted(self.documents)
            if document_id not in self.results
            or self.results[document_id].status in unfinished
        ]


class InMemoryResultRepository:
    """Stands in for ExtractionResultRepository, sharing the document store's results."""

    def __init__(self, documents: InMemoryDocumentRepository) -> None:
        self._results = documents.results
        self.history: list[ProcessingStatus] = []

    def find_by_document_id(self, document_id: int) -> ExtractionResultRecord | None:
        return self._results.get(document_id)

    def upsert(self, result: ExtractionResultRecord) -> ExtractionResultRecord:
        existing = self._results.get(result.document_id)
        stored = replace(
            result,
            id=existing.id if existing else len(self._results) + 1,
            processed_at=datetime.now(timezone.utc),
        )
        self._results[result.document_id] = stored
        self.history.append(result.status)
        return stored


class BlankOcrEngine(BaseOcrEngine):
    """OCR engine that recognizes no text on any image."""

    def __init__(self) -> None:
        self.recognized = 0

    def ensure_ready(self, languages: str) -> None:
        return None

    def recognize(self, image_bytes: bytes, languages: str) -> OcrPage:
        self.recognized += 1
        return OcrPage(text="", confidence=0.0)


@pytest.fixture()
def doc_repo() -> InMemoryDocumentRepository:
    return InMemoryDocumentRepository()


@pytest.fixture()
def result_repo(doc_repo: InMemoryDocumentRepository) -> InMemoryResultRepository:
    return InMemoryResultRepository(doc_repo)


@pytest.fixture()
def blank_ocr_engine() -> BlankOcrEngine:
    return BlankOcrEngine()
