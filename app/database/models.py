from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class ProcessingStatus(str, Enum):
    """Lifecycle of an extraction result row."""

    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class DocumentRecord:
    """Represents a row from the documents table.

    ``content`` is None when the row was loaded for a list view.
    """

    id: int
    file_name: str
    file_path: str
    file_size: int
    fingerprint: str
    created_at: datetime
    modified_at: datetime
    content: bytes | None = None


@dataclass
class ExtractionResultRecord:
    """Represents a row from the extraction_results table."""

    document_id: int
    status: ProcessingStatus
    extracted_text: str = ""
    confidence: float | None = None
    error_message: str | None = None
    processed_at: datetime | None = None
    id: int | None = None
