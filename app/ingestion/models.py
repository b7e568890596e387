from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class ScannedFile:
    """An ingestion candidate read from the scan directory."""

    file_name: str
    file_path: str
    content: bytes
    file_size: int
    fingerprint: str
    created_at: datetime
    modified_at: datetime


@dataclass(frozen=True)
class ScanSummary:
    scanned_count: int
    new_count: int
