class IngestionError(Exception):
    """Base exception for scanning and ingestion errors."""


class DirectoryScanError(IngestionError):
    """Raised when the scan directory exists but cannot be listed."""


class ScanDirectoryNotConfiguredError(IngestionError):
    """Raised when a configured scan is requested but SCAN_DIRECTORY is empty."""
