class ProcessorError(Exception):
    """Base exception for all processor-related errors."""


class DocumentNotFoundError(ProcessorError):
    """Raised when a document cannot be found in the database."""


class ExtractionCancelledError(ProcessorError):
    """Raised when shutdown interrupts an extraction between pages."""
