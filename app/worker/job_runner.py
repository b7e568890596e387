import threading

from app.logging.logger import Log
from app.processor.exceptions import ExtractionCancelledError
from app.processor.processor import Processor


class JobRunner:
    """Run extraction for one queued document and contain its exceptions."""

    def __init__(self, processor: Processor) -> None:
        self._processor = processor

    def run(self, document_id: int, cancel_event: threading.Event | None = None) -> None:
        """Process a single document. Never raises."""
        Log.info(f"Processing extraction for document {document_id}")
        try:
            result = self._processor.process(document_id, cancel_event)
        except ExtractionCancelledError as exc:
            Log.info(f"Document {document_id} left unfinished: {exc}")
        except Exception as exc:
            Log.exception(f"Error processing document {document_id}: {exc}")
        else:
            Log.info(
                f"Finished document {document_id} with status {result.status.value}"
            )
