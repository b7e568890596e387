import time

from app.config.settings import Settings
from app.database.connection import close_pool, init_pool
from app.database.schema import ensure_schema
from app.ingestion.exceptions import IngestionError
from app.logging.logger import Log
from app.processor.processor import build_processor
from app.service.document_service import DocumentService, build_document_service
from app.worker.job_runner import JobRunner
from app.worker.work_queue import WorkQueue
from app.worker.worker import Worker


def run_scans(service: DocumentService, settings: Settings) -> None:
    """Scan once, or every scan_interval_seconds until interrupted."""
    if not settings.scan_directory:
        Log.warning("SCAN_DIRECTORY is not set, only recovered documents will be processed")
    while True:
        if settings.scan_directory:
            try:
                service.scan_configured()
            except IngestionError as exc:
                Log.error(f"Scan failed: {exc}")
            except Exception as exc:
                Log.exception(f"Scan failed unexpectedly: {exc}")
        if settings.scan_interval_seconds <= 0:
            return
        time.sleep(settings.scan_interval_seconds)


def main() -> None:
    """Entry point: pool -> schema -> worker thread -> scans."""
    settings = Settings()
    Log.configure(settings.log_level)
    init_pool(settings)

    worker: Worker | None = None
    try:
        ensure_schema()
        queue = WorkQueue()
        service = build_document_service(settings, queue)
        worker = Worker(queue, JobRunner(build_processor(settings)), settings)

        if settings.recover_on_startup:
            service.recover_unprocessed()
        worker.start()
        run_scans(service, settings)
        while worker.is_alive():
            worker.join(timeout=1.0)
    except KeyboardInterrupt:
        Log.info("Shutdown requested")
    finally:
        if worker is not None:
            worker.stop()
            worker.join(timeout=settings.queue_poll_interval_seconds + 5)
        close_pool()


if __name__ == "__main__":
    main()
