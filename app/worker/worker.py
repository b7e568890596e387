import threading

from app.config.settings import Settings
from app.logging.logger import Log
from app.worker.job_runner import JobRunner
from app.worker.work_queue import WorkQueue


class Worker:
    """Consumer loop: wait for a queued document -> dispatch -> repeat."""

    def __init__(
        self,
        queue: WorkQueue,
        job_runner: JobRunner,
        settings: Settings,
    ) -> None:
        self._queue = queue
        self._job_runner = job_runner
        self._settings = settings
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    def run(self, max_jobs: int | None = None) -> None:
        """Main loop. Runs until stop() is called or the process is interrupted.

        If max_jobs is set, stop after processing that many documents (for testing).
        """
        Log.info("Extraction worker started, waiting for documents")
        jobs_done = 0
        try:
            while not self._stop_event.is_set():
                if max_jobs is not None and jobs_done >= max_jobs:
                    break
                document_id = self._queue.get(
                    timeout=self._settings.queue_poll_interval_seconds
                )
                if document_id is None:
                    Log.debug("No documents queued, waiting")
                    continue
                self._job_runner.run(document_id, self._stop_event)
                jobs_done += 1
        except KeyboardInterrupt:
            Log.info("Worker shutting down gracefully")
        Log.info("Extraction worker stopped")

    def start(self) -> None:
        """Run the loop in a background daemon thread.

        A worker can be restarted after stop() as long as its queue is open.
        """
        if self._thread is not None and self._thread.is_alive():
            return
        if self._queue.closed:
            raise RuntimeError("Cannot start worker on a closed queue")
        self._stop_event.clear()
        self._thread = threading.Thread(target=self.run, name="extraction-worker", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        """Ask the loop to exit and wake it if it is waiting on the queue."""
        self._stop_event.set()
        self._queue.close()

    def join(self, timeout: float | None = None) -> None:
        if self._thread is not None:
            self._thread.join(timeout)

    def is_alive(self) -> bool:
        return self._thread is not None and self._thread.is_alive()
