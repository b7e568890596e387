import os
from datetime import datetime, timezone
from pathlib import Path

from app.ingestion.exceptions import DirectoryScanError
from app.ingestion.hasher import compute_fingerprint
from app.ingestion.models import ScannedFile
from app.logging.logger import Log


class FileScanner:
    """Reads PDF candidates from the top level of a directory."""

    PDF_SUFFIX = ".pdf"

    def scan(self, directory: str | Path) -> list[ScannedFile]:
        """Fingerprint every ``*.pdf`` file directly inside ``directory``.

        Returns an empty list when the directory does not exist. Files that
        cannot be read are logged and skipped.

        Raises:
            DirectoryScanError: if the directory exists but cannot be listed.
        """
        root = Path(directory)
        try:
            if not root.is_dir():
                Log.warning(f"Directory does not exist: {root}")
                return []
            entries = list(os.scandir(root))
        except OSError as exc:
            Log.error(f"Error scanning directory {root}: {exc}")
            raise DirectoryScanError(f"Cannot list directory {root}: {exc}") from exc

        scanned: list[ScannedFile] = []
        for entry in entries:
            if not entry.name.lower().endswith(self.PDF_SUFFIX):
                continue
            try:
                if not entry.is_file():
                    continue
                scanned.append(self._read(Path(entry.path)))
                Log.info(f"Scanned PDF file: {entry.name}")
            except OSError as exc:
                Log.error(f"Error reading file {entry.path}: {exc}")
        return scanned

    def _read(self, path: Path) -> ScannedFile:
        content = path.read_bytes()
        stat = path.stat()
        created = getattr(stat, "st_birthtime", stat.st_ctime)
        return ScannedFile(
            file_name=path.name,
            file_path=str(path),
            content=content,
            file_size=stat.st_size,
            fingerprint=compute_fingerprint(content),
            created_at=datetime.fromtimestamp(created, tz=timezone.utc),
            modified_at=datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc),
        )
