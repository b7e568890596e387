from typing import Any

from psycopg.rows import dict_row

from app.database.connection import get_connection
from app.database.models import DocumentRecord, ProcessingStatus
from app.ingestion.models import ScannedFile

_LIST_COLUMNS = "id, file_name, file_path, file_size, fingerprint, created_at, modified_at"


class DocumentRepository:
    """Database operations for the documents table."""

    def exists_by_fingerprint(self, fingerprint: str) -> bool:
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    "SELECT EXISTS (SELECT 1 FROM documents WHERE fingerprint = %s)",
                    (fingerprint,),
                )
                row = cur.fetchone()
        return bool(row and row[0])

    def insert(self, candidate: ScannedFile) -> int | None:
        """Persist a scanned file and return its new id.

        Returns None when another row with the same fingerprint already exists.
        """
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    INSERT INTO documents
                    (file_name, file_path, content, file_size, fingerprint,
                     created_at, modified_at)
                    VALUES (%s, %s, %s, %s, %s, %s, %s)
                    ON CONFLICT (fingerprint) DO NOTHING
                    RETURNING id
                    """,
                    (
                        candidate.file_name,
                        candidate.file_path,
                        candidate.content,
                        candidate.file_size,
                        candidate.fingerprint,
                        candidate.created_at,
                        candidate.modified_at,
                    ),
                )
                row = cur.fetchone()
            conn.commit()
        return None if row is None else int(row[0])

    def find_by_id(self, document_id: int) -> DocumentRecord | None:
        """Load a document including its content."""
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"SELECT {_LIST_COLUMNS}, content FROM documents WHERE id = %s",
                    (document_id,),
                )
                row = cur.fetchone()

        if row is None:
            return None
        return self._to_record(row)

    def get_content(self, document_id: int) -> bytes:
        """Return the stored bytes, or b"" when the document does not exist."""
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT content FROM documents WHERE id = %s", (document_id,))
                row = cur.fetchone()

        if row is None or row[0] is None:
            return b""
        return bytes(row[0])

    def list_documents(self, offset: int = 0, limit: int = 50) -> list[DocumentRecord]:
        """List documents newest-first by created_at, without their content."""
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"""
                    SELECT {_LIST_COLUMNS}
                    FROM documents
                    ORDER BY created_at DESC, id DESC
                    OFFSET %s LIMIT %s
                    """,
                    (offset, limit),
                )
                rows = cur.fetchall()
        return [self._to_record(row) for row in rows]

    def count_all(self) -> int:
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT COUNT(*) FROM documents")
                row = cur.fetchone()
        return int(row[0]) if row else 0

    def find_unprocessed_ids(self) -> list[int]:
        """Ids of documents whose extraction never finished, oldest first.

        A document qualifies when it has no result row or its latest result is
        still pending or processing. Failed results are not included.
        """
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    SELECT d.id
                    FROM documents d
                    LEFT JOIN LATERAL (
                        SELECT r.status
                        FROM extraction_results r
                        WHERE r.document_id = d.id
                        ORDER BY r.processed_at DESC, r.id DESC
                        LIMIT 1
                    ) latest ON TRUE
                    WHERE latest.status IS NULL OR latest.status IN (%s, %s)
                    ORDER BY d.id
                    """,
                    (ProcessingStatus.PENDING.value, ProcessingStatus.PROCESSING.value),
                )
                rows = cur.fetchall()
        return [int(row[0]) for row in rows]

    @staticmethod
    def _to_record(row: dict[str, Any]) -> DocumentRecord:
        content = row.get("content")
        return DocumentRecord(
            id=row["id"],
            file_name=row["file_name"],
            file_path=row["file_path"],
            file_size=row["file_size"],
            fingerprint=row["fingerprint"],
            created_at=row["created_at"],
            modified_at=row["modified_at"],
            content=bytes(content) if content is not None else None,
        )
