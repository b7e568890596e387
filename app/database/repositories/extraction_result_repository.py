from datetime import datetime, timezone
from typing import Any

from psycopg.rows import dict_row

from app.database.connection import get_connection
from app.database.models import ExtractionResultRecord, ProcessingStatus


class ExtractionResultRepository:
    """Database operations for the extraction_results table."""

    def find_by_document_id(self, document_id: int) -> ExtractionResultRecord | None:
        """Return the latest result for a document, or None."""
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    SELECT id, document_id, extracted_text, confidence, status,
                           error_message, processed_at
                    FROM extraction_results
                    WHERE document_id = %s
                    ORDER BY processed_at DESC, id DESC
                    LIMIT 1
                    """,
                    (document_id,),
                )
                row = cur.fetchone()

        if row is None:
            return None
        return self._to_record(row)

    def upsert(self, result: ExtractionResultRecord) -> ExtractionResultRecord:
        """Update the document's result row in place, inserting it if absent.

        ``processed_at`` is stamped on every call.
        """
        processed_at = datetime.now(timezone.utc)
        values = (
            result.extracted_text,
            result.confidence,
            result.status.value,
            result.error_message,
            processed_at,
        )
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    UPDATE extraction_results
                    SET extracted_text = %s, confidence = %s, status = %s,
                        error_message = %s, processed_at = %s
                    WHERE document_id = %s
                    RETURNING id
                    """,
                    (*values, result.document_id),
                )
                row = cur.fetchone()
                if row is None:
                    cur.execute(
                        """
                        INSERT INTO extraction_results
                        (extracted_text, confidence, status, error_message,
                         processed_at, document_id)
                        VALUES (%s, %s, %s, %s, %s, %s)
                        RETURNING id
                        """,
                        (*values, result.document_id),
                    )
                    row = cur.fetchone()
            conn.commit()

        return ExtractionResultRecord(
            id=int(row[0]) if row else None,
            document_id=result.document_id,
            status=result.status,
            extracted_text=result.extracted_text,
            confidence=result.confidence,
            error_message=result.error_message,
            processed_at=processed_at,
        )

    @staticmethod
    def _to_record(row: dict[str, Any]) -> ExtractionResultRecord:
        return ExtractionResultRecord(
            id=row["id"],
            document_id=row["document_id"],
            status=ProcessingStatus(row["status"]),
            extracted_text=row["extracted_text"] or "",
            confidence=row["confidence"],
            error_message=row["error_message"],
            processed_at=row["processed_at"],
        )
