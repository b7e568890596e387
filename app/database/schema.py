from app.database.connection import get_connection
from app.logging.logger import Log

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS documents (
    id BIGSERIAL PRIMARY KEY,
    file_name VARCHAR(500) NOT NULL,
    file_path VARCHAR(1000) NOT NULL,
    content BYTEA NOT NULL,
    file_size BIGINT NOT NULL,
    fingerprint CHAR(64) NOT NULL,
    created_at TIMESTAMPTZ NOT NULL,
    modified_at TIMESTAMPTZ NOT NULL,
    CONSTRAINT uq_documents_fingerprint UNIQUE (fingerprint)
);

CREATE INDEX IF NOT EXISTS ix_documents_file_name ON documents (file_name);
CREATE INDEX IF NOT EXISTS ix_documents_created_at ON documents (created_at DESC);

CREATE TABLE IF NOT EXISTS extraction_results (
    id BIGSERIAL PRIMARY KEY,
    document_id BIGINT NOT NULL REFERENCES documents (id) ON DELETE CASCADE,
    extracted_text TEXT NOT NULL DEFAULT '',
    confidence DOUBLE PRECISION,
    status VARCHAR(20) NOT NULL,
    error_message TEXT,
    processed_at TIMESTAMPTZ NOT NULL
);

CREATE INDEX IF NOT EXISTS ix_extraction_results_document_id
    ON extraction_results (document_id);
"""


def ensure_schema() -> None:
    """Create the documents and extraction_results tables if missing."""
    with get_connection() as conn:
        conn.execute(SCHEMA_SQL)
        conn.commit()
    Log.info("Database schema ready")
