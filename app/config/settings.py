from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    db_host: str = "host.docker.internal"
    db_port: int = 5432
    db_database: str = "pdfscan"
    db_username: str = "pdfscan"
    db_password: str = "secret"

    scan_directory: str = ""
    scan_interval_seconds: int = 0
    queue_poll_interval_seconds: float = 1.0
    recover_on_startup: bool = True

    pdf_engine: str = "pdfplumber"
    min_direct_text_length: int = 50
    direct_text_confidence: float = 95.0

    ocr_dpi: int = 300
    ocr_languages: str = "pol+eng"
    tessdata_dir: str = ""
    tesseract_cmd: str = ""
