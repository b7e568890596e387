import pytest
from pydantic import ValidationError

from app.config.settings import Settings


class TestSettingsDefaults:
    def test_default_app_env(self) -> None:
        s = Settings()
        assert s.app_env == "dev"

    def test_default_db_port(self) -> None:
        s = Settings()
        assert s.db_port == 5432

    def test_default_poll_interval(self) -> None:
        s = Settings()
        assert s.queue_poll_interval_seconds == 1.0

    def test_default_pdf_engine(self) -> None:
        s = Settings()
        assert s.pdf_engine == "pdfplumber"

    def test_default_extraction_thresholds(self) -> None:
        s = Settings()
        assert s.min_direct_text_length == 50
        assert s.direct_text_confidence == 95.0
        assert s.ocr_dpi == 300

    def test_default_ocr_languages(self) -> None:
        s = Settings()
        assert s.ocr_languages == "pol+eng"


class TestSettingsFromEnv:
    def test_loads_log_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        s = Settings()
        assert s.log_level == "DEBUG"

    def test_loads_db_host(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DB_HOST", "db.example.com")
        s = Settings()
        assert s.db_host == "db.example.com"

    def test_loads_scan_directory(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SCAN_DIRECTORY", "/data/inbox")
        s = Settings()
        assert s.scan_directory == "/data/inbox"

    def test_loads_recover_flag(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("RECOVER_ON_STARTUP", "false")
        s = Settings()
        assert s.recover_on_startup is False

    def test_loads_min_direct_text_length(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MIN_DIRECT_TEXT_LENGTH", "120")
        s = Settings()
        assert s.min_direct_text_length == 120


class TestSettingsValidation:
    def test_invalid_db_port_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DB_PORT", "not_a_number")
        with pytest.raises(ValidationError):
            Settings()

    def test_invalid_ocr_dpi_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("OCR_DPI", "high")
        with pytest.raises(ValidationError):
            Settings()
