import pytest
from pydantic import ValidationError

from artapi.config.settings import Settings


class TestSettingsDefaults:
    def test_default_app_env(self) -> None:
        s = Settings()
        assert s.app_env == "dev"

    def test_default_port(self) -> None:
        s = Settings()
        assert s.port == 8080

    def test_default_rate_limit_window(self) -> None:
        s = Settings()
        assert s.rate_limit_window_seconds == 60.0

    def test_default_image_cap_is_five_megabytes(self) -> None:
        s = Settings()
        assert s.max_image_bytes == 5 * 1024 * 1024

    def test_default_form_cap_is_ten_megabytes(self) -> None:
        s = Settings()
        assert s.max_form_bytes == 10 * 1024 * 1024

    def test_default_signed_url_ttl_is_one_hour(self) -> None:
        s = Settings()
        assert s.storage_signed_url_ttl_seconds == 3600


class TestSettingsFromEnv:
    def test_loads_app_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("APP_ENV", "production")
        s = Settings()
        assert s.app_env == "production"

    def test_loads_log_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        s = Settings()
        assert s.log_level == "DEBUG"

    def test_loads_port(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PORT", "9090")
        s = Settings()
        assert s.port == 9090

    def test_loads_bucket_name(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("STORAGE_BUCKET_NAME", "gallery")
        s = Settings()
        assert s.storage_bucket_name == "gallery"

    def test_loads_storage_secure_flag(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("STORAGE_SECURE", "false")
        s = Settings()
        assert s.storage_secure is False

    def test_loads_analysis_provider(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ANALYSIS_PROVIDER", "example")
        s = Settings()
        assert s.analysis_provider == "example"


class TestSettingsValidation:
    def test_invalid_port_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PORT", "not_a_number")
        with pytest.raises(ValidationError):
            Settings()

    def test_invalid_window_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("RATE_LIMIT_WINDOW_SECONDS", "abc")
        with pytest.raises(ValidationError):
            Settings()
