"""Tests for settings and YAML configuration."""

from collections.abc import Iterator

import pytest

from patientbmi.core.config import ApiConfig, Settings, get_settings, load_config
from patientbmi.core.constants import ENDPOINTS
from patientbmi.core.exceptions import ConfigurationError


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Iterator[None]:
    """Ensure get_settings cache is cleared before and after each test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestSettings:
    """Tests for environment-driven settings."""

    def test_defaults(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)  # no stray .env
        for name in ("API_BASE_URL", "CONNECT_TIMEOUT", "READ_TIMEOUT", "LOG_LEVEL"):
            monkeypatch.delenv(f"PATIENTBMI_{name}", raising=False)

        settings = Settings()

        assert settings.api_base_url == "http://127.0.0.1:8000/api/"
        assert settings.timeout == (30.0, 30.0)
        assert settings.log_level == "INFO"
        assert settings.navigation_delay_ms == 500
        assert settings.log_http_bodies is False

    def test_env_overrides(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("PATIENTBMI_API_BASE_URL", "https://clinic.example.org/api")
        monkeypatch.setenv("PATIENTBMI_READ_TIMEOUT", "12.5")
        monkeypatch.setenv("PATIENTBMI_LOG_LEVEL", "debug")

        settings = Settings()

        assert settings.api_base_url == "https://clinic.example.org/api/"
        assert settings.read_timeout == 12.5
        assert settings.log_level == "DEBUG"

    def test_rejects_non_http_url(self):
        with pytest.raises(ValueError):
            Settings(api_base_url="ftp://example.org/")

    def test_rejects_non_positive_timeout(self):
        with pytest.raises(ValueError):
            Settings(connect_timeout=0)

    def test_get_settings_cached(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        assert get_settings() is get_settings()


class TestApiConfig:
    """Tests for api.yaml loading."""

    def test_defaults_without_file(self):
        config = ApiConfig()

        assert config.endpoints == ENDPOINTS
        assert config.headers == {}

    def test_overrides(self, tmp_path):
        path = tmp_path / "api.yaml"
        path.write_text(
            "api:\n"
            "  endpoints:\n"
            "    submit_vitals: v2/vitals/\n"
            "  headers:\n"
            "    X-Clinic: north\n"
        )

        config = ApiConfig(path)

        assert config.endpoints["submit_vitals"] == "v2/vitals/"
        assert config.endpoints["patient_listing"] == "patients/listing/"
        assert config.headers == {"X-Clinic": "north"}

    def test_unknown_endpoint(self, tmp_path):
        path = tmp_path / "api.yaml"
        path.write_text("api:\n  endpoints:\n    delete_everything: x/\n")

        with pytest.raises(ConfigurationError) as exc_info:
            ApiConfig(path).endpoints
        assert exc_info.value.config_key == "api.endpoints"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError):
            ApiConfig(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "api.yaml"
        path.write_text("api: [unclosed\n")

        with pytest.raises(ConfigurationError):
            ApiConfig(path)

    def test_empty_api_section(self, tmp_path):
        """Test a bare 'api:' key falls back to the defaults."""
        path = tmp_path / "api.yaml"
        path.write_text("api:\n")

        config = ApiConfig(path)

        assert config.endpoints == ENDPOINTS
        assert config.headers == {}

    @pytest.mark.parametrize(
        "content, attribute, key",
        [
            ("api: [a, b]\n", "endpoints", "api"),
            ("api: localhost\n", "headers", "api"),
            ("api:\n  endpoints: [patients/]\n", "endpoints", "api.endpoints"),
            ("api:\n  headers: Accept\n", "headers", "api.headers"),
        ],
    )
    def test_non_mapping_section(self, tmp_path, content, attribute, key):
        path = tmp_path / "api.yaml"
        path.write_text(content)
        config = ApiConfig(path)

        with pytest.raises(ConfigurationError) as exc_info:
            getattr(config, attribute)
        assert exc_info.value.config_key == key


class TestLoadConfig:
    """Tests for config dispatch."""

    def test_optional_missing_file(self, monkeypatch, tmp_path):
        monkeypatch.setenv("PATIENTBMI_CONFIG_DIR", str(tmp_path))

        config = load_config("api", required=False)

        assert config.endpoints == ENDPOINTS

    def test_required_missing_file(self, monkeypatch, tmp_path):
        monkeypatch.setenv("PATIENTBMI_CONFIG_DIR", str(tmp_path))

        with pytest.raises(ConfigurationError):
            load_config("api")

    def test_unknown_type(self):
        with pytest.raises(ConfigurationError):
            load_config("bands")
