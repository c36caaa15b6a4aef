"""Tests for KeepsakeSettings: env vars, CLI overrides, and the API key check."""

import pytest

from keepsake_mcp.config.settings import DEFAULT_API_URL, KeepsakeSettings
from keepsake_mcp.errors import ConfigurationError


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("KEEPSAKE_API_URL", "KEEPSAKE_API_KEY", "KEEPSAKE_VERBOSE", "KEEPSAKE_LOG_JSON"):
        monkeypatch.delenv(name, raising=False)


class TestDefaults:
    def test_all_defaults(self) -> None:
        settings = KeepsakeSettings()
        assert settings.api_url == DEFAULT_API_URL == "https://app.keepsake.place/api/v1"
        assert settings.api_key == ""
        assert settings.verbose is False
        assert settings.log_json is False

    def test_frozen(self) -> None:
        settings = KeepsakeSettings()
        with pytest.raises(Exception):
            settings.api_url = "https://elsewhere"  # type: ignore[misc]

    def test_api_key_not_in_repr(self) -> None:
        settings = KeepsakeSettings(api_key="super-secret")
        assert "super-secret" not in repr(settings)


class TestEnvironment:
    def test_env_vars_are_read(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("KEEPSAKE_API_URL", "https://staging.keepsake.test/api/v1")
        monkeypatch.setenv("KEEPSAKE_API_KEY", "from-env")
        settings = KeepsakeSettings()
        assert settings.api_url == "https://staging.keepsake.test/api/v1"
        assert settings.api_key == "from-env"

    def test_empty_api_url_falls_back_to_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("KEEPSAKE_API_URL", "")
        assert KeepsakeSettings().api_url == DEFAULT_API_URL

    def test_trailing_slash_is_stripped(self) -> None:
        assert KeepsakeSettings(api_url="https://x.test/api/v1/").api_url == "https://x.test/api/v1"


class TestFromCli:
    def test_none_flags_fall_through_to_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("KEEPSAKE_VERBOSE", "true")
        settings = KeepsakeSettings.from_cli(verbose=None, api_url=None)
        assert settings.verbose is True
        assert settings.api_url == DEFAULT_API_URL

    def test_flags_override_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("KEEPSAKE_API_URL", "https://env.test")
        settings = KeepsakeSettings.from_cli(api_url="https://flag.test", log_json=True)
        assert settings.api_url == "https://flag.test"
        assert settings.log_json is True


class TestRequireApiKey:
    def test_missing_key_raises(self) -> None:
        with pytest.raises(ConfigurationError, match="KEEPSAKE_API_KEY"):
            KeepsakeSettings().require_api_key()

    def test_present_key_is_returned(self) -> None:
        assert KeepsakeSettings(api_key="abc").require_api_key() == "abc"
