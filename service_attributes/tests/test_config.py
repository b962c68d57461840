"""
Unit tests for provider settings.
"""

import pytest

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))

from service_attributes.app.config import ProviderSettings, DEFAULT_ATTRIBUTES
from service_attributes.app.errors import ConfigError


class TestProviderSettings:
    """Test cases for ProviderSettings."""

    def test_defaults(self, monkeypatch):
        """Defaults describe a local mock provider."""
        for key in list(os.environ):
            if key.startswith("PROVIDER_"):
                monkeypatch.delenv(key)
        settings = ProviderSettings(_env_file=None)
        assert settings.server_url == "http://localhost:8020"
        assert settings.with_session is False
        assert settings.attributes == DEFAULT_ATTRIBUTES
        assert settings.result_ttl_seconds == 300

    def test_environment_overrides(self, monkeypatch):
        """Settings are read from PROVIDER_ environment variables."""
        monkeypatch.setenv("PROVIDER_SERVER_URL", "https://as.example/")
        monkeypatch.setenv("PROVIDER_WITH_SESSION", "true")
        monkeypatch.setenv("PROVIDER_ATTRIBUTES", '{"name": "John"}')
        settings = ProviderSettings(_env_file=None)
        assert settings.server_url == "https://as.example"
        assert settings.with_session is True
        assert settings.attributes == {"name": "John"}

    def test_validate_requires_keys(self, test_keys):
        """Missing keys are a config error."""
        settings = ProviderSettings(_env_file=None, server_url="https://as.example")
        with pytest.raises(ConfigError) as exc_info:
            settings.validate_settings()
        assert exc_info.value.details["setting"] == "signing_key"

        settings = ProviderSettings(
            _env_file=None,
            server_url="https://as.example",
            signing_key=test_keys.provider_signing_key
        )
        with pytest.raises(ConfigError) as exc_info:
            settings.validate_settings()
        assert exc_info.value.details["setting"] == "encryption_key"

    def test_validate_rejects_relative_server_url(self, provider_settings):
        """The public base URL must be absolute."""
        settings = provider_settings.model_copy(update={"server_url": "as.example"})
        with pytest.raises(ConfigError):
            settings.validate_settings()

    def test_validate_rejects_empty_policy(self, provider_settings):
        """A provider without attributes cannot serve any request."""
        settings = provider_settings.model_copy(update={"attributes": {}})
        with pytest.raises(ConfigError):
            settings.validate_settings()

    def test_keys_from_files(self, tmp_path, test_keys):
        """Keys can be loaded from PEM files."""
        signing_file = tmp_path / "signing.pem"
        signing_file.write_text(test_keys.provider_signing_key)
        encryption_file = tmp_path / "encryption.pem"
        encryption_file.write_text(test_keys.relying_party_encryption_key)

        settings = ProviderSettings(
            _env_file=None,
            signing_key_file=signing_file,
            encryption_key_file=encryption_file
        )
        settings.validate_settings()
        assert settings.get_signing_key() == test_keys.provider_signing_key
        assert settings.get_encryption_key() == test_keys.relying_party_encryption_key

    def test_unreadable_key_file(self, tmp_path):
        """A key file that cannot be read is a config error."""
        settings = ProviderSettings(_env_file=None, signing_key_file=tmp_path / "missing.pem")
        with pytest.raises(ConfigError):
            settings.get_signing_key()
