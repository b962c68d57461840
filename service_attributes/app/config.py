"""
Settings for the attribute provider service.
"""

from pathlib import Path
from typing import Dict, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigError


DEFAULT_ATTRIBUTES: Dict[str, str] = {
    "email": "user@example.com",
    "name": "Jane Doe",
    "given_name": "Jane",
    "family_name": "Doe",
    "birthdate": "1990-01-01",
    "age_over_18": "true",
}


class ProviderSettings(BaseSettings):
    """Process-wide provider settings, read once at startup."""

    model_config = SettingsConfigDict(
        env_prefix="PROVIDER_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    server_url: str = Field(default="http://localhost:8020", description="Public base URL of this provider")
    with_session: bool = Field(default=False, description="Attach a session update URL to results")
    attributes: Dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_ATTRIBUTES),
        description="Supported attributes and the mock value each resolves to"
    )

    signing_key: Optional[str] = Field(default=None, description="PEM RSA private key for signing results")
    signing_key_file: Optional[Path] = Field(default=None)
    encryption_key: Optional[str] = Field(default=None, description="PEM RSA public key of the relying party")
    encryption_key_file: Optional[Path] = Field(default=None)
    signing_algorithm: str = Field(default="RS256")

    result_ttl_seconds: int = Field(default=300, gt=0)
    push_timeout_seconds: float = Field(default=10.0, gt=0)

    @field_validator("server_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    def validate_settings(self) -> None:
        """Check that the settings are usable; raise ConfigError if not."""
        if not self.server_url.startswith(("http://", "https://")):
            raise ConfigError(
                "server_url must be an absolute http(s) URL",
                details={"server_url": self.server_url}
            )
        if not self.attributes:
            raise ConfigError("No attributes configured")
        self.get_signing_key()
        self.get_encryption_key()

    def get_signing_key(self) -> str:
        return self._resolve_key("signing_key", self.signing_key, self.signing_key_file)

    def get_encryption_key(self) -> str:
        return self._resolve_key("encryption_key", self.encryption_key, self.encryption_key_file)

    @staticmethod
    def _resolve_key(name: str, inline: Optional[str], path: Optional[Path]) -> str:
        if inline:
            return inline
        if path is not None:
            try:
                return path.read_text()
            except OSError as e:
                raise ConfigError(
                    f"Cannot read {name} file",
                    details={"path": str(path), "error": str(e)}
                ) from e
        raise ConfigError(f"No {name} configured", details={"setting": name})


def get_provider_settings(**overrides) -> ProviderSettings:
    """Load provider settings from the environment."""
    return ProviderSettings(**overrides)
