"""Configuration management for the video transcoding API."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ElementalConductorSettings(BaseSettings):
    """Credentials and endpoint for an Elemental Conductor cluster."""

    model_config = SettingsConfigDict(
        env_prefix="ELEMENTALCONDUCTOR_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    host: str = ""
    user_login: str = ""
    api_key: str = ""
    # Minutes a signed request stays valid.
    auth_expires: int = 0
    aws_access_key_id: str = ""
    aws_secret_access_key: str = ""
    destination: str = ""

    def missing_fields(self) -> list[str]:
        """Return the environment variables required but not set."""
        required = {
            "host": self.host,
            "user_login": self.user_login,
            "api_key": self.api_key,
            "auth_expires": self.auth_expires,
            "aws_access_key_id": self.aws_access_key_id,
            "aws_secret_access_key": self.aws_secret_access_key,
            "destination": self.destination,
        }
        prefix = self.model_config["env_prefix"]
        return [f"{prefix}{name}".upper() for name, value in required.items() if not value]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    # Server
    host: str = "0.0.0.0"
    port: int = 8080
    debug: bool = False
    log_level: str = "info"

    # Backend request timeout, seconds
    http_timeout: float = 30.0

    elemental_conductor: ElementalConductorSettings = Field(
        default_factory=ElementalConductorSettings
    )


def get_settings() -> Settings:
    """Build a fresh settings object from the current environment."""
    return Settings()


# Global settings instance
settings = get_settings()
