"""FastAPI dependencies."""

from __future__ import annotations

from vtapi.config import Settings, settings
from vtapi.provider import TranscodingProvider, get_provider_factory


def get_app_settings() -> Settings:
    """Dependency that provides the application settings."""
    return settings


def build_provider(name: str, app_settings: Settings) -> TranscodingProvider:
    """Build the provider registered under ``name``.

    Raises:
        ProviderNotFoundError: If no provider is registered under the name
        InvalidConfigError: If the provider's configuration is incomplete
    """
    factory = get_provider_factory(name)
    return factory(app_settings)
