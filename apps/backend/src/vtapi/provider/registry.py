"""Registry of transcoding provider factories."""

import logging

from vtapi.errors import ProviderNotFoundError, VTAPIError
from vtapi.provider.base import ProviderFactory

logger = logging.getLogger(__name__)

_providers: dict[str, ProviderFactory] = {}


def register(name: str, factory: ProviderFactory) -> None:
    """Register a provider factory under the given name.

    Args:
        name: Provider name used to select the factory
        factory: Callable building a provider from settings

    Raises:
        VTAPIError: If the name is empty, the factory is not callable,
            or a factory is already registered under the name
    """
    if not name:
        raise VTAPIError("provider name must not be empty")
    if not callable(factory):
        raise VTAPIError(f"factory for provider {name!r} is not callable")
    if name in _providers:
        raise VTAPIError(f"provider {name!r} is already registered")
    _providers[name] = factory
    logger.debug("Registered provider '%s'", name)


def unregister(name: str) -> None:
    """Remove a provider factory, ignoring unknown names."""
    _providers.pop(name, None)


def get_provider_factory(name: str) -> ProviderFactory:
    """Return the factory registered under the given name.

    Raises:
        ProviderNotFoundError: If no factory is registered under the name
    """
    factory = _providers.get(name)
    if factory is None:
        raise ProviderNotFoundError(name)
    return factory


def list_providers() -> list[str]:
    """List all registered provider names, sorted."""
    return sorted(_providers)
