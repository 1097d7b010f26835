"""Transcoding providers and their registry.

Importing this package registers every bundled provider.
"""

from vtapi.provider.base import ProviderFactory, TranscodingProvider
from vtapi.provider.registry import (
    get_provider_factory,
    list_providers,
    register,
    unregister,
)

from vtapi.provider import elementalconductor  # noqa: F401  registers itself

__all__ = [
    "ProviderFactory",
    "TranscodingProvider",
    "get_provider_factory",
    "list_providers",
    "register",
    "unregister",
]
