"""Provider backed by the Elemental Conductor API.

Importing this package registers the provider; use it through the registry:

    from vtapi.config import settings
    from vtapi.provider import get_provider_factory

    provider = get_provider_factory("elementalconductor")(settings)
"""

from vtapi.provider.elementalconductor.client import (
    ElementalConductorClient,
    IElementalConductorClient,
)
from vtapi.provider.elementalconductor.provider import (
    NAME,
    ElementalConductorProvider,
    build_destination,
    build_output_group_and_stream_assemblies,
    elemental_conductor_factory,
    translate_status,
)
from vtapi.provider.registry import register

register(NAME, elemental_conductor_factory)

__all__ = [
    "NAME",
    "ElementalConductorClient",
    "ElementalConductorProvider",
    "IElementalConductorClient",
    "build_destination",
    "build_output_group_and_stream_assemblies",
    "elemental_conductor_factory",
    "translate_status",
]
