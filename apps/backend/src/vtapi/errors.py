"""Custom exceptions for the video transcoding API."""

from typing import Any


class VTAPIError(Exception):
    """Base exception for the video transcoding API."""

    pass


class InvalidConfigError(VTAPIError):
    """Provider configuration is missing required values."""

    pass


class ProviderNotFoundError(VTAPIError):
    """No provider is registered under the requested name."""

    def __init__(self, name: str):
        super().__init__(f"provider not found: {name!r}")
        self.name = name


class PresetNotFoundError(VTAPIError):
    """A preset has no mapping for the selected provider."""

    def __init__(self, preset_name: str = "", provider_name: str = ""):
        message = "preset not found in provider"
        if preset_name:
            message = f"preset {preset_name!r} not found in provider {provider_name!r}"
        super().__init__(message)
        self.preset_name = preset_name
        self.provider_name = provider_name


class TransportError(VTAPIError):
    """Communication with the transcoding backend failed."""

    def __init__(self, message: str, status_code: int | None = None, details: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.details = details


class CapacityError(VTAPIError):
    """The backend does not have enough active processing nodes."""

    def __init__(self, required: int, found: int):
        super().__init__(
            f"there are not enough active nodes. {required} nodes required "
            f"to be active, but found only {found}"
        )
        self.required = required
        self.found = found
