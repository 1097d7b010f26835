"""Preset data models."""

from pydantic import BaseModel, ConfigDict, Field


class OutputOptions(BaseModel):
    """Output options shared by every provider."""

    model_config = ConfigDict(frozen=True)

    extension: str = Field("", description="Output file extension (e.g. 'mp4', '.m3u8')")

    @property
    def bare_extension(self) -> str:
        """Return the extension without a leading dot."""
        return self.extension.lstrip(".")


class Preset(BaseModel):
    """A named encoding configuration.

    ``provider_mapping`` maps a provider name to the identifier of the
    equivalent preset on that provider's backend.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Preset name")
    output_opts: OutputOptions = Field(default_factory=OutputOptions)
    provider_mapping: dict[str, str] = Field(default_factory=dict)
