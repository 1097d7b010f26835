"""Request and response schemas for the transcoding API."""

from __future__ import annotations

from pydantic import BaseModel, Field

from vtapi.models.preset import Preset


# ------------------------------------------------------------------
# Job requests
# ------------------------------------------------------------------


class TranscodeRequest(BaseModel):
    source: str = Field(..., description="URI of the source media")
    provider: str = Field(..., description="Name of the provider to use")
    presets: list[Preset] = Field(..., min_length=1, description="Ordered output presets")


# ------------------------------------------------------------------
# Responses
# ------------------------------------------------------------------


class ProviderListResponse(BaseModel):
    providers: list[str]


class ProviderHealthResponse(BaseModel):
    provider: str
    healthy: bool
    message: str = ""


class ErrorResponse(BaseModel):
    error: str
    detail: str
