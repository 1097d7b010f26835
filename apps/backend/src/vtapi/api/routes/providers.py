"""Provider endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from vtapi.api.deps import build_provider, get_app_settings
from vtapi.api.schemas import ProviderHealthResponse, ProviderListResponse
from vtapi.config import Settings
from vtapi.errors import CapacityError
from vtapi.provider import list_providers

router = APIRouter(prefix="/providers", tags=["providers"])


@router.get("", response_model=ProviderListResponse)
def get_providers() -> ProviderListResponse:
    return ProviderListResponse(providers=list_providers())


@router.get("/{provider_name}/health", response_model=ProviderHealthResponse)
def get_provider_health(
    provider_name: str,
    app_settings: Settings = Depends(get_app_settings),
) -> ProviderHealthResponse | JSONResponse:
    provider = build_provider(provider_name, app_settings)
    try:
        provider.healthcheck()
    except CapacityError as e:
        body = ProviderHealthResponse(provider=provider_name, healthy=False, message=str(e))
        return JSONResponse(status_code=503, content=body.model_dump())
    return ProviderHealthResponse(provider=provider_name, healthy=True)
