"""Service health endpoint."""

from fastapi import APIRouter
from pydantic import BaseModel

from vtapi.provider import list_providers

router = APIRouter()


class ServiceHealthResponse(BaseModel):
    """Liveness of the API and the providers it can dispatch to."""

    status: str
    version: str
    providers: list[str]


@router.get("/health", response_model=ServiceHealthResponse)
def service_health() -> ServiceHealthResponse:
    """Report liveness along with the registered provider names.

    Backend capacity is checked per provider by ``/providers/{name}/health``.
    """
    from vtapi import __version__

    return ServiceHealthResponse(status="ok", version=__version__, providers=list_providers())
