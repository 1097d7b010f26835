"""Main entry point for the video transcoding API."""

import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from vtapi.api.routes import health, jobs, providers
from vtapi.api.schemas import ErrorResponse
from vtapi.config import settings
from vtapi.errors import (
    CapacityError,
    InvalidConfigError,
    PresetNotFoundError,
    ProviderNotFoundError,
    TransportError,
    VTAPIError,
)

logger = logging.getLogger(__name__)

# HTTP status returned for each error type; anything else is a 500.
_ERROR_STATUS_CODES: dict[type[VTAPIError], int] = {
    InvalidConfigError: 400,
    ProviderNotFoundError: 404,
    PresetNotFoundError: 422,
    TransportError: 502,
    CapacityError: 503,
}


async def handle_vtapi_error(request: Request, exc: VTAPIError) -> JSONResponse:
    """Translate provider errors into JSON error responses."""
    status_code = next(
        (code for error_type, code in _ERROR_STATUS_CODES.items() if isinstance(exc, error_type)),
        500,
    )
    if status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    body = ErrorResponse(error=type(exc).__name__, detail=str(exc))
    return JSONResponse(status_code=status_code, content=body.model_dump())


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    from vtapi import __version__

    app = FastAPI(
        title="Video Transcoding API",
        description="Backend-agnostic transcoding job dispatch",
        version=__version__,
    )

    app.include_router(health.router)
    app.include_router(jobs.router)
    app.include_router(providers.router)
    app.add_exception_handler(VTAPIError, handle_vtapi_error)

    return app


app = create_app()


def main() -> None:
    """Run the application."""
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(
        "vtapi.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    main()
