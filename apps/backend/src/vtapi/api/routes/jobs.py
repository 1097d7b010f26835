"""Job endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from vtapi.api.deps import build_provider, get_app_settings
from vtapi.api.schemas import TranscodeRequest
from vtapi.config import Settings
from vtapi.models.job import JobStatus

router = APIRouter(prefix="/jobs", tags=["jobs"])


@router.post("", response_model=JobStatus, status_code=201)
def create_job(
    req: TranscodeRequest,
    app_settings: Settings = Depends(get_app_settings),
) -> JobStatus:
    provider = build_provider(req.provider, app_settings)
    return provider.transcode(req.source, req.presets)


@router.get("/{provider_name}/{job_id}", response_model=JobStatus)
def get_job(
    provider_name: str,
    job_id: str,
    app_settings: Settings = Depends(get_app_settings),
) -> JobStatus:
    provider = build_provider(provider_name, app_settings)
    return provider.job_status(job_id)
