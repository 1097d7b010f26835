"""Canonical job status models."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class Status(str, Enum):
    """Backend-agnostic status of a transcoding job."""

    QUEUED = "queued"
    STARTED = "started"
    FINISHED = "finished"
    CANCELED = "canceled"
    FAILED = "failed"
    UNKNOWN = "unknown"


class JobStatus(BaseModel):
    """Status of a job as reported by a transcoding provider."""

    provider_name: str = Field(..., description="Name of the provider handling the job")
    provider_job_id: str = Field(..., description="Job identifier on the provider's backend")
    status: Status = Status.UNKNOWN
    provider_status: dict[str, Any] = Field(
        default_factory=dict,
        description="Provider-specific diagnostic values",
    )
