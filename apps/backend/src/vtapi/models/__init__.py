"""Data models for the video transcoding API."""

from vtapi.models.job import JobStatus, Status
from vtapi.models.preset import OutputOptions, Preset

__all__ = [
    # Preset
    "OutputOptions",
    "Preset",
    # Job
    "JobStatus",
    "Status",
]
