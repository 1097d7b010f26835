"""Base interface for transcoding providers."""

from collections.abc import Callable
from typing import Protocol

from vtapi.config import Settings
from vtapi.models.job import JobStatus
from vtapi.models.preset import Preset


class TranscodingProvider(Protocol):
    """Protocol for transcoding providers.

    Each provider translates generic transcoding requests into the
    request format of one specific backend and normalizes the backend's
    responses back into the canonical status model.
    """

    def transcode(self, source: str, presets: list[Preset]) -> JobStatus:
        """Submit a new transcoding job.

        Args:
            source: URI of the source media
            presets: Ordered presets, one output per preset

        Returns:
            JobStatus carrying the backend job identifier
        """
        ...

    def job_status(self, job_id: str) -> JobStatus:
        """Query the backend for the status of a job.

        Args:
            job_id: Backend job identifier returned by ``transcode``

        Returns:
            JobStatus with the canonical status and diagnostic values
        """
        ...

    def healthcheck(self) -> None:
        """Check that the backend can accept work.

        Raises:
            VTAPIError: If the backend is unhealthy
        """
        ...


# Builds a provider instance from the application settings.
ProviderFactory = Callable[[Settings], TranscodingProvider]
