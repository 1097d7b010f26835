"""Elemental Conductor transcoding provider."""

import logging
from enum import Enum
from typing import Any

from vtapi.config import Settings
from vtapi.errors import CapacityError, InvalidConfigError, PresetNotFoundError
from vtapi.models.job import JobStatus, Status
from vtapi.models.preset import Preset
from vtapi.provider.elementalconductor.client import (
    ElementalConductorClient,
    IElementalConductorClient,
)
from vtapi.provider.elementalconductor.models import (
    PRODUCT_SERVER,
    Container,
    Job,
    Location,
    Output,
    OutputGroup,
    OutputGroupType,
    StreamAssembly,
)

logger = logging.getLogger(__name__)

# Name used for registering the provider.
NAME = "elementalconductor"

DEFAULT_JOB_PRIORITY = 50
DEFAULT_OUTPUT_GROUP_ORDER = 1
DEFAULT_CONTAINER = Container.MPEG4

_ADAPTIVE_STREAMING_EXTENSIONS = frozenset({"ts", "hls", "m3u8"})


class ConductorStatus(str, Enum):
    """Job states reported by Elemental Conductor."""

    PENDING = "pending"
    PREPROCESSING = "preprocessing"
    RUNNING = "running"
    POSTPROCESSING = "postprocessing"
    COMPLETE = "complete"
    CANCELLED = "cancelled"
    ERROR = "error"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: str) -> "ConductorStatus":
        try:
            return cls(value.lower())
        except ValueError:
            return cls.UNKNOWN


def translate_status(conductor_status: str) -> Status:
    """Map a Conductor job state onto the canonical status vocabulary."""
    match ConductorStatus.parse(conductor_status):
        case ConductorStatus.PENDING:
            return Status.QUEUED
        case (
            ConductorStatus.PREPROCESSING
            | ConductorStatus.RUNNING
            | ConductorStatus.POSTPROCESSING
        ):
            return Status.STARTED
        case ConductorStatus.COMPLETE:
            return Status.FINISHED
        case ConductorStatus.CANCELLED:
            return Status.CANCELED
        case ConductorStatus.ERROR:
            return Status.FAILED
        case _:
            return Status.UNKNOWN


def build_destination(source: str, destination_root: str) -> str:
    """Derive the output location of a job from its source URI.

    The file name of the source, without extension, is appended to the
    destination root: "s3://bucket/video.mov" and "s3://out/" give
    "s3://out/video".
    """
    filename = source.rsplit("/", 1)[-1]
    stem, dot, _ = filename.rpartition(".")
    if not dot:
        stem = filename
    return destination_root.rstrip("/") + "/" + stem


def _resolve_container(extension: str) -> tuple[str, bool]:
    """Return the container for an extension and whether it is adaptive streaming."""
    if extension.lower() in _ADAPTIVE_STREAMING_EXTENSIONS:
        return Container.APPLE_HTTP_LIVE_STREAMING.value, True
    if not extension:
        return DEFAULT_CONTAINER.value, False
    return extension, False


def build_output_group_and_stream_assemblies(
    destination: Location,
    presets: list[Preset],
) -> tuple[OutputGroup, list[StreamAssembly]]:
    """Build the single output group and the stream assemblies for a job.

    Each preset becomes one output and one stream assembly named after its
    position. If any preset produces adaptive streaming, the whole group is
    delivered as an Apple HTTP Live Streaming group.

    Args:
        destination: Where the outputs are written
        presets: Ordered presets, one output per preset

    Returns:
        Tuple of (output group, stream assemblies)

    Raises:
        PresetNotFoundError: If a preset has no Elemental Conductor mapping
    """
    outputs: list[Output] = []
    stream_assemblies: list[StreamAssembly] = []
    adaptive_streaming = False

    for index, preset in enumerate(presets):
        stream_assembly_name = f"stream_{index}"
        container, adaptive = _resolve_container(preset.output_opts.bare_extension)
        adaptive_streaming = adaptive_streaming or adaptive

        preset_id = preset.provider_mapping.get(NAME)
        if preset_id is None:
            raise PresetNotFoundError(preset.name, NAME)

        outputs.append(
            Output(
                stream_assembly_name=stream_assembly_name,
                name_modifier="_" + preset.name,
                order=index,
                container=container,
            )
        )
        stream_assemblies.append(StreamAssembly(name=stream_assembly_name, preset=preset_id))

    group_type = OutputGroupType.APPLE_LIVE if adaptive_streaming else OutputGroupType.FILE
    output_group = OutputGroup(
        order=DEFAULT_OUTPUT_GROUP_ORDER,
        type=group_type,
        destination=destination,
        outputs=outputs,
    )
    return output_group, stream_assemblies


class ElementalConductorProvider:
    """Transcoding provider backed by an Elemental Conductor cluster."""

    def __init__(self, client: IElementalConductorClient) -> None:
        self._client = client

    @property
    def name(self) -> str:
        """Provider name identifier."""
        return NAME

    def transcode(self, source: str, presets: list[Preset]) -> JobStatus:
        """Submit a job encoding ``source`` with every preset.

        Raises:
            PresetNotFoundError: If a preset has no Conductor mapping
            TransportError: If the submission fails
        """
        job = self.build_job(source, presets)
        response = self._client.post_job(job)
        logger.info(
            "Submitted '%s' with %d preset(s) as job %s",
            source,
            len(presets),
            response.id,
        )
        return JobStatus(
            provider_name=NAME,
            provider_job_id=response.id,
            status=Status.QUEUED,
        )

    def job_status(self, job_id: str) -> JobStatus:
        """Query Conductor for a job and normalize the response.

        Raises:
            TransportError: If the query fails
        """
        response = self._client.get_job(job_id)
        provider_status: dict[str, Any] = {
            "status": response.status,
            "pct_complete": str(response.pct_complete),
            "submitted": response.submitted,
        }
        if response.start_time is not None:
            provider_status["start_time"] = response.start_time
        if response.complete_time is not None:
            provider_status["complete_time"] = response.complete_time
        if response.errored_time is not None:
            provider_status["errored_time"] = response.errored_time
        if response.error_messages:
            provider_status["error_messages"] = response.error_messages

        status = translate_status(response.status)
        logger.info("Job %s is %s (%s)", job_id, status.value, response.status)
        return JobStatus(
            provider_name=NAME,
            provider_job_id=response.id or job_id,
            status=status,
            provider_status=provider_status,
        )

    def healthcheck(self) -> None:
        """Check that enough processing nodes are active.

        Raises:
            TransportError: If the node list or cloud config cannot be fetched
            CapacityError: If fewer nodes are active than the configured minimum
        """
        nodes = self._client.get_nodes()
        cloud_config = self._client.get_cloud_config()
        server_count = sum(
            1 for node in nodes if node.product == PRODUCT_SERVER and node.status == "active"
        )
        if server_count < cloud_config.min_nodes:
            logger.warning(
                "Only %d of %d required nodes are active",
                server_count,
                cloud_config.min_nodes,
            )
            raise CapacityError(required=cloud_config.min_nodes, found=server_count)

    def build_job(self, source: str, presets: list[Preset]) -> Job:
        """Build the Conductor job submission for a source and its presets.

        Raises:
            PresetNotFoundError: If a preset has no Conductor mapping
        """
        input_location = Location(
            uri=source,
            username=self._client.access_key_id,
            password=self._client.secret_access_key,
        )
        output_location = Location(
            uri=build_destination(source, self._client.destination),
            username=self._client.access_key_id,
            password=self._client.secret_access_key,
        )
        output_group, stream_assemblies = build_output_group_and_stream_assemblies(
            output_location, presets
        )
        return Job(
            input=input_location,
            priority=DEFAULT_JOB_PRIORITY,
            output_group=output_group,
            stream_assemblies=stream_assemblies,
        )


def elemental_conductor_factory(settings: Settings) -> ElementalConductorProvider:
    """Build an Elemental Conductor provider from the application settings.

    Raises:
        InvalidConfigError: If a connection setting, storage credential or the
            destination root is missing
    """
    cfg = settings.elemental_conductor
    missing = cfg.missing_fields()
    if missing:
        raise InvalidConfigError(
            "missing Elemental Conductor configuration. Please define the "
            f"environment variables {', '.join(missing)} or set these values "
            "in the .env file"
        )
    client = ElementalConductorClient(
        host=cfg.host,
        user_login=cfg.user_login,
        api_key=cfg.api_key,
        auth_expires=cfg.auth_expires,
        access_key_id=cfg.aws_access_key_id,
        secret_access_key=cfg.aws_secret_access_key,
        destination=cfg.destination,
        timeout=settings.http_timeout,
    )
    return ElementalConductorProvider(client)
