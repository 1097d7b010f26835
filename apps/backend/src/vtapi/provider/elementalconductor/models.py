"""Elemental Conductor request and response models.

The Conductor REST API speaks XML. Request models render themselves with
``to_xml`` and response models parse themselves with ``from_xml``.
"""

import xml.etree.ElementTree as ET
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field

# Layout of timestamps in Conductor responses, e.g. "2015-11-18 17:27:09 -0500".
DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S %z"

# Product name reported by processing nodes.
PRODUCT_SERVER = "Server"


class Container(str, Enum):
    """Output containers with special meaning for the provider."""

    MPEG4 = "mp4"
    APPLE_HTTP_LIVE_STREAMING = "m3u8"


class OutputGroupType(str, Enum):
    """Delivery format of an output group."""

    FILE = "file_group_settings"
    APPLE_LIVE = "apple_live_group_settings"


def _text(parent: ET.Element, tag: str, value: object) -> ET.Element:
    element = ET.SubElement(parent, tag)
    element.text = str(value)
    return element


def _find_text(element: ET.Element, path: str) -> str:
    return (element.findtext(path) or "").strip()


def parse_datetime(value: str) -> datetime | None:
    """Parse a Conductor timestamp, returning None for empty values."""
    value = value.strip()
    if not value:
        return None
    return datetime.strptime(value, DATETIME_FORMAT)


class Location(BaseModel):
    """A source or destination address with its credentials."""

    uri: str
    username: str = ""
    password: str = ""

    def to_xml(self, parent: ET.Element, tag: str) -> ET.Element:
        element = ET.SubElement(parent, tag)
        _text(element, "uri", self.uri)
        _text(element, "username", self.username)
        _text(element, "password", self.password)
        return element


class StreamAssembly(BaseModel):
    """Links a named stream to the Conductor preset that encodes it."""

    name: str
    preset: str

    def to_xml(self, parent: ET.Element) -> ET.Element:
        element = ET.SubElement(parent, "stream_assembly")
        _text(element, "name", self.name)
        _text(element, "preset", self.preset)
        return element


class Output(BaseModel):
    """A single output file or rendition inside an output group."""

    stream_assembly_name: str
    name_modifier: str
    order: int
    # Any container identifier is accepted, not only the Container members.
    container: str

    def to_xml(self, parent: ET.Element) -> ET.Element:
        element = ET.SubElement(parent, "output")
        _text(element, "stream_assembly_name", self.stream_assembly_name)
        _text(element, "name_modifier", self.name_modifier)
        _text(element, "order", self.order)
        _text(element, "container", self.container)
        return element


class OutputGroup(BaseModel):
    """Top-level delivery settings of a job."""

    order: int
    type: OutputGroupType
    destination: Location
    outputs: list[Output] = Field(default_factory=list)

    def to_xml(self, parent: ET.Element) -> ET.Element:
        element = ET.SubElement(parent, "output_group")
        _text(element, "order", self.order)
        # The destination lives inside the settings block named after the type.
        settings = ET.SubElement(element, self.type.value)
        self.destination.to_xml(settings, "destination")
        _text(element, "type", self.type.value)
        for output in self.outputs:
            output.to_xml(element)
        return element


class Job(BaseModel):
    """A job submission for the Conductor API."""

    input: Location
    priority: int
    output_group: OutputGroup
    stream_assemblies: list[StreamAssembly] = Field(default_factory=list)

    def to_xml(self) -> bytes:
        """Render the job as the XML document expected by POST /jobs."""
        root = ET.Element("job")
        job_input = ET.SubElement(root, "input")
        self.input.to_xml(job_input, "file_input")
        _text(root, "priority", self.priority)
        self.output_group.to_xml(root)
        for stream_assembly in self.stream_assemblies:
            stream_assembly.to_xml(root)
        return ET.tostring(root, encoding="utf-8", xml_declaration=True)


class JobResponse(BaseModel):
    """Conductor's view of a submitted job."""

    href: str = ""
    status: str = ""
    pct_complete: int = 0
    submitted: datetime | None = None
    start_time: datetime | None = None
    complete_time: datetime | None = None
    errored_time: datetime | None = None
    error_messages: list[str] = Field(default_factory=list)

    @property
    def id(self) -> str:
        """Return the job identifier, the last segment of the href."""
        return self.href.rstrip("/").rsplit("/", 1)[-1]

    @classmethod
    def from_xml(cls, data: bytes | str) -> "JobResponse":
        root = ET.fromstring(data)
        pct_complete = _find_text(root, "pct_complete")
        return cls(
            href=root.get("href", ""),
            status=_find_text(root, "status"),
            pct_complete=int(pct_complete) if pct_complete else 0,
            submitted=parse_datetime(_find_text(root, "submitted")),
            start_time=parse_datetime(_find_text(root, "start_time")),
            complete_time=parse_datetime(_find_text(root, "complete_time")),
            errored_time=parse_datetime(_find_text(root, "errored_time")),
            error_messages=[
                _find_text(error, "message")
                for error in root.findall("error_messages/error")
            ],
        )


class Node(BaseModel):
    """A node of the Conductor cluster."""

    href: str = ""
    name: str = ""
    product: str = ""
    status: str = ""

    @classmethod
    def from_xml(cls, element: ET.Element) -> "Node":
        return cls(
            href=element.get("href", ""),
            name=_find_text(element, "name"),
            product=_find_text(element, "product"),
            status=_find_text(element, "status"),
        )

    @classmethod
    def list_from_xml(cls, data: bytes | str) -> list["Node"]:
        root = ET.fromstring(data)
        return [cls.from_xml(element) for element in root.findall("node")]


class CloudConfig(BaseModel):
    """Autoscaling configuration of the Conductor cluster."""

    authorized_node_count: int = 0
    min_nodes: int = 0
    max_nodes: int = 0

    @classmethod
    def from_xml(cls, data: bytes | str) -> "CloudConfig":
        root = ET.fromstring(data)
        values = {}
        for field in ("authorized_node_count", "min_nodes", "max_nodes"):
            text = _find_text(root, field)
            if text:
                values[field] = int(text)
        return cls(**values)
