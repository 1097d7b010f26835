"""Tests for the Elemental Conductor HTTP client and XML models."""

import hashlib
import xml.etree.ElementTree as ET
from datetime import datetime, timedelta, timezone

import httpx
import pytest

from vtapi.errors import TransportError
from vtapi.provider.elementalconductor.client import ElementalConductorClient
from vtapi.provider.elementalconductor.models import (
    Job,
    Location,
    Output,
    OutputGroup,
    OutputGroupType,
    StreamAssembly,
    parse_datetime,
)

JOB_XML = """<?xml version="1.0" encoding="UTF-8"?>
<job href="/jobs/1">
  <status>Error</status>
  <pct_complete>23</pct_complete>
  <submitted>2015-11-18 17:27:09 -0500</submitted>
  <start_time>2015-11-18 17:28:00 -0500</start_time>
  <complete_time></complete_time>
  <errored_time>2015-11-18 17:30:00 -0500</errored_time>
  <error_messages>
    <error>
      <code>1040</code>
      <created_at>2015-11-18 17:30:00 -0500</created_at>
      <message>Failed to open input file</message>
    </error>
  </error_messages>
</job>
"""

NODES_XML = """<?xml version="1.0" encoding="UTF-8"?>
<node_list>
  <node href="/nodes/1">
    <name>conductor-1</name>
    <product>Conductor File</product>
    <status>active</status>
  </node>
  <node href="/nodes/2">
    <name>server-1</name>
    <product>Server</product>
    <status>active</status>
  </node>
</node_list>
"""

CLOUD_CONFIG_XML = """<?xml version="1.0" encoding="UTF-8"?>
<cloud_config>
  <authorized_node_count>20</authorized_node_count>
  <max_nodes>10</max_nodes>
  <min_nodes>2</min_nodes>
</cloud_config>
"""

TZ = timezone(timedelta(hours=-5))


def _make_client(handler) -> ElementalConductorClient:
    return ElementalConductorClient(
        host="https://conductor.example.com/",
        user_login="myuser",
        api_key="secret-key",
        auth_expires=30,
        access_key_id="aws-access-key",
        secret_access_key="aws-secret-key",
        destination="s3://destination/",
        transport=httpx.MockTransport(handler),
    )


def _make_job() -> Job:
    destination = Location(uri="s3://destination/file", username="key", password="secret")
    return Job(
        input=Location(uri="s3://source/file.mov", username="key", password="secret"),
        priority=50,
        output_group=OutputGroup(
            order=1,
            type=OutputGroupType.FILE,
            destination=destination,
            outputs=[
                Output(
                    stream_assembly_name="stream_0",
                    name_modifier="_720p",
                    order=0,
                    container="mp4",
                )
            ],
        ),
        stream_assemblies=[StreamAssembly(name="stream_0", preset="17")],
    )


class TestJobXML:
    def test_render(self) -> None:
        root = ET.fromstring(_make_job().to_xml())

        assert root.tag == "job"
        assert root.findtext("input/file_input/uri") == "s3://source/file.mov"
        assert root.findtext("input/file_input/username") == "key"
        assert root.findtext("priority") == "50"
        group = root.find("output_group")
        assert group is not None
        assert group.findtext("order") == "1"
        assert group.findtext("type") == "file_group_settings"
        assert group.findtext("file_group_settings/destination/uri") == "s3://destination/file"
        assert group.find("apple_live_group_settings") is None
        assert group.findtext("output/stream_assembly_name") == "stream_0"
        assert group.findtext("output/name_modifier") == "_720p"
        assert group.findtext("output/container") == "mp4"
        assert root.findtext("stream_assembly/name") == "stream_0"
        assert root.findtext("stream_assembly/preset") == "17"

    def test_render_apple_live_group(self) -> None:
        job = _make_job()
        job.output_group.type = OutputGroupType.APPLE_LIVE
        group = ET.fromstring(job.to_xml()).find("output_group")

        assert group.findtext("type") == "apple_live_group_settings"
        assert group.findtext("apple_live_group_settings/destination/uri") == (
            "s3://destination/file"
        )
        assert group.find("file_group_settings") is None


class TestParseDatetime:
    def test_parse(self) -> None:
        assert parse_datetime("2015-11-18 17:27:09 -0500") == datetime(
            2015, 11, 18, 17, 27, 9, tzinfo=TZ
        )

    def test_empty(self) -> None:
        assert parse_datetime("") is None
        assert parse_datetime("   ") is None


class TestElementalConductorClient:
    def test_post_job(self) -> None:
        captured: dict[str, httpx.Request] = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["request"] = request
            return httpx.Response(201, text='<job href="/jobs/42"><status>Pending</status></job>')

        response = _make_client(handler).post_job(_make_job())

        request = captured["request"]
        assert request.method == "POST"
        assert str(request.url) == "https://conductor.example.com/api/jobs"
        assert request.headers["Content-Type"] == "application/xml"
        assert request.headers["Accept"] == "application/xml"
        assert request.headers["X-Auth-User"] == "myuser"
        assert ET.fromstring(request.content).findtext("priority") == "50"
        assert response.id == "42"
        assert response.status == "Pending"

    def test_get_job(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.method == "GET"
            assert request.url.path == "/api/jobs/1"
            return httpx.Response(200, text=JOB_XML)

        response = _make_client(handler).get_job("1")

        assert response.id == "1"
        assert response.status == "Error"
        assert response.pct_complete == 23
        assert response.submitted == datetime(2015, 11, 18, 17, 27, 9, tzinfo=TZ)
        assert response.start_time == datetime(2015, 11, 18, 17, 28, 0, tzinfo=TZ)
        assert response.complete_time is None
        assert response.errored_time == datetime(2015, 11, 18, 17, 30, 0, tzinfo=TZ)
        assert response.error_messages == ["Failed to open input file"]

    def test_get_nodes(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/api/nodes"
            return httpx.Response(200, text=NODES_XML)

        nodes = _make_client(handler).get_nodes()

        assert [(n.name, n.product, n.status) for n in nodes] == [
            ("conductor-1", "Conductor File", "active"),
            ("server-1", "Server", "active"),
        ]
        assert nodes[1].href == "/nodes/2"

    def test_get_cloud_config(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/api/configs/cloud"
            return httpx.Response(200, text=CLOUD_CONFIG_XML)

        config = _make_client(handler).get_cloud_config()

        assert config.min_nodes == 2
        assert config.max_nodes == 10
        assert config.authorized_node_count == 20

    def test_error_status(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(401, text="<errors><error>Unauthorized</error></errors>")

        with pytest.raises(TransportError) as exc_info:
            _make_client(handler).get_job("1")
        assert exc_info.value.status_code == 401
        assert "Unauthorized" in exc_info.value.details

    def test_connection_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(TransportError, match="Failed to connect"):
            _make_client(handler).get_nodes()

    def test_malformed_body(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="not xml")

        with pytest.raises(TransportError, match="Invalid response"):
            _make_client(handler).get_cloud_config()


class TestAuthHeaders:
    def test_signature(self) -> None:
        client = _make_client(lambda request: httpx.Response(200))
        headers = client.auth_headers("/jobs", now=1_000_000)

        expires = str(1_000_000 + 30 * 60)
        inner = hashlib.md5(f"/jobsmyusersecret-key{expires}".encode()).hexdigest()
        assert headers == {
            "X-Auth-User": "myuser",
            "X-Auth-Expires": expires,
            "X-Auth-Key": hashlib.md5(f"secret-key{inner}".encode()).hexdigest(),
        }

    def test_signature_depends_on_path(self) -> None:
        client = _make_client(lambda request: httpx.Response(200))
        jobs = client.auth_headers("/jobs", now=1_000_000)
        nodes = client.auth_headers("/nodes", now=1_000_000)
        assert jobs["X-Auth-Key"] != nodes["X-Auth-Key"]
