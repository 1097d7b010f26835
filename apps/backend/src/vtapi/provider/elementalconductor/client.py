"""HTTP client for the Elemental Conductor REST API."""

import hashlib
import logging
import time
import xml.etree.ElementTree as ET
from collections.abc import Callable
from typing import Protocol, TypeVar

import httpx

from vtapi.errors import TransportError
from vtapi.provider.elementalconductor.models import CloudConfig, Job, JobResponse, Node

logger = logging.getLogger(__name__)

T = TypeVar("T")


class IElementalConductorClient(Protocol):
    """Operations the provider needs from the Conductor transport."""

    access_key_id: str
    secret_access_key: str
    destination: str

    def post_job(self, job: Job) -> JobResponse:
        """Submit a job and return the backend's view of it."""
        ...

    def get_job(self, job_id: str) -> JobResponse:
        """Fetch a job by its identifier."""
        ...

    def get_nodes(self) -> list[Node]:
        """List the nodes of the cluster."""
        ...

    def get_cloud_config(self) -> CloudConfig:
        """Fetch the autoscaling configuration of the cluster."""
        ...


class ElementalConductorClient:
    """Client for the Elemental Conductor API.

    Every request is signed with the user login and API key using
    Conductor's expiring auth key scheme.
    """

    def __init__(
        self,
        host: str,
        user_login: str,
        api_key: str,
        auth_expires: int,
        access_key_id: str = "",
        secret_access_key: str = "",
        destination: str = "",
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ):
        """Initialize the Conductor client.

        Args:
            host: Base URL of the Conductor cluster.
            user_login: Conductor user login.
            api_key: Conductor API key for the user.
            auth_expires: Minutes a signed request stays valid.
            access_key_id: Storage access key used for input/output locations.
            secret_access_key: Storage secret key used for input/output locations.
            destination: Root URI where job outputs are written.
            timeout: HTTP request timeout in seconds.
            transport: Optional httpx transport, mainly for tests.
        """
        self.host = host.rstrip("/")
        self.user_login = user_login
        self.api_key = api_key
        self.auth_expires = auth_expires
        self.access_key_id = access_key_id
        self.secret_access_key = secret_access_key
        self.destination = destination
        self.timeout = timeout
        self._transport = transport

    def post_job(self, job: Job) -> JobResponse:
        response = self._request("POST", "/jobs", content=job.to_xml())
        return _decode(JobResponse.from_xml, response)

    def get_job(self, job_id: str) -> JobResponse:
        response = self._request("GET", f"/jobs/{job_id}")
        return _decode(JobResponse.from_xml, response)

    def get_nodes(self) -> list[Node]:
        response = self._request("GET", "/nodes")
        return _decode(Node.list_from_xml, response)

    def get_cloud_config(self) -> CloudConfig:
        response = self._request("GET", "/configs/cloud")
        return _decode(CloudConfig.from_xml, response)

    def auth_headers(self, path: str, now: float | None = None) -> dict[str, str]:
        """Build the signed authentication headers for a request path.

        Args:
            path: Request path relative to the API root (e.g. "/jobs").
            now: Current unix time, defaults to ``time.time()``.

        Returns:
            Dictionary with the X-Auth-User, X-Auth-Expires and X-Auth-Key headers.
        """
        if now is None:
            now = time.time()
        expires = str(int(now) + self.auth_expires * 60)
        inner = hashlib.md5(
            f"{path}{self.user_login}{self.api_key}{expires}".encode()
        ).hexdigest()
        key = hashlib.md5(f"{self.api_key}{inner}".encode()).hexdigest()
        return {
            "X-Auth-User": self.user_login,
            "X-Auth-Expires": expires,
            "X-Auth-Key": key,
        }

    def _request(self, method: str, path: str, content: bytes | None = None) -> httpx.Response:
        """Send a signed request and return the successful response.

        Raises:
            TransportError: If the backend is unreachable or answers with an error.
        """
        headers = {
            "Accept": "application/xml",
            "Content-Type": "application/xml",
            **self.auth_headers(path),
        }
        url = f"{self.host}/api{path}"
        logger.debug("%s %s", method, url)

        with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
            try:
                response = client.request(method, url, headers=headers, content=content)
            except httpx.RequestError as e:
                raise TransportError(
                    f"Failed to connect to Elemental Conductor: {e}"
                ) from e

        if response.is_error:
            raise TransportError(
                f"Elemental Conductor returned error: {response.text}",
                status_code=response.status_code,
                details=response.text,
            )
        return response


def _decode(parse: Callable[[bytes], T], response: httpx.Response) -> T:
    """Parse a response body, reporting malformed payloads as transport errors."""
    try:
        return parse(response.content)
    except (ET.ParseError, ValueError) as e:
        raise TransportError(
            f"Invalid response from Elemental Conductor: {e}",
            status_code=response.status_code,
            details=response.text,
        ) from e
