"""HTTP transport adapter for the Picasa API."""

import json
import logging
from collections.abc import AsyncIterable
from dataclasses import dataclass, field
from typing import Protocol

import httpx

from picasa_client.errors import ParseError, RemoteApiError, TransportError

_logger = logging.getLogger(__name__)

RequestContent = bytes | str | AsyncIterable[bytes]


@dataclass(frozen=True)
class ApiRequest:
    """Outbound request descriptor."""

    method: str
    url: str
    params: dict[str, str] = field(default_factory=dict)
    headers: dict[str, str] = field(default_factory=dict)
    content: RequestContent | None = None
    timeout: float | None = None


@dataclass(frozen=True)
class ApiResponse:
    """Successful response with lower-cased header names."""

    status_code: int
    headers: dict[str, str]
    content: bytes

    def header(self, name: str) -> str | None:
        """Return a header value by case-insensitive name."""
        return self.headers.get(name.lower())

    def json(self) -> dict[str, object]:
        """Decode the body as a JSON object; an empty body decodes to {}."""
        if not self.content.strip():
            return {}
        try:
            payload = json.loads(self.content)
        except ValueError as exc:
            raise ParseError(f"Response body is not JSON: {exc}") from exc
        if not isinstance(payload, dict):
            raise ParseError("Response body is not a JSON object")
        return payload


class HttpTransport(Protocol):
    """Interface for executing API requests."""

    async def send(self, request: ApiRequest) -> ApiResponse:
        """Execute a request, raising RequestError subclasses on failure."""


@dataclass
class HttpxTransport(HttpTransport):
    """Transport implemented with httpx."""

    http_client: httpx.AsyncClient
    timeout: float = 30

    @classmethod
    def create(cls, timeout: float = 30) -> "HttpxTransport":
        """Create a transport with a managed httpx session."""
        return cls(http_client=httpx.AsyncClient(), timeout=timeout)

    async def send(self, request: ApiRequest) -> ApiResponse:
        """Send a request; non-2xx statuses raise RemoteApiError."""
        try:
            response = await self.http_client.request(
                request.method,
                request.url,
                params=request.params,
                headers=request.headers,
                content=request.content,
                timeout=request.timeout or self.timeout,
            )
        except httpx.TransportError as exc:
            _logger.debug("%s %s failed: %s", request.method, request.url, exc)
            raise TransportError(str(exc) or type(exc).__name__) from exc

        _logger.debug("%s %s -> %s", request.method, request.url, response.status_code)
        if not response.is_success:
            raise RemoteApiError(response.status_code, response.text)
        return ApiResponse(
            status_code=response.status_code,
            headers={key.lower(): value for key, value in response.headers.items()},
            content=response.content,
        )

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
