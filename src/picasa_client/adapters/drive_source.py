"""Google Drive byte-range download source."""

from collections.abc import AsyncIterator
from dataclasses import dataclass
from typing import Protocol

import httpx

from picasa_client.domain.uploads import UploadRange
from picasa_client.endpoints import DRIVE_FILES_URL
from picasa_client.errors import RemoteApiError, TransportError


class DriveFileSource(Protocol):
    """Interface for streaming part of a Drive file."""

    def iter_range(
        self, access_token: str, file_id: str, upload_range: UploadRange
    ) -> AsyncIterator[bytes]:
        """Yield the bytes of `upload_range` in order."""


@dataclass
class HttpxDriveFileSource(DriveFileSource):
    """Drive file source using httpx streaming."""

    http_client: httpx.AsyncClient
    chunk_size: int = 256 * 1024
    timeout: float = 300

    @classmethod
    def create(cls, timeout: float = 300) -> "HttpxDriveFileSource":
        """Create a Drive source with a managed httpx session."""
        return cls(http_client=httpx.AsyncClient(), timeout=timeout)

    async def iter_range(
        self, access_token: str, file_id: str, upload_range: UploadRange
    ) -> AsyncIterator[bytes]:
        """Stream a byte range of a Drive file."""
        url = f"{DRIVE_FILES_URL}/{file_id}"
        headers = {
            "Authorization": f"Bearer {access_token}",
            "Range": f"bytes={upload_range.start}-{upload_range.end}",
        }
        try:
            async with self.http_client.stream(
                "GET",
                url,
                params={"alt": "media"},
                headers=headers,
                timeout=self.timeout,
            ) as response:
                if not response.is_success:
                    await response.aread()
                    raise RemoteApiError(response.status_code, response.text)
                async for chunk in response.aiter_bytes(self.chunk_size):
                    yield chunk
        except httpx.TransportError as exc:
            raise TransportError(str(exc) or type(exc).__name__) from exc

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
