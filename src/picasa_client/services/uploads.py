"""Resumable upload protocol for videos.

An upload runs as two requests. The first creates a session and yields its
location; the second PUTs the payload to that location with a byte-range
header. The transfer endpoint answers 308 when it accepted a chunk but
expects more data, which counts as a successful call here. Whether the
logical upload is finished is reported by `UploadResult.complete`.
"""

import asyncio
import logging
from collections.abc import AsyncIterable, AsyncIterator
from dataclasses import dataclass, field

from picasa_client.adapters.http_transport import HttpTransport
from picasa_client.domain.uploads import (
    ProgressCallback,
    UploadProgress,
    UploadResult,
    UploadSession,
    UploadState,
    VideoUpload,
)
from picasa_client.endpoints import PARTIAL_ACCEPT_STATUS
from picasa_client.errors import (
    RemoteApiError,
    TransportError,
    UploadCancelledError,
    UploadError,
    UploadStateError,
)
from picasa_client.services.request_builder import RequestBuilder

_logger = logging.getLogger(__name__)

_CHUNK_SIZE = 64 * 1024


@dataclass
class ResumableUploadSession:
    """Drives one create-then-transfer handshake."""

    transport: HttpTransport
    builder: RequestBuilder = field(default_factory=RequestBuilder)
    upload_timeout: float | None = None
    session: UploadSession = field(default_factory=UploadSession)

    @classmethod
    def from_location(
        cls,
        transport: HttpTransport,
        location: str,
        builder: RequestBuilder | None = None,
        upload_timeout: float | None = None,
    ) -> "ResumableUploadSession":
        """Rebuild a session from a location returned by an earlier create."""
        return cls(
            transport=transport,
            builder=builder or RequestBuilder(),
            upload_timeout=upload_timeout,
            session=UploadSession(
                location=location, state=UploadState.SESSION_CREATED
            ),
        )

    @property
    def state(self) -> UploadState:
        """Current lifecycle state."""
        return self.session.state

    async def create(
        self, access_token: str, album_id: str, upload: VideoUpload
    ) -> str:
        """Create the upload session and return its location."""
        self._require(UploadState.UNINITIATED)
        request = self.builder.create_upload_session(access_token, album_id, upload)
        try:
            response = await self.transport.send(request)
        except RemoteApiError as exc:
            self.session.state = UploadState.FAILED
            raise UploadError(
                "Upload session creation failed",
                status_code=exc.status_code,
                detail=exc.message,
            ) from exc
        except TransportError as exc:
            self.session.state = UploadState.FAILED
            raise UploadError(
                "Upload session creation failed", detail=str(exc)
            ) from exc

        location = response.header("Location")
        if not location:
            self.session.state = UploadState.FAILED
            raise UploadError(
                "Upload session response has no location",
                status_code=response.status_code,
            )
        self.session.location = location
        self.session.state = UploadState.SESSION_CREATED
        _logger.info("Created upload session for album %s", album_id)
        return location

    async def transfer(
        self,
        upload: VideoUpload,
        progress_cb: ProgressCallback | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> UploadResult:
        """Send the upload body, or the configured range of it, to the session."""
        self._require(UploadState.SESSION_CREATED)
        upload_range = upload.resolved_range()
        if isinstance(upload.body, bytes | bytearray):
            size = len(upload.body)
            if size != upload_range.length:
                raise UploadError(
                    "Upload body does not match the declared range",
                    detail=f"{size} bytes for a {upload_range.length} byte range",
                )
        self.session.start = upload_range.start
        self.session.end = upload_range.end
        self.session.total = upload.content_length
        self.session.bytes_transferred = 0
        self.session.state = UploadState.TRANSFERRING

        body = self._counted(
            upload.body, upload_range.length, progress_cb, cancel_event
        )
        request = self.builder.upload_chunk(
            self.session.location or "",
            body,
            start=upload_range.start,
            length=upload_range.length,
            total=upload.content_length,
            timeout=self.upload_timeout,
        )
        try:
            response = await self.transport.send(request)
        except RemoteApiError as exc:
            if exc.status_code == PARTIAL_ACCEPT_STATUS:
                _logger.warning(
                    "Upload chunk accepted with status %s; more data expected",
                    exc.status_code,
                )
                return self._complete(exc.status_code, partial=True)
            self.session.state = UploadState.FAILED
            raise UploadError(
                "Upload transfer failed",
                status_code=exc.status_code,
                detail=exc.message,
            ) from exc
        except TransportError as exc:
            self.session.state = UploadState.FAILED
            raise UploadError("Upload transfer failed", detail=str(exc)) from exc
        except (UploadError, asyncio.CancelledError):
            self.session.state = UploadState.FAILED
            raise
        except Exception as exc:
            self.session.state = UploadState.FAILED
            raise UploadError("Upload transfer failed", detail=str(exc)) from exc
        return self._complete(response.status_code, partial=False)

    async def upload(
        self,
        access_token: str,
        album_id: str,
        upload: VideoUpload,
        progress_cb: ProgressCallback | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> UploadResult:
        """Create a session and transfer the body in one call."""
        await self.create(access_token, album_id, upload)
        return await self.transfer(upload, progress_cb, cancel_event)

    def _complete(self, status_code: int, *, partial: bool) -> UploadResult:
        self.session.state = UploadState.COMPLETED
        result = UploadResult(
            status="OK",
            status_code=status_code,
            bytes_transferred=self.session.bytes_transferred,
            range_end=self.session.end,
            total=self.session.total,
            partial=partial,
        )
        _logger.info(
            "Upload transfer finished: status=%s bytes=%s complete=%s",
            status_code,
            result.bytes_transferred,
            result.complete,
        )
        return result

    async def _counted(
        self,
        body: bytes | AsyncIterable[bytes],
        length: int,
        progress_cb: ProgressCallback | None,
        cancel_event: asyncio.Event | None,
    ) -> AsyncIterator[bytes]:
        """Yield the body in order while counting consumed bytes."""
        async for chunk in _iter_body(body):
            if cancel_event is not None and cancel_event.is_set():
                raise UploadCancelledError(
                    "Upload cancelled",
                    detail=f"{self.session.bytes_transferred} bytes sent",
                )
            self.session.bytes_transferred += len(chunk)
            if progress_cb is not None:
                progress_cb(
                    UploadProgress(
                        transferred=self.session.bytes_transferred, total=length
                    )
                )
            yield chunk

    def _require(self, expected: UploadState) -> None:
        if self.session.state is not expected:
            raise UploadStateError(
                f"Upload session is {self.session.state}, expected {expected}"
            )


async def _iter_body(body: bytes | AsyncIterable[bytes]) -> AsyncIterator[bytes]:
    if isinstance(body, bytes | bytearray):
        for offset in range(0, len(body), _CHUNK_SIZE):
            yield bytes(body[offset : offset + _CHUNK_SIZE])
        return
    async for chunk in body:
        yield chunk
