"""Tests for the resumable upload session."""

import asyncio
from collections.abc import AsyncIterator

import httpx
import pytest

from picasa_client.domain.uploads import (
    UploadProgress,
    UploadRange,
    UploadState,
    VideoUpload,
)
from picasa_client.errors import (
    RemoteApiError,
    TransportError,
    UploadCancelledError,
    UploadError,
    UploadStateError,
)
from picasa_client.services.uploads import ResumableUploadSession
from tests.conftest import FakeTransport, mock_transport

LOCATION = "https://photos.googleapis.com/upload/session-1"


def _upload(body: bytes = b"v" * 1000, **kwargs: object) -> VideoUpload:
    return VideoUpload(
        title="clip",
        summary="GP_1",
        content_length=kwargs.pop("content_length", len(body)),
        mime_type="video/mp4",
        body=body,
        **kwargs,
    )


async def _chunks(*parts: bytes) -> AsyncIterator[bytes]:
    for part in parts:
        yield part


def test_upload_creates_session_then_transfers() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        if request.method == "POST":
            return httpx.Response(200, headers={"Location": LOCATION})
        return httpx.Response(201, json={"entry": {}})

    session = ResumableUploadSession(mock_transport(handler))

    result = asyncio.run(session.upload("token", "1111", _upload()))

    assert [request.method for request in seen] == ["POST", "PUT"]
    assert str(seen[1].url) == LOCATION
    assert seen[1].headers["Content-Range"] == "bytes 0-999/1000"
    assert seen[1].headers["Content-Length"] == "1000"
    assert seen[1].content == b"v" * 1000
    assert result.status == "OK"
    assert result.complete is True
    assert session.state is UploadState.COMPLETED


def test_partial_accept_status_resolves() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(308, headers={"Range": "bytes=0-499"})

    session = ResumableUploadSession.from_location(mock_transport(handler), LOCATION)
    upload = _upload(
        b"v" * 500, content_length=1000, range=UploadRange(start=0, length=500)
    )

    result = asyncio.run(session.transfer(upload))

    assert result.status == "OK"
    assert result.partial is True
    assert result.complete is False
    assert result.bytes_transferred == 500
    assert session.state is UploadState.COMPLETED


def test_final_range_chunk_sets_content_range() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200)

    session = ResumableUploadSession.from_location(mock_transport(handler), LOCATION)
    upload = _upload(
        b"v" * 500, content_length=1000, range=UploadRange(start=500, length=500)
    )

    result = asyncio.run(session.transfer(upload))

    assert seen[0].headers["Content-Range"] == "bytes 500-999/1000"
    assert result.complete is True


def test_transfer_error_wraps_original_failure() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, text="Invalid range")

    session = ResumableUploadSession.from_location(mock_transport(handler), LOCATION)

    with pytest.raises(UploadError) as exc_info:
        asyncio.run(session.transfer(_upload()))

    assert exc_info.value.status_code == 400
    assert exc_info.value.detail == "Invalid range"
    assert isinstance(exc_info.value.__cause__, RemoteApiError)
    assert session.state is UploadState.FAILED


def test_transport_failure_during_transfer_fails_session() -> None:
    transport = FakeTransport()
    transport.queue_error(TransportError("connection reset"))
    session = ResumableUploadSession.from_location(transport, LOCATION)

    with pytest.raises(UploadError, match="Upload transfer failed"):
        asyncio.run(session.transfer(_upload()))

    assert session.state is UploadState.FAILED


def test_create_without_location_fails() -> None:
    transport = FakeTransport()
    transport.queue_json("")
    session = ResumableUploadSession(transport)

    with pytest.raises(UploadError, match="no location"):
        asyncio.run(session.create("token", "1111", _upload()))

    assert session.state is UploadState.FAILED


def test_create_error_status_fails_without_retry() -> None:
    transport = FakeTransport()
    transport.queue_error(RemoteApiError(403, "Forbidden"))
    session = ResumableUploadSession(transport)

    with pytest.raises(UploadError) as exc_info:
        asyncio.run(session.create("token", "1111", _upload()))

    assert exc_info.value.status_code == 403
    assert len(transport.requests) == 1


def test_progress_counts_streamed_bytes() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200)

    events: list[UploadProgress] = []
    session = ResumableUploadSession.from_location(mock_transport(handler), LOCATION)
    upload = VideoUpload(
        title="clip",
        content_length=6,
        mime_type="video/mp4",
        body=_chunks(b"ab", b"cd", b"ef"),
    )

    result = asyncio.run(session.transfer(upload, progress_cb=events.append))

    assert [event.transferred for event in events] == [2, 4, 6]
    assert events[-1].percent == 100.0
    assert result.bytes_transferred == 6


def test_cancel_event_stops_transfer() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200)

    cancel_event = asyncio.Event()
    cancel_event.set()
    session = ResumableUploadSession.from_location(mock_transport(handler), LOCATION)

    with pytest.raises(UploadCancelledError):
        asyncio.run(session.transfer(_upload(), cancel_event=cancel_event))

    assert session.state is UploadState.FAILED


def test_transfer_before_create_is_rejected() -> None:
    session = ResumableUploadSession(FakeTransport())

    with pytest.raises(UploadStateError):
        asyncio.run(session.transfer(_upload()))


def test_session_cannot_be_reused_after_completion() -> None:
    transport = FakeTransport()
    transport.queue_json("")
    session = ResumableUploadSession.from_location(transport, LOCATION)
    asyncio.run(session.transfer(_upload()))

    with pytest.raises(UploadStateError):
        asyncio.run(session.transfer(_upload()))


def test_body_stream_failure_is_wrapped_and_fails_session() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200)

    async def broken_body() -> AsyncIterator[bytes]:
        yield b"ab"
        raise OSError("disk read failed")

    session = ResumableUploadSession.from_location(mock_transport(handler), LOCATION)
    upload = VideoUpload(
        title="clip", content_length=4, mime_type="video/mp4", body=broken_body()
    )

    with pytest.raises(UploadError, match="Upload transfer failed") as exc_info:
        asyncio.run(session.transfer(upload))

    assert isinstance(exc_info.value.__cause__, OSError)
    assert exc_info.value.detail == "disk read failed"
    assert session.state is UploadState.FAILED


def test_progress_callback_failure_is_wrapped_and_fails_session() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200)

    def progress_cb(progress: UploadProgress) -> None:
        raise ValueError("callback broke")

    session = ResumableUploadSession.from_location(mock_transport(handler), LOCATION)

    with pytest.raises(UploadError) as exc_info:
        asyncio.run(session.transfer(_upload(), progress_cb=progress_cb))

    assert isinstance(exc_info.value.__cause__, ValueError)
    assert session.state is UploadState.FAILED


def test_create_transport_failure_fails_session() -> None:
    transport = FakeTransport()
    transport.queue_error(TransportError("name resolution failed"))
    session = ResumableUploadSession(transport)

    with pytest.raises(UploadError, match="creation failed") as exc_info:
        asyncio.run(session.create("token", "1111", _upload()))

    assert exc_info.value.detail == "name resolution failed"
    assert isinstance(exc_info.value.__cause__, TransportError)
    assert session.state is UploadState.FAILED


def test_bytes_body_must_match_range_length() -> None:
    transport = FakeTransport()
    session = ResumableUploadSession.from_location(transport, LOCATION)
    upload = _upload(
        b"v" * 1000, content_length=1000, range=UploadRange(start=0, length=500)
    )

    with pytest.raises(UploadError, match="declared range"):
        asyncio.run(session.transfer(upload))

    assert transport.requests == []
    assert session.state is UploadState.SESSION_CREATED
