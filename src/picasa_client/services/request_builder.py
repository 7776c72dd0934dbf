"""Builders for outbound Picasa API requests."""

import uuid
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from urllib.parse import quote
from xml.sax.saxutils import escape

from picasa_client.adapters.http_transport import ApiRequest, RequestContent
from picasa_client.domain.albums import AlbumData
from picasa_client.domain.entries import ListOptions
from picasa_client.domain.photos import PhotoData
from picasa_client.domain.uploads import VideoUpload
from picasa_client.endpoints import (
    FEED_GDATA_VERSION,
    FETCH_AS_JSON,
    PICASA_ENTRY_URL,
    PICASA_FEED_URL,
    PICASA_UPLOAD_SESSION_URL,
    UPLOAD_GDATA_VERSION,
)

_ATOM_CONTENT_TYPE = "application/atom+xml"
_KIND_SCHEME = "http://schemas.google.com/g/2005#kind"

_ALBUM_ENTRY = """<entry xmlns='http://www.w3.org/2005/Atom'
    xmlns:media='http://search.yahoo.com/mrss/'
    xmlns:gphoto='http://schemas.google.com/photos/2007'>
  <title type='text'>{title}</title>
  <summary type='text'>{summary}</summary>
  <gphoto:access>private</gphoto:access>
  <category scheme='{scheme}'
    term='http://schemas.google.com/photos/2007#album'></category>
</entry>"""

_PHOTO_ENTRY = """<entry xmlns="http://www.w3.org/2005/Atom">
  <title>{title}</title>
  <summary>{summary}</summary>
  <category scheme="{scheme}" term="http://schemas.google.com/photos/2007#photo"/>
</entry>"""

_VIDEO_ENTRY = """<?xml version="1.0" encoding="UTF-8"?>
<entry xmlns="http://www.w3.org/2005/Atom"
    xmlns:gphoto="http://schemas.google.com/photos/2007">
  <category scheme="{scheme}" term="http://schemas.google.com/photos/2007#photo"/>
  <title>{title}</title>
  <summary>{summary}</summary>
  <gphoto:timestamp>{timestamp}</gphoto:timestamp>
</entry>"""


def _new_boundary() -> str:
    return uuid.uuid4().hex


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class RequestBuilder:
    """Build request descriptors for every Picasa operation."""

    boundary_factory: Callable[[], str] = field(default=_new_boundary)
    clock: Callable[[], datetime] = field(default=_utcnow)

    def list_albums(
        self, access_token: str, options: ListOptions | None = None
    ) -> ApiRequest:
        """Request the user's album feed."""
        return ApiRequest(
            method="GET",
            url=PICASA_FEED_URL,
            params=_feed_params(access_token, None, options),
            headers={"GData-Version": FEED_GDATA_VERSION},
        )

    def create_album(self, access_token: str, data: AlbumData) -> ApiRequest:
        """Request creation of a private album."""
        body = _ALBUM_ENTRY.format(
            title=escape(data.title),
            summary=escape(data.summary),
            scheme=_KIND_SCHEME,
        )
        return ApiRequest(
            method="POST",
            url=PICASA_FEED_URL,
            params=_base_params(access_token),
            headers={"Content-Type": _ATOM_CONTENT_TYPE},
            content=body,
        )

    def list_photos(
        self, access_token: str, options: ListOptions | None = None
    ) -> ApiRequest:
        """Request the photo feed, optionally scoped to one album."""
        return self._media_feed(access_token, options)

    def list_videos(
        self, access_token: str, options: ListOptions | None = None
    ) -> ApiRequest:
        """Request the media feed used for video listings."""
        return self._media_feed(access_token, options)

    def post_photo(
        self, access_token: str, album_id: str, data: PhotoData
    ) -> ApiRequest:
        """Request a photo upload as an Atom entry plus the binary."""
        metadata = _PHOTO_ENTRY.format(
            title=escape(data.title),
            summary=escape(data.summary),
            scheme=_KIND_SCHEME,
        )
        boundary = self.boundary_factory()
        body = _multipart_related(
            [
                (_ATOM_CONTENT_TYPE, metadata.encode("utf-8")),
                (data.content_type, data.binary),
            ],
            boundary,
        )
        return ApiRequest(
            method="POST",
            url=f"{PICASA_FEED_URL}/albumid/{album_id}",
            params=_base_params(access_token),
            headers={"Content-Type": f"multipart/related; boundary={boundary}"},
            content=body,
        )

    def delete_photo(
        self, access_token: str, album_id: str, photo_id: str
    ) -> ApiRequest:
        """Request unconditional deletion of a photo."""
        return ApiRequest(
            method="DELETE",
            url=f"{PICASA_ENTRY_URL}/albumid/{album_id}/photoid/{photo_id}",
            params=_base_params(access_token),
            headers={"If-Match": "*"},
        )

    def create_upload_session(
        self, access_token: str, album_id: str, upload: VideoUpload
    ) -> ApiRequest:
        """Request a resumable upload session for a new video."""
        timestamp = int(self.clock().timestamp() * 1000)
        body = _VIDEO_ENTRY.format(
            title=escape(upload.title),
            summary=escape(upload.summary),
            scheme=_KIND_SCHEME,
            timestamp=timestamp,
        )
        return ApiRequest(
            method="POST",
            url=f"{PICASA_UPLOAD_SESSION_URL}/albumid/{album_id}",
            headers={
                "Authorization": f"Bearer {access_token}",
                "Content-Type": f"{_ATOM_CONTENT_TYPE}; charset=utf-8",
                "X-Upload-Content-Length": str(upload.content_length),
                "X-Upload-Content-Type": upload.mime_type,
                "Slug": quote(upload.title),
                "GData-Version": UPLOAD_GDATA_VERSION,
            },
            content=body,
        )

    def upload_chunk(  # noqa: PLR0913
        self,
        location: str,
        body: RequestContent,
        start: int,
        length: int,
        total: int,
        timeout: float | None = None,
    ) -> ApiRequest:
        """Request transfer of one byte range to an upload session."""
        return ApiRequest(
            method="PUT",
            url=location,
            headers={
                "Content-Length": str(length),
                "Content-Range": f"bytes {start}-{start + length - 1}/{total}",
            },
            content=body,
            timeout=timeout,
        )

    def _media_feed(
        self, access_token: str, options: ListOptions | None
    ) -> ApiRequest:
        options = options or ListOptions()
        album_part = f"/albumid/{options.album_id}" if options.album_id else ""
        return ApiRequest(
            method="GET",
            url=f"{PICASA_FEED_URL}{album_part}",
            params=_feed_params(access_token, "photo", options),
            headers={"GData-Version": FEED_GDATA_VERSION},
        )


def _base_params(access_token: str) -> dict[str, str]:
    return {"alt": FETCH_AS_JSON, "access_token": access_token}


def _feed_params(
    access_token: str, kind: str | None, options: ListOptions | None
) -> dict[str, str]:
    """Query parameters for feed listings."""
    params = {"alt": FETCH_AS_JSON}
    if kind:
        params["kind"] = kind
    params["access_token"] = access_token
    if options and options.max_results:
        params["max-results"] = str(options.max_results)
    if options and options.start_index:
        params["start-index"] = str(options.start_index)
    return params


def _multipart_related(parts: list[tuple[str, bytes]], boundary: str) -> bytes:
    """Encode parts as a multipart/related body."""
    body = bytearray()
    for content_type, payload in parts:
        body += f"--{boundary}\r\nContent-Type: {content_type}\r\n\r\n".encode()
        body += payload
        body += b"\r\n"
    body += f"--{boundary}--\r\n".encode()
    return bytes(body)
