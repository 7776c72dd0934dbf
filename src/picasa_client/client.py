"""Picasa Web Albums API client."""

import asyncio
import logging
from dataclasses import dataclass, field

from pydantic import ValidationError

from picasa_client.adapters.drive_source import DriveFileSource
from picasa_client.adapters.feed_models import EntryResponse, FeedResponse
from picasa_client.adapters.http_transport import ApiResponse, HttpTransport
from picasa_client.domain.albums import Album, AlbumData
from picasa_client.domain.auth import AuthConfig, Credentials
from picasa_client.domain.entries import ListOptions
from picasa_client.domain.photos import Photo, PhotoData
from picasa_client.domain.uploads import (
    ProgressCallback,
    UploadRange,
    UploadResult,
    VideoUpload,
)
from picasa_client.domain.videos import Video
from picasa_client.errors import ParseError
from picasa_client.services.auth import AuthClient
from picasa_client.services.entries import parse_album, parse_photo, parse_video
from picasa_client.services.request_builder import RequestBuilder
from picasa_client.services.uploads import ResumableUploadSession

_logger = logging.getLogger(__name__)


@dataclass
class PicasaClient:
    """Album, photo and video operations plus OAuth helpers."""

    transport: HttpTransport
    builder: RequestBuilder = field(default_factory=RequestBuilder)
    upload_timeout: float | None = None

    @property
    def auth(self) -> AuthClient:
        """OAuth client sharing this client's transport."""
        return AuthClient(self.transport)

    async def get_albums(
        self, access_token: str, options: ListOptions | None = None
    ) -> list[Album]:
        """List the user's albums."""
        request = self.builder.list_albums(access_token, options)
        entries = _feed_entries(await self.transport.send(request))
        return [parse_album(entry) for entry in entries]

    async def create_album(self, access_token: str, data: AlbumData) -> Album:
        """Create a private album."""
        request = self.builder.create_album(access_token, data)
        return parse_album(_single_entry(await self.transport.send(request)))

    async def get_photos(
        self, access_token: str, options: ListOptions | None = None
    ) -> list[Photo]:
        """List photos, optionally within one album."""
        request = self.builder.list_photos(access_token, options)
        entries = _feed_entries(await self.transport.send(request))
        return [parse_photo(entry) for entry in entries]

    async def post_photo(
        self, access_token: str, album_id: str, data: PhotoData
    ) -> Photo:
        """Upload a photo into an album."""
        request = self.builder.post_photo(access_token, album_id, data)
        return parse_photo(_single_entry(await self.transport.send(request)))

    async def delete_photo(
        self, access_token: str, album_id: str, photo_id: str
    ) -> None:
        """Delete a photo regardless of its current version."""
        request = self.builder.delete_photo(access_token, album_id, photo_id)
        await self.transport.send(request)

    async def get_videos(
        self, access_token: str, options: ListOptions | None = None
    ) -> list[Video]:
        """List videos with their default source resolved.

        Entries that cannot be read as videos are logged and left out.
        """
        request = self.builder.list_videos(access_token, options)
        videos: list[Video] = []
        for entry in _feed_entries(await self.transport.send(request)):
            try:
                videos.append(parse_video(entry))
            except ParseError as exc:
                _logger.warning("Skipping video entry: %s", exc)
        return videos

    async def create_resumable_video(
        self, access_token: str, album_id: str, upload: VideoUpload
    ) -> str:
        """Create an upload session and return its location."""
        session = self._new_session()
        return await session.create(access_token, album_id, upload)

    async def post_video(
        self,
        access_token: str,
        album_id: str,
        upload: VideoUpload,
        progress_cb: ProgressCallback | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> UploadResult:
        """Create an upload session and send the video to it."""
        session = self._new_session()
        return await session.upload(
            access_token, album_id, upload, progress_cb, cancel_event
        )

    async def resume_upload(
        self,
        location: str,
        upload: VideoUpload,
        progress_cb: ProgressCallback | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> UploadResult:
        """Send the video, or a range of it, to an existing session."""
        session = ResumableUploadSession.from_location(
            self.transport,
            location,
            builder=self.builder,
            upload_timeout=self.upload_timeout,
        )
        return await session.transfer(upload, progress_cb, cancel_event)

    async def upload_drive_file(  # noqa: PLR0913
        self,
        access_token: str,
        album_id: str,
        source: DriveFileSource,
        *,
        drive_access_token: str,
        file_id: str,
        upload_range: UploadRange,
        total_size: int,
        mime_type: str,
        title: str,
        summary: str = "",
        progress_cb: ProgressCallback | None = None,
    ) -> UploadResult:
        """Stream a byte range of a Drive file into a new video upload."""
        upload = VideoUpload(
            title=title,
            summary=summary,
            content_length=total_size,
            mime_type=mime_type,
            body=source.iter_range(drive_access_token, file_id, upload_range),
            range=upload_range,
        )
        return await self.post_video(access_token, album_id, upload, progress_cb)

    def get_auth_url(self, config: AuthConfig) -> str:
        """Return the OAuth consent URL."""
        return self.auth.build_authorization_url(config)

    async def get_access_token(self, config: AuthConfig, code: str) -> Credentials:
        """Exchange an authorization code for tokens."""
        return await self.auth.exchange_code(config, code)

    async def renew_access_token(self, config: AuthConfig, refresh_token: str) -> str:
        """Return a fresh access token."""
        return await self.auth.refresh_access_token(config, refresh_token)

    def _new_session(self) -> ResumableUploadSession:
        return ResumableUploadSession(
            transport=self.transport,
            builder=self.builder,
            upload_timeout=self.upload_timeout,
        )


def _feed_entries(response: ApiResponse) -> list[dict[str, object]]:
    try:
        return FeedResponse.model_validate(response.json()).feed.entry
    except ValidationError as exc:
        raise ParseError(f"Unexpected feed body: {exc}") from exc


def _single_entry(response: ApiResponse) -> dict[str, object]:
    try:
        return EntryResponse.model_validate(response.json()).entry
    except ValidationError as exc:
        raise ParseError(f"Unexpected entry body: {exc}") from exc
