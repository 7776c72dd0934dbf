"""Shared test fixtures."""

from collections.abc import Callable
from dataclasses import dataclass, field

import httpx
import pytest

from picasa_client.adapters.http_transport import (
    ApiRequest,
    ApiResponse,
    HttpTransport,
    HttpxTransport,
)
from picasa_client.config import Settings
from picasa_client.domain.auth import AuthConfig
from picasa_client.errors import RequestError

PHOTO_ENTRY: dict[str, object] = {
    "id": {
        "$t": "https://picasaweb.google.com/data/entry/user/11111"
        "/albumid/1111/photoid/11111"
    },
    "published": {"$t": "2015-11-28T07:13:31.000Z"},
    "title": {"$t": "IMG_0327.JPG"},
    "summary": {"$t": ""},
    "content": {
        "type": "image/jpeg",
        "src": "https://lh3.googleusercontent.com/-1111111/1111/IMG_0327.JPG",
    },
    "gphoto$id": {"$t": "11111"},
    "gphoto$albumid": {"$t": "1111"},
    "gphoto$access": {"$t": "private"},
    "gphoto$width": {"$t": "3264"},
    "gphoto$height": {"$t": "2448"},
    "gphoto$size": {"$t": "1902383"},
    "gphoto$checksum": {"$t": ""},
    "gphoto$timestamp": {"$t": "1448694811000"},
    "gphoto$imageVersion": {"$t": "1"},
    "gphoto$commentingEnabled": {"$t": "true"},
    "gphoto$commentCount": {"$t": 0},
}

ALBUM_ENTRY: dict[str, object] = {
    "gphoto$id": {"$t": "6222222"},
    "gphoto$name": {"$t": "Holidays"},
    "gphoto$numphotos": {"$t": 12},
    "published": {"$t": "2016-01-01T10:00:00.000Z"},
    "title": {"$t": "Holidays"},
    "summary": {"$t": "Beach week"},
    "gphoto$location": {"$t": ""},
    "gphoto$nickname": {"$t": "Jamie"},
}


def video_entry(
    heights: list[int], widths: list[int], declared_height: str = "200"
) -> dict[str, object]:
    """Build a video entry with one video source per height/width pair."""
    content = [
        {
            "url": f"https://video.googleusercontent.com/v{height}x{width}",
            "type": "video/mpeg4",
            "medium": "video",
            "height": height,
            "width": width,
        }
        for height, width in zip(heights, widths, strict=True)
    ]
    content.insert(
        0,
        {
            "url": "https://lh3.googleusercontent.com/poster.jpg",
            "type": "image/jpeg",
            "medium": "image",
            "height": 720,
            "width": 1280,
        },
    )
    return {
        **PHOTO_ENTRY,
        "gphoto$height": {"$t": declared_height},
        "media$group": {
            "media$content": content,
            "media$thumbnail": [
                {"url": "https://lh3.googleusercontent.com/thumb.jpg", "width": 72}
            ],
        },
    }


@dataclass
class FakeTransport(HttpTransport):
    """Transport that records requests and replays queued outcomes."""

    outcomes: list[ApiResponse | RequestError] = field(default_factory=list)
    requests: list[ApiRequest] = field(default_factory=list)

    def queue_json(self, payload: str, status_code: int = 200) -> None:
        self.outcomes.append(
            ApiResponse(status_code=status_code, headers={}, content=payload.encode())
        )

    def queue_error(self, error: RequestError) -> None:
        self.outcomes.append(error)

    async def send(self, request: ApiRequest) -> ApiResponse:
        self.requests.append(request)
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, RequestError):
            raise outcome
        return outcome


def mock_transport(
    handler: Callable[[httpx.Request], httpx.Response],
) -> HttpxTransport:
    """Create an httpx transport served by a handler function."""
    async_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return HttpxTransport(http_client=async_client)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        client_id="apps.google.com",
        client_secret="client_secretABC",
        redirect_uri="http://localhost",
    )


@pytest.fixture
def auth_config() -> AuthConfig:
    return AuthConfig(
        client_id="apps.google.com",
        client_secret="client_secretABC",
        redirect_uri="http://localhost",
    )
