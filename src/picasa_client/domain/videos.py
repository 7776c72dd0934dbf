"""Domain models for videos."""

from dataclasses import dataclass
from datetime import datetime

from picasa_client.domain.photos import Photo


@dataclass(frozen=True)
class VideoSource:
    """One encoded variant of a video."""

    url: str
    type: str
    medium: str
    height: int
    width: int


@dataclass(frozen=True)
class VideoContent:
    """Default playable content chosen for a video."""

    type: str
    src: str
    thumb: str


@dataclass(frozen=True)
class Video(Photo):
    """Video entry with its encoded variants."""

    captured_at: datetime
    sources: list[VideoSource]
    thumbnails: list[dict[str, object]]
    org_resolution_present: bool
    default_content: VideoContent
