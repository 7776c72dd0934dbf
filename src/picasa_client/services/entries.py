"""Mapping of loosely typed feed entries onto domain objects."""

from collections.abc import Mapping
from datetime import UTC, datetime

from pydantic import ValidationError

from picasa_client.adapters.feed_models import MediaContent, MediaGroup
from picasa_client.domain.albums import Album
from picasa_client.domain.photos import Photo
from picasa_client.domain.videos import Video, VideoContent, VideoSource
from picasa_client.errors import ParseError

# Remote field name -> output field name; a None target drops the field.
Schema = Mapping[str, str | None]

ALBUM_SCHEMA: Schema = {
    "gphoto$id": "id",
    "gphoto$name": "name",
    "gphoto$numphotos": "num_photos",
    "published": "published",
    "title": "title",
    "summary": "summary",
    "gphoto$location": "location",
    "gphoto$nickname": "nickname",
}

PHOTO_SCHEMA: Schema = {
    "gphoto$id": "id",
    "gphoto$albumid": "album_id",
    "gphoto$access": "access",
    "gphoto$width": "width",
    "gphoto$height": "height",
    "gphoto$size": "size",
    "gphoto$checksum": "checksum",
    "gphoto$timestamp": "timestamp",
    "gphoto$imageVersion": "image_version",
    "gphoto$commentingEnabled": "commenting_enabled",
    "gphoto$commentCount": "comment_count",
    "content": "content",
    "title": "title",
    "summary": "summary",
}

_TEXT_KEY = "$t"
_VIDEO_MEDIUM = "video"


def parse_entry(entry: Mapping[str, object], schema: Schema) -> dict[str, object]:
    """Map an entry through a schema, defaulting absent fields to ""."""
    result: dict[str, object] = {}
    for source_key, target_key in schema.items():
        if target_key:
            result[target_key] = _check_param(entry.get(source_key))
    return result


def parse_album(entry: Mapping[str, object]) -> Album:
    """Build an album from a feed entry."""
    return Album(**parse_entry(entry, ALBUM_SCHEMA))


def parse_photo(entry: Mapping[str, object]) -> Photo:
    """Build a photo from a feed entry."""
    return Photo(**parse_entry(entry, PHOTO_SCHEMA))


def parse_video(entry: Mapping[str, object]) -> Video:
    """Build a video from a feed entry, choosing its default source.

    The source whose height matches the entry's declared height wins; when
    none matches, the widest video source is used instead.
    """
    fields = parse_entry(entry, PHOTO_SCHEMA)
    try:
        group = MediaGroup.model_validate(entry.get("media$group"))
    except ValidationError as exc:
        raise ParseError(f"Invalid media group: {exc}") from exc

    videos = [item for item in group.content if item.medium == _VIDEO_MEDIUM]
    if not videos:
        raise ParseError("Entry has no video source")

    default = next(
        (item for item in videos if str(item.height) == str(fields["height"])), None
    )
    org_resolution_present = default is not None
    if default is None:
        default = sorted(videos, key=lambda item: item.width)[-1]

    content = fields["content"]
    thumb = content.get("src", "") if isinstance(content, Mapping) else ""
    return Video(
        **fields,
        captured_at=_parse_timestamp(fields["timestamp"]),
        sources=[_to_source(item) for item in videos],
        thumbnails=group.thumbnail,
        org_resolution_present=org_resolution_present,
        default_content=VideoContent(type=default.type, src=default.url, thumb=thumb),
    )


def _check_param(param: object) -> object:
    """Pass primitives through and unwrap `{"$t": value}` wrappers."""
    if param is None:
        return ""
    if _is_valid_type(param):
        return param
    if isinstance(param, Mapping) and _is_valid_type(param.get(_TEXT_KEY)):
        return param[_TEXT_KEY]
    return param


def _is_valid_type(value: object) -> bool:
    return isinstance(value, str | int | float) and not isinstance(value, bool)


def _parse_timestamp(value: object) -> datetime:
    """Parse a millisecond epoch timestamp."""
    try:
        millis = int(value)  # type: ignore[call-overload]
    except (TypeError, ValueError) as exc:
        raise ParseError(f"Invalid timestamp: {value!r}") from exc
    return datetime.fromtimestamp(millis / 1000, tz=UTC)


def _to_source(item: MediaContent) -> VideoSource:
    return VideoSource(
        url=item.url,
        type=item.type,
        medium=item.medium,
        height=item.height,
        width=item.width,
    )
