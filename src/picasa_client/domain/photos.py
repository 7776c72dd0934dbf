"""Domain models for photos."""

from dataclasses import dataclass

from picasa_client.domain.entries import FieldValue


@dataclass(frozen=True)
class Photo:
    """Photo entry returned by the feed."""

    id: FieldValue
    album_id: FieldValue
    access: FieldValue
    width: FieldValue
    height: FieldValue
    size: FieldValue
    checksum: FieldValue
    timestamp: FieldValue
    image_version: FieldValue
    commenting_enabled: FieldValue
    comment_count: FieldValue
    content: FieldValue
    title: FieldValue
    summary: FieldValue


@dataclass(frozen=True)
class PhotoData:
    """Metadata and bytes for a photo upload."""

    title: str
    content_type: str
    binary: bytes
    summary: str = ""
