"""Domain models for albums."""

from dataclasses import dataclass

from picasa_client.domain.entries import FieldValue


@dataclass(frozen=True)
class Album:
    """Album entry returned by the feed."""

    id: FieldValue
    name: FieldValue
    num_photos: FieldValue
    published: FieldValue
    title: FieldValue
    summary: FieldValue
    location: FieldValue
    nickname: FieldValue


@dataclass(frozen=True)
class AlbumData:
    """Values for a new album."""

    title: str
    summary: str = ""
