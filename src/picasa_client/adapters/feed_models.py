"""Pydantic models for Picasa and OAuth response payloads."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Feed(BaseModel):
    """Feed body; the service omits `entry` when the feed is empty."""

    entry: list[dict[str, Any]] = Field(default_factory=list)


class FeedResponse(BaseModel):
    """Response wrapping a feed of entries."""

    feed: Feed


class EntryResponse(BaseModel):
    """Response wrapping a single entry."""

    entry: dict[str, Any]


class TokenResponse(BaseModel):
    """OAuth token endpoint payload."""

    access_token: str
    refresh_token: str | None = None
    token_type: str | None = None
    expires_in: int | None = None


class MediaContent(BaseModel):
    """One `media$content` item of an entry's media group."""

    url: str
    type: str = ""
    medium: str = ""
    height: int = 0
    width: int = 0


class MediaGroup(BaseModel):
    """The `media$group` element of a photo or video entry."""

    model_config = ConfigDict(populate_by_name=True)

    content: list[MediaContent] = Field(alias="media$content")
    thumbnail: list[dict[str, Any]] = Field(
        default_factory=list, alias="media$thumbnail"
    )
