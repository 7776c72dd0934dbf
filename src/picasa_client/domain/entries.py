"""Shared types for mapped feed entries."""

from dataclasses import dataclass

# Mapped values are passed through as the feed returns them.
FieldValue = str | int | float | dict[str, object] | list[object]


@dataclass(frozen=True)
class ListOptions:
    """Pagination and scoping options for feed queries."""

    max_results: int | None = None
    start_index: int | None = None
    album_id: str | None = None
