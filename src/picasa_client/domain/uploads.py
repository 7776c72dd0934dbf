"""Domain models for resumable uploads."""

from collections.abc import AsyncIterable, Callable
from dataclasses import dataclass
from enum import StrEnum


class UploadState(StrEnum):
    """Lifecycle of a resumable upload session."""

    UNINITIATED = "UNINITIATED"
    SESSION_CREATED = "SESSION_CREATED"
    TRANSFERRING = "TRANSFERRING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


@dataclass(frozen=True)
class UploadRange:
    """Chunk of a logical upload, as an offset and a byte count."""

    start: int
    length: int

    @property
    def end(self) -> int:
        """Inclusive offset of the last byte in the chunk."""
        return self.start + self.length - 1


@dataclass(frozen=True)
class VideoUpload:
    """Caller data for a resumable video upload.

    `body` holds only the bytes of `range`, or the whole payload when no
    range is given.
    """

    title: str
    content_length: int
    mime_type: str
    body: bytes | AsyncIterable[bytes]
    summary: str = ""
    range: UploadRange | None = None

    def resolved_range(self) -> UploadRange:
        """Return the chunk to send, defaulting to the whole payload."""
        if self.range is not None:
            return self.range
        return UploadRange(start=0, length=self.content_length)


@dataclass
class UploadSession:
    """State of one create-then-transfer handshake."""

    location: str | None = None
    start: int = 0
    end: int = -1
    total: int = 0
    bytes_transferred: int = 0
    state: UploadState = UploadState.UNINITIATED


@dataclass(frozen=True)
class UploadProgress:
    """Progress of the chunk currently being sent."""

    transferred: int
    total: int

    @property
    def percent(self) -> float:
        """Share of the chunk consumed so far, between 0 and 100."""
        if self.total <= 0:
            return 100.0
        return min(100.0, self.transferred * 100 / self.total)


ProgressCallback = Callable[[UploadProgress], None]


@dataclass(frozen=True)
class UploadResult:
    """Outcome of a successful transfer call."""

    status: str
    status_code: int
    bytes_transferred: int
    range_end: int
    total: int
    partial: bool

    @property
    def complete(self) -> bool:
        """True when the whole logical upload has been delivered."""
        return not self.partial and self.range_end + 1 >= self.total
