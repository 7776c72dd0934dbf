"""Domain models for OAuth credentials."""

from dataclasses import dataclass


@dataclass(frozen=True)
class AuthConfig:
    """OAuth client registration values."""

    client_id: str
    client_secret: str
    redirect_uri: str


@dataclass(frozen=True)
class Credentials:
    """Tokens issued by the authorization server."""

    access_token: str
    refresh_token: str | None = None
