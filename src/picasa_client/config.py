"""Client configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

from picasa_client.domain.auth import AuthConfig

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Client settings loaded from environment variables."""

    client_id: str
    client_secret: str
    redirect_uri: str
    request_timeout_seconds: float = 30
    upload_timeout_seconds: float = 300
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_prefix="PICASA_",
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    def auth_config(self) -> AuthConfig:
        """Return the OAuth client configuration."""
        return AuthConfig(
            client_id=self.client_id,
            client_secret=self.client_secret,
            redirect_uri=self.redirect_uri,
        )
