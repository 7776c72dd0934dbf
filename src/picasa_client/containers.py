"""Dependency container wiring for the client."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from picasa_client.adapters.drive_source import HttpxDriveFileSource
from picasa_client.adapters.http_transport import HttpxTransport
from picasa_client.client import PicasaClient
from picasa_client.config import Settings
from picasa_client.domain.auth import AuthConfig


@dataclass
class ClientContainer:
    """Holds the client and its shared resources."""

    settings: Settings
    auth_config: AuthConfig
    transport: HttpxTransport
    drive_source: HttpxDriveFileSource
    client: PicasaClient
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> ClientContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    transport = HttpxTransport.create(timeout=resolved_settings.request_timeout_seconds)
    drive_source = HttpxDriveFileSource.create(
        timeout=resolved_settings.upload_timeout_seconds
    )
    client = PicasaClient(
        transport=transport,
        upload_timeout=resolved_settings.upload_timeout_seconds,
    )

    async def close_resources() -> None:
        await transport.close()
        await drive_source.close()

    return ClientContainer(
        settings=resolved_settings,
        auth_config=resolved_settings.auth_config(),
        transport=transport,
        drive_source=drive_source,
        client=client,
        close_resources=close_resources,
    )
