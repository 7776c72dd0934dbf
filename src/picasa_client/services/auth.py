"""OAuth2 authorization-code flow against Google's token endpoints."""

import logging
from dataclasses import dataclass
from urllib.parse import urlencode

from pydantic import ValidationError

from picasa_client.adapters.feed_models import TokenResponse
from picasa_client.adapters.http_transport import ApiRequest, HttpTransport
from picasa_client.domain.auth import AuthConfig, Credentials
from picasa_client.endpoints import (
    GOOGLE_AUTH_ENDPOINT,
    GOOGLE_REFRESH_URL,
    GOOGLE_TOKEN_URL,
    PICASA_SCOPE,
)
from picasa_client.errors import AuthError, ParseError, RequestError

_logger = logging.getLogger(__name__)


def build_authorization_url(config: AuthConfig) -> str:
    """Return the consent URL requesting offline access to Picasa."""
    params = {
        "access_type": "offline",
        "scope": PICASA_SCOPE,
        "response_type": "code",
        "client_id": config.client_id,
        "redirect_uri": config.redirect_uri,
    }
    return f"{GOOGLE_AUTH_ENDPOINT}?{urlencode(params)}"


@dataclass
class AuthClient:
    """Exchanges authorization codes and refresh tokens."""

    transport: HttpTransport

    def build_authorization_url(self, config: AuthConfig) -> str:
        """Return the consent URL for the configured client."""
        return build_authorization_url(config)

    async def exchange_code(self, config: AuthConfig, code: str) -> Credentials:
        """Exchange an authorization code for access and refresh tokens."""
        params = {
            "grant_type": "authorization_code",
            "code": code,
            "redirect_uri": config.redirect_uri,
            "client_id": config.client_id,
            "client_secret": config.client_secret,
        }
        token = await self._request_token(GOOGLE_TOKEN_URL, params, action="exchange")
        return Credentials(
            access_token=token.access_token, refresh_token=token.refresh_token
        )

    async def refresh_access_token(self, config: AuthConfig, refresh_token: str) -> str:
        """Obtain a new access token from a refresh token."""
        params = {
            "grant_type": "refresh_token",
            "client_id": config.client_id,
            "client_secret": config.client_secret,
            "refresh_token": refresh_token,
        }
        token = await self._request_token(GOOGLE_REFRESH_URL, params, action="refresh")
        return token.access_token

    async def _request_token(
        self, url: str, params: dict[str, str], *, action: str
    ) -> TokenResponse:
        try:
            response = await self.transport.send(
                ApiRequest(method="POST", url=url, params=params)
            )
            return TokenResponse.model_validate(response.json())
        except RequestError as exc:
            _logger.warning("Token %s failed: %s", action, type(exc).__name__)
            raise AuthError(str(exc)) from exc
        except (ParseError, ValidationError) as exc:
            raise AuthError(f"Malformed token response: {exc}") from exc
