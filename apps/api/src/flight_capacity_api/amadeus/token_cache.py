"""OAuth2 client-credentials token cache for the Amadeus Self-Service API.

The bearer token is the only state shared between requests.  It is fetched
via ``POST /v1/security/oauth2/token`` and reused until ``expires_in`` minus
a safety margin has elapsed.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import TYPE_CHECKING, Any

import httpx

from flight_capacity_api.errors import AuthError

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)

TOKEN_PATH = "/v1/security/oauth2/token"


class TokenCache:
    """Single cached credential, refreshed on demand.

    Refreshes are serialised by a lock so concurrent callers that find the
    token expired share one exchange.
    """

    def __init__(
        self,
        http: httpx.AsyncClient,
        client_id: str,
        client_secret: str,
        *,
        refresh_margin: int = 300,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._http = http
        self._client_id = client_id
        self._client_secret = client_secret
        self._refresh_margin = refresh_margin
        self._clock = clock
        self._access_token: str = ""
        self._expires_at: float = 0.0
        self._lock = asyncio.Lock()

    def _is_valid(self) -> bool:
        return bool(self._access_token) and self._clock() < self._expires_at

    async def get_token(self) -> str:
        """Return a bearer token, exchanging credentials when none is valid."""
        if self._is_valid():
            return self._access_token
        async with self._lock:
            # Another caller may have refreshed while we waited.
            if not self._is_valid():
                await self._fetch_token()
            return self._access_token

    def invalidate(self) -> None:
        """Drop the held credential so the next call re-authenticates."""
        self._access_token = ""
        self._expires_at = 0.0

    async def _fetch_token(self) -> None:
        if not self._client_id or not self._client_secret:
            raise AuthError(
                "AMADEUS_CLIENT_ID and AMADEUS_CLIENT_SECRET must be set in "
                "environment or .env"
            )

        try:
            resp = await self._http.post(
                TOKEN_PATH,
                data={
                    "grant_type": "client_credentials",
                    "client_id": self._client_id,
                    "client_secret": self._client_secret,
                },
                headers={"Content-Type": "application/x-www-form-urlencoded"},
            )
        except httpx.HTTPError as exc:
            logger.error("Amadeus token request failed: %s", exc)
            raise AuthError(f"Token request failed: {exc}") from exc

        if not resp.is_success:
            logger.error(
                "Amadeus token request rejected: %d %s", resp.status_code, resp.text
            )
            raise AuthError(
                f"Token request failed: {resp.status_code} - {resp.text}",
                status=resp.status_code,
                provider_body=resp.text,
            )

        token, expires_in = self._parse_body(resp)
        self._access_token = token
        self._expires_at = self._clock() + expires_in - self._refresh_margin
        logger.info("Amadeus OAuth2 token acquired (expires_in=%ds)", expires_in)

    @staticmethod
    def _parse_body(resp: httpx.Response) -> tuple[str, int]:
        try:
            body: Any = resp.json()
            token = body["access_token"]
            expires_in = int(body["expires_in"])
        except (ValueError, KeyError, TypeError) as exc:
            raise AuthError(
                "Malformed token response",
                status=resp.status_code,
                provider_body=resp.text,
            ) from exc
        if not isinstance(token, str) or not token:
            raise AuthError(
                "Malformed token response",
                status=resp.status_code,
                provider_body=resp.text,
            )
        return token, expires_in
