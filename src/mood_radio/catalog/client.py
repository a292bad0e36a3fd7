"""Catalog search/recommendation client.

Defines the CatalogClient protocol consumed by the recommendation pipeline
and SpotifyCatalogClient, an implementation over the Spotify Web API using
``httpx.AsyncClient``.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Optional, Protocol, Sequence, runtime_checkable

import httpx

from ..config import (
    HTTP_TIMEOUT,
    SEARCH_LIMIT,
    SEARCH_MARKET,
    SEED_TRACK_LIMIT,
    SPOTIFY_ACCOUNTS_BASE,
    SPOTIFY_API_BASE,
    SPOTIFY_SCOPES,
    get_spotify_redirect_uri,
)
from ..core.exceptions import AuthError, NetworkError
from ..core.models import MoodParams, Recommendation, Track

logger = logging.getLogger(__name__)

TOKEN_URL = f"{SPOTIFY_ACCOUNTS_BASE}/api/token"
AUTHORIZE_URL = f"{SPOTIFY_ACCOUNTS_BASE}/authorize"

# Refresh client-credentials tokens this many seconds before they expire
TOKEN_EXPIRY_MARGIN = 60.0

# Spotify accepts at most 100 URIs per add-tracks request
PLAYLIST_BATCH_SIZE = 100


@runtime_checkable
class CatalogClient(Protocol):
    """Protocol for the catalog collaborator used by the pipeline.

    ``search_tracks`` returns an empty list when nothing matches and raises
    AuthError for rejected credentials or NetworkError for anything else.
    """

    async def search_tracks(self, query: str) -> list[Track]:
        """Search the catalog for tracks matching ``query``."""
        ...

    async def get_recommendations(
        self, seed_track_ids: Sequence[str], mood_params: MoodParams
    ) -> list[Track]:
        """Tracks similar to the seeds, steered by target audio features."""
        ...


class SpotifyCatalogClient:
    """Spotify Web API client.

    Uses an explicit user access token when given. Otherwise, when client
    credentials are available, fetches an app token with the
    client-credentials grant and caches it until shortly before expiry.

    Args:
        access_token: User access token (e.g. from the OAuth login flow).
        client_credentials: ``(client_id, client_secret)`` pair.
        http_client: Pre-configured AsyncClient; one is created otherwise.
        market: Market code sent with searches.
        limit: Maximum tracks per search or recommendation call.
        timeout: Request timeout in seconds for the owned client.
        redirect_uri: OAuth redirect URI used by :meth:`login_url`.
        clock: Callable returning wall-clock seconds, for token expiry.
    """

    def __init__(
        self,
        access_token: Optional[str] = None,
        client_credentials: Optional[tuple[str, str]] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        market: str = SEARCH_MARKET,
        limit: int = SEARCH_LIMIT,
        timeout: float = HTTP_TIMEOUT,
        redirect_uri: Optional[str] = None,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        self._access_token = access_token
        self._client_credentials = client_credentials
        self._owns_http = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=timeout)
        self.market = market
        self.limit = limit
        self.redirect_uri = redirect_uri or get_spotify_redirect_uri()
        self._clock = clock or time.time
        self._app_token: Optional[str] = None
        self._app_token_expires_at = 0.0

    async def __aenter__(self) -> "SpotifyCatalogClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_http:
            await self._http.aclose()

    # ------------------------------------------------------------------
    # Authentication
    # ------------------------------------------------------------------

    def login_url(self) -> str:
        """Authorization URL the user visits to grant access."""
        params = {
            "response_type": "code",
            "redirect_uri": self.redirect_uri,
            "scope": " ".join(SPOTIFY_SCOPES),
            "show_dialog": "true",
        }
        if self._client_credentials:
            params["client_id"] = self._client_credentials[0]
        return str(httpx.URL(AUTHORIZE_URL, params=params))

    def clear_token(self) -> None:
        """Forget every cached token so the next request re-authenticates."""
        self._access_token = None
        self._app_token = None
        self._app_token_expires_at = 0.0

    async def _fetch_app_token(self) -> str:
        client_id, client_secret = self._client_credentials
        try:
            response = await self._http.post(
                TOKEN_URL,
                data={"grant_type": "client_credentials"},
                auth=(client_id, client_secret),
                headers={"Accept": "application/json"},
            )
        except httpx.HTTPError as e:
            raise NetworkError(f"Token request failed: {e}") from e

        if response.status_code in (400, 401, 403):
            raise AuthError("Spotify rejected the client credentials", self.login_url())
        if response.is_error:
            raise NetworkError(f"Token request failed with HTTP {response.status_code}")

        try:
            data = response.json()
            self._app_token = data["access_token"]
            self._app_token_expires_at = self._clock() + float(data.get("expires_in", 3600))
        except (ValueError, TypeError, KeyError) as e:
            raise NetworkError(f"Malformed token response: {e}") from e
        logger.debug("Fetched client-credentials token")
        return self._app_token

    async def get_access_token(self) -> str:
        """Return a usable access token.

        Raises:
            AuthError: No token and no client credentials are available.
        """
        if self._access_token:
            return self._access_token
        if self._client_credentials is None:
            raise AuthError("Spotify credentials are not configured", self.login_url())
        if self._app_token and self._clock() < self._app_token_expires_at - TOKEN_EXPIRY_MARGIN:
            return self._app_token
        return await self._fetch_app_token()

    # ------------------------------------------------------------------
    # Requests
    # ------------------------------------------------------------------

    async def _request(self, method: str, path: str, **kwargs: Any) -> dict[str, Any]:
        token = await self.get_access_token()
        headers = {"Authorization": f"Bearer {token}", "Accept": "application/json"}
        try:
            response = await self._http.request(
                method, f"{SPOTIFY_API_BASE}{path}", headers=headers, **kwargs
            )
        except httpx.HTTPError as e:
            raise NetworkError(f"{method} {path} failed: {e}") from e

        if response.status_code in (401, 403):
            self.clear_token()
            raise AuthError(
                f"Spotify returned HTTP {response.status_code} for {path}", self.login_url()
            )
        if response.is_error:
            raise NetworkError(f"{method} {path} failed with HTTP {response.status_code}")
        if not response.content:
            return {}
        try:
            data = response.json()
        except ValueError as e:
            raise NetworkError(f"{method} {path} returned a non-JSON body") from e
        if not isinstance(data, dict):
            raise NetworkError(f"{method} {path} returned an unexpected payload")
        return data

    async def search_tracks(self, query: str) -> list[Track]:
        """Search for tracks; an empty result is an empty list."""
        logger.debug("Searching catalog: %s", query)
        data = await self._request(
            "GET",
            "/search",
            params={
                "q": query,
                "type": "track",
                "limit": self.limit,
                "market": self.market,
                "include_external": "audio",
            },
        )
        items = (data.get("tracks") or {}).get("items") or []
        return [Track.from_spotify(item) for item in items if item and item.get("id")]

    async def get_recommendations(
        self, seed_track_ids: Sequence[str], mood_params: MoodParams
    ) -> list[Track]:
        """Seed-track recommendations targeting the given audio features."""
        seeds = [track_id for track_id in seed_track_ids if track_id][:SEED_TRACK_LIMIT]
        if not seeds:
            return []
        data = await self._request(
            "GET",
            "/recommendations",
            params={
                "seed_tracks": ",".join(seeds),
                "limit": self.limit,
                "market": self.market,
                "target_energy": mood_params.energy,
                "target_valence": mood_params.valence,
                "target_danceability": mood_params.danceability,
            },
        )
        tracks = data.get("tracks") or []
        return [Track.from_spotify(item) for item in tracks if item and item.get("id")]

    # ------------------------------------------------------------------
    # Playlists
    # ------------------------------------------------------------------

    async def create_playlist(self, name: str, description: str = "", public: bool = False) -> str:
        """Create a playlist for the logged-in user and return its id."""
        user = await self._request("GET", "/me")
        playlist = await self._request(
            "POST",
            f"/users/{user['id']}/playlists",
            json={"name": name, "description": description, "public": public},
        )
        logger.info("Created playlist %s (%s)", name, playlist["id"])
        return playlist["id"]

    async def add_tracks_to_playlist(self, playlist_id: str, uris: Sequence[str]) -> None:
        """Append track URIs to a playlist in batches of 100."""
        uris = list(uris)
        for start in range(0, len(uris), PLAYLIST_BATCH_SIZE):
            await self._request(
                "POST",
                f"/playlists/{playlist_id}/tracks",
                json={"uris": uris[start:start + PLAYLIST_BATCH_SIZE]},
            )

    async def create_playlist_from_recommendations(
        self,
        recommendations: Sequence[Recommendation],
        name: str,
        description: Optional[str] = None,
    ) -> str:
        """Create a playlist holding the recommended tracks."""
        description = description or f"Mood Radio playlist with {len(recommendations)} tracks"
        playlist_id = await self.create_playlist(name, description)
        await self.add_tracks_to_playlist(playlist_id, [rec.uri for rec in recommendations])
        return playlist_id
