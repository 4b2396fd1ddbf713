"""Thin wrapper around the TMDb API to fetch movie metadata."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from cinecuration.core.config import get_settings


logger = logging.getLogger(__name__)


class TMDbError(Exception):
    """Base exception for TMDb-related failures."""


class TMDbAuthError(TMDbError):
    """Raised when TMDb rejects the configured API key."""


class TMDbNotFound(TMDbError):
    """Raised when TMDb has no record for the requested movie."""


class TMDbClient:
    """Simple TMDb HTTP client using API key auth."""

    def __init__(
        self,
        *,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
    ) -> None:
        settings = get_settings()
        self.api_key = api_key or settings.tmdb_api_key
        self.base_url = (base_url or settings.tmdb_base_url).rstrip("/")
        self.timeout = timeout or settings.tmdb_timeout

    def _request(self, method: str, path: str, *, params: dict[str, Any] | None = None) -> Any:
        if not self.api_key:
            raise TMDbError("TMDB_API_KEY is not configured")
        url = f"{self.base_url}{path}"
        query = {"api_key": self.api_key}
        if params:
            query.update({k: v for k, v in params.items() if v is not None})
        try:
            with httpx.Client(timeout=self.timeout) as client:
                response = client.request(method, url, params=query)
        except httpx.HTTPError as exc:
            raise TMDbError(f"TMDb request to {path} failed: {exc}") from exc

        if response.status_code == httpx.codes.UNAUTHORIZED:
            raise TMDbAuthError("TMDb rejected the API key")
        if response.status_code == httpx.codes.NOT_FOUND:
            raise TMDbNotFound(f"TMDb has no resource at {path}")
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise TMDbError(str(exc)) from exc
        try:
            return response.json()
        except ValueError as exc:
            raise TMDbError(f"TMDb returned invalid JSON for {path}") from exc

    def get_movie_detail(self, tmdb_id: int) -> dict[str, Any]:
        payload = self._request("GET", f"/movie/{tmdb_id}")
        logger.debug("TMDb details payload: %s", payload)
        return payload

    def get_credits(self, tmdb_id: int) -> dict[str, Any]:
        payload = self._request("GET", f"/movie/{tmdb_id}/credits")
        logger.debug("TMDb credits payload: %s", payload)
        return payload

    def search_movies(self, query: str) -> list[dict[str, Any]]:
        """Return the raw ``results`` of a TMDb movie search (first page)."""

        payload = self._request("GET", "/search/movie", params={"query": query})
        logger.debug("TMDb search payload: %s", payload)
        return list(payload.get("results") or [])
