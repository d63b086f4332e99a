"""Recommendation engine API client."""

from dataclasses import dataclass
from typing import Protocol

import httpx

_RECOMMENDATION_TIMEOUT = 10
_TRACKING_TIMEOUT = 5
_STATS_TIMEOUT = 20


class RecommendationApiClient(Protocol):
    """Interface for the external recommendation engine."""

    async def get_similar(self, diet_id: str, count: int) -> object:
        """Return the raw similar-recipes response."""

    async def get_trending(self, count: int) -> object:
        """Return the raw trending-recipes response."""

    async def get_popular(self) -> object:
        """Return the raw legacy popular-recipes response."""

    async def get_personalized(self, payload: dict[str, object]) -> object:
        """Return the raw personalized-recommendations response."""

    async def recommend(self, strategy: str, payload: dict[str, object]) -> object:
        """Call a recommendation strategy endpoint with a raw body."""

    async def get_categories(self) -> object:
        """Return recommendation categories."""

    async def get_stats(self) -> object:
        """Return engine statistics."""

    async def track_view(self, user_id: str, diet_id: str) -> None:
        """Record that a user viewed a diet."""

    async def track_like(self, user_id: str, diet_id: str) -> None:
        """Record that a user liked a diet."""

    async def track_add_to_folder(
        self, user_id: str, diet_id: str, folder_name: str
    ) -> None:
        """Record that a user filed a diet into a folder."""


@dataclass
class HttpxRecommendationApiClient(RecommendationApiClient):
    """HTTPX-backed recommendation engine client."""

    base_url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, base_url: str) -> "HttpxRecommendationApiClient":
        """Create an engine client with a managed httpx session."""
        return cls(
            base_url=base_url.rstrip("/"),
            http_client=httpx.AsyncClient(headers={"Accept": "application/json"}),
        )

    async def _get(
        self,
        path: str,
        params: dict[str, object] | None = None,
        timeout: float = _RECOMMENDATION_TIMEOUT,
    ) -> object:
        response = await self.http_client.get(
            f"{self.base_url}{path}", params=params, timeout=timeout
        )
        response.raise_for_status()
        return response.json()

    async def _post(
        self,
        path: str,
        payload: object,
        timeout: float = _RECOMMENDATION_TIMEOUT,
    ) -> httpx.Response:
        response = await self.http_client.post(
            f"{self.base_url}{path}", json=payload, timeout=timeout
        )
        response.raise_for_status()
        return response

    async def get_similar(self, diet_id: str, count: int) -> object:
        """Fetch recipes similar to a diet."""
        return await self._get(
            f"/recommendations/similar/{diet_id}",
            params={"num_recommendations": count},
        )

    async def get_trending(self, count: int) -> object:
        """Fetch trending recipes."""
        return await self._get(
            "/recommendations/trending", params={"num_recommendations": count}
        )

    async def get_popular(self) -> object:
        """Fetch popular recipes from the legacy endpoint."""
        return await self._get("/recommend/popular")

    async def get_personalized(self, payload: dict[str, object]) -> object:
        """Fetch personalized recommendations."""
        response = await self._post("/recommendations/personalized", payload)
        return response.json()

    async def recommend(self, strategy: str, payload: dict[str, object]) -> object:
        """Proxy a strategy-specific recommendation call."""
        response = await self._post(f"/recommendations/{strategy}", payload)
        return response.json()

    async def get_categories(self) -> object:
        """Fetch recommendation categories."""
        return await self._get("/recommendations/categories")

    async def get_stats(self) -> object:
        """Fetch engine statistics."""
        return await self._get("/recommendations/stats", timeout=_STATS_TIMEOUT)

    async def track_view(self, user_id: str, diet_id: str) -> None:
        """Post a view event."""
        await self._post(
            "/user/view",
            {"user_id": user_id, "diet_id": diet_id},
            timeout=_TRACKING_TIMEOUT,
        )

    async def track_like(self, user_id: str, diet_id: str) -> None:
        """Post a like event."""
        await self._post(
            "/user/like",
            {"user_id": user_id, "diet_id": diet_id},
            timeout=_TRACKING_TIMEOUT,
        )

    async def track_add_to_folder(
        self, user_id: str, diet_id: str, folder_name: str
    ) -> None:
        """Post an add-to-folder event."""
        await self._post(
            "/user/add-to-folder",
            {"user_id": user_id, "diet_id": diet_id, "folder_name": folder_name},
            timeout=_TRACKING_TIMEOUT,
        )

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
