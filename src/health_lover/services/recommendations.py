"""Recommendation lookups with caching and local catalog fallbacks."""

import asyncio
import logging
from dataclasses import dataclass, field

from health_lover.adapters.recipe_client import RecipeCatalogClient
from health_lover.adapters.recommendation_client import RecommendationApiClient
from health_lover.domain.diets import Diet
from health_lover.domain.recommendations import PopularRequest, SimilarRequest
from health_lover.services.cache import Cache
from health_lover.services.mapping import derive_tags, recommendation_to_diet, to_diet
from health_lover.services.profiles import ProfileService

ANONYMOUS_USER_ID = "default_user"
STRATEGIES = frozenset({"content-based", "collaborative", "hybrid", "personalized"})

_logger = logging.getLogger(__name__)


class MalformedResponseError(ValueError):
    """Raised when a successful engine response lacks the expected shape."""


class UnknownStrategyError(ValueError):
    """Raised for recommendation strategies the engine does not offer."""


def response_records(payload: object, field_name: str) -> list[dict[str, object]]:
    """Return the recommendation records under ``field_name``."""
    if not isinstance(payload, dict) or not isinstance(payload.get(field_name), list):
        raise MalformedResponseError(f"Response is missing '{field_name}'")
    return [record for record in payload[field_name] if isinstance(record, dict)]


@dataclass
class RecommendationService:
    """Similar and popular diets, falling back to catalog heuristics."""

    api_client: RecommendationApiClient
    catalog_client: RecipeCatalogClient
    cache: Cache
    profiles: ProfileService | None = None
    _background_tasks: set[asyncio.Task[None]] = field(
        default_factory=set, init=False, repr=False
    )

    async def get_similar(self, diet_id: str, count: int = 4) -> list[Diet]:
        """Return diets similar to ``diet_id``.

        Remote failures fall back to ranking the catalog by tag overlap. The
        result is cached either way; a failing catalog fetch propagates.
        """
        request = SimilarRequest(diet_id=diet_id, count=count)
        cached = self.cache.get(request)
        if isinstance(cached, list):
            return cached

        try:
            payload = await self.api_client.get_similar(diet_id, count)
            records = response_records(payload, "similar_recipes")
        except Exception as exc:
            _logger.warning(
                "Similar diets API failed, using catalog fallback: %s",
                exc,
                extra={"diet_id": diet_id},
            )
            diets = await self._similar_from_catalog(diet_id, count)
        else:
            diets = await self.enrich(records)

        self.cache.put(request, diets)
        return diets

    async def get_popular(self, count: int = 8) -> list[Diet]:
        """Return trending diets, falling back to the highest-calorie recipes."""
        request = PopularRequest(count=count)
        cached = self.cache.get(request)
        if isinstance(cached, list):
            return cached

        records = await self._remote_popular(count)
        if records is None:
            diets = await self._popular_from_catalog(count)
        else:
            diets = await self.enrich(records)

        self.cache.put(request, diets)
        return diets

    async def enrich(self, records: list[dict[str, object]]) -> list[Diet]:
        """Map engine records to diets using full catalog records where found."""
        if not records:
            return []
        catalog = await self._catalog_by_id()
        return [
            recommendation_to_diet(record, catalog.get(str(record.get("id"))))
            for record in records
        ]

    def track_view(self, user_id: str, diet_id: str) -> None:
        """Record a diet view in the background; never raises or blocks."""
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            _logger.warning("No running event loop; dropping view event")
            return
        task = loop.create_task(self._track_view(user_id, diet_id))
        self._background_tasks.add(task)
        task.add_done_callback(self._background_tasks.discard)

    async def wait_for_background_tasks(self) -> None:
        """Wait for in-flight tracking tasks to finish."""
        if self._background_tasks:
            await asyncio.gather(*self._background_tasks, return_exceptions=True)

    async def track_like(self, user_id: str, diet_id: str) -> None:
        """Forward a like event to the engine."""
        await self.api_client.track_like(user_id, diet_id)

    async def track_add_to_folder(
        self, user_id: str, diet_id: str, folder_name: str
    ) -> None:
        """Forward an add-to-folder event to the engine."""
        await self.api_client.track_add_to_folder(user_id, diet_id, folder_name)

    async def recommend(self, strategy: str, payload: dict[str, object]) -> object:
        """Pass a strategy request straight through to the engine."""
        if strategy not in STRATEGIES:
            raise UnknownStrategyError(strategy)
        return await self.api_client.recommend(strategy, payload)

    async def get_similar_raw(self, diet_id: str, count: int = 5) -> object:
        """Return the engine's unmapped similar-recipes response."""
        return await self.api_client.get_similar(diet_id, count)

    async def get_trending_raw(self, count: int = 10) -> object:
        """Return the engine's unmapped trending response."""
        return await self.api_client.get_trending(count)

    async def get_categories(self) -> object:
        """Return the engine's recommendation categories."""
        return await self.api_client.get_categories()

    async def get_stats(self) -> object:
        """Return the engine's statistics."""
        return await self.api_client.get_stats()

    async def _remote_popular(self, count: int) -> list[dict[str, object]] | None:
        try:
            payload = await self.api_client.get_trending(count)
            return response_records(payload, "trending_recipes")
        except Exception as exc:
            _logger.warning("Trending endpoint failed, trying popular: %s", exc)

        try:
            payload = await self.api_client.get_popular()
            if not isinstance(payload, list):
                raise MalformedResponseError("Popular response is not a list")
        except Exception as exc:
            _logger.warning("Popular endpoint failed, using catalog fallback: %s", exc)
            return None
        return [record for record in payload if isinstance(record, dict)][:count]

    async def _similar_from_catalog(self, diet_id: str, count: int) -> list[Diet]:
        catalog = await self.catalog_client.list_recipes()
        current = next(
            (record for record in catalog if str(record.get("id")) == diet_id), None
        )
        if current is None:
            return []

        current_tags = set(derive_tags(current))
        scored = [
            (sum(1 for tag in derive_tags(record) if tag in current_tags), record)
            for record in catalog
            if str(record.get("id")) != diet_id
        ]
        # list.sort is stable, so equal scores keep catalog order
        scored.sort(key=lambda item: item[0], reverse=True)
        return [to_diet(record) for _, record in scored[:count]]

    async def _popular_from_catalog(self, count: int) -> list[Diet]:
        diets = [to_diet(record) for record in await self.catalog_client.list_recipes()]
        diets.sort(key=lambda diet: diet.nutritional_facts.calories, reverse=True)
        return diets[:count]

    async def _catalog_by_id(self) -> dict[str, dict[str, object]]:
        try:
            catalog = await self.catalog_client.list_recipes()
        except Exception as exc:
            _logger.warning("Catalog enrichment failed: %s", exc)
            return {}
        return {str(record.get("id")): record for record in catalog}

    async def _track_view(self, user_id: str, diet_id: str) -> None:
        try:
            await self.api_client.track_view(user_id, diet_id)
        except Exception as exc:
            _logger.warning(
                "Failed to track diet view: %s",
                exc,
                extra={"user_id": user_id, "diet_id": diet_id},
            )

        if user_id == ANONYMOUS_USER_ID or self.profiles is None:
            return
        try:
            self.profiles.record_view(user_id, diet_id)
        except Exception as exc:
            _logger.warning(
                "Failed to record diet view for user: %s",
                exc,
                extra={"user_id": user_id, "diet_id": diet_id},
            )
