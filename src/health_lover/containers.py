"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from health_lover.adapters.recipe_client import HttpxRecipeCatalogClient
from health_lover.adapters.recommendation_client import HttpxRecommendationApiClient
from health_lover.adapters.supabase_profile_repository import SupabaseProfileRepository
from health_lover.config import Settings
from health_lover.services.cache import RecommendationCache
from health_lover.services.diets import DietCatalogService
from health_lover.services.personalization import PersonalizationService
from health_lover.services.profiles import ProfileService
from health_lover.services.recommendations import RecommendationService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    cache: RecommendationCache
    profile_service: ProfileService
    diet_service: DietCatalogService
    recommendation_service: RecommendationService
    personalization_service: PersonalizationService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    profile_service = ProfileService(SupabaseProfileRepository(supabase_client))
    cache = RecommendationCache(
        ttl_seconds=resolved_settings.recommendation_cache_ttl_seconds,
        max_entries=resolved_settings.recommendation_cache_max_entries,
    )
    recommendation_client = HttpxRecommendationApiClient.create(
        resolved_settings.recommendation_api_url
    )
    catalog_client = HttpxRecipeCatalogClient.create(
        api_key=resolved_settings.recipe_api_key,
        base_url=resolved_settings.recipe_api_url,
        host=resolved_settings.recipe_api_host,
    )
    recommendation_service = RecommendationService(
        api_client=recommendation_client,
        catalog_client=catalog_client,
        cache=cache,
        profiles=profile_service,
    )
    personalization_service = PersonalizationService(
        profiles=profile_service,
        api_client=recommendation_client,
        cache=cache,
        recommendations=recommendation_service,
    )

    async def close_resources() -> None:
        await recommendation_service.wait_for_background_tasks()
        await recommendation_client.close()
        await catalog_client.close()

    return AppContainer(
        settings=resolved_settings,
        cache=cache,
        profile_service=profile_service,
        diet_service=DietCatalogService(catalog_client),
        recommendation_service=recommendation_service,
        personalization_service=personalization_service,
        close_resources=close_resources,
    )
