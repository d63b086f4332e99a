"""Shared test fixtures."""

from dataclasses import dataclass, field, replace

import httpx
import pytest

from health_lover.adapters.recipe_client import RecipeCatalogClient, RecipeNotFoundError
from health_lover.adapters.recommendation_client import RecommendationApiClient
from health_lover.config import Settings
from health_lover.containers import AppContainer
from health_lover.domain.diets import RecipeFilters
from health_lover.domain.profiles import DietCategory, ProfilePreferences, UserProfile
from health_lover.services.cache import RecommendationCache
from health_lover.services.diets import DietCatalogService
from health_lover.services.personalization import PersonalizationService
from health_lover.services.profiles import ProfileRepository, ProfileService
from health_lover.services.recommendations import RecommendationService


def make_recipe(recipe_id: int, **fields: object) -> dict[str, object]:
    """Build a raw catalog record with neutral macros."""
    record: dict[str, object] = {
        "id": recipe_id,
        "recipe": f"Recipe {recipe_id}",
        "calories": 400,
        "protein_in_grams": 15,
        "carbohydrates_in_grams": 25,
        "fat_in_grams": 20,
    }
    record.update(fields)
    return record


def _transport_error(url: str) -> httpx.ConnectError:
    return httpx.ConnectError("connection refused", request=httpx.Request("GET", url))


@dataclass
class FakeRecipeCatalogClient(RecipeCatalogClient):
    """In-memory catalog that counts listing calls."""

    records: list[dict[str, object]] = field(default_factory=list)
    fail: bool = False
    list_calls: int = 0
    get_calls: int = 0
    last_filters: RecipeFilters | None = None

    async def list_recipes(
        self, filters: RecipeFilters | None = None
    ) -> list[dict[str, object]]:
        self.list_calls += 1
        self.last_filters = filters
        if self.fail:
            raise _transport_error("https://catalog.test/")
        return list(self.records)

    async def get_recipe(self, recipe_id: int) -> dict[str, object]:
        self.get_calls += 1
        if self.fail:
            raise _transport_error("https://catalog.test/")
        for record in self.records:
            if record.get("id") == recipe_id:
                return record
        raise RecipeNotFoundError(f"Recipe {recipe_id} not found")


@dataclass
class FakeRecommendationApiClient(RecommendationApiClient):
    """Engine fake; each response is a payload or an exception to raise."""

    similar: object = field(default_factory=lambda: {"similar_recipes": []})
    trending: object = field(default_factory=lambda: {"trending_recipes": []})
    popular: object = field(default_factory=list)
    personalized: object = field(default_factory=lambda: {"recommendations": []})
    strategy_response: object = field(default_factory=dict)
    categories: object = field(default_factory=lambda: {"categories": []})
    stats: object = field(default_factory=lambda: {"recipes": 0})
    tracking_error: Exception | None = None
    calls: list[tuple[str, object]] = field(default_factory=list)

    def _respond(self, name: str, argument: object, response: object) -> object:
        self.calls.append((name, argument))
        if isinstance(response, Exception):
            raise response
        return response

    def count(self, name: str) -> int:
        return sum(1 for call_name, _ in self.calls if call_name == name)

    async def get_similar(self, diet_id: str, count: int) -> object:
        return self._respond("similar", (diet_id, count), self.similar)

    async def get_trending(self, count: int) -> object:
        return self._respond("trending", count, self.trending)

    async def get_popular(self) -> object:
        return self._respond("popular", None, self.popular)

    async def get_personalized(self, payload: dict[str, object]) -> object:
        return self._respond("personalized", payload, self.personalized)

    async def recommend(self, strategy: str, payload: dict[str, object]) -> object:
        return self._respond(strategy, payload, self.strategy_response)

    async def get_categories(self) -> object:
        return self._respond("categories", None, self.categories)

    async def get_stats(self) -> object:
        return self._respond("stats", None, self.stats)

    async def track_view(self, user_id: str, diet_id: str) -> None:
        self._respond("view", (user_id, diet_id), self.tracking_error)

    async def track_like(self, user_id: str, diet_id: str) -> None:
        self._respond("like", (user_id, diet_id), self.tracking_error)

    async def track_add_to_folder(
        self, user_id: str, diet_id: str, folder_name: str
    ) -> None:
        self._respond(
            "add-to-folder", (user_id, diet_id, folder_name), self.tracking_error
        )


@dataclass
class InMemoryProfileRepository(ProfileRepository):
    """In-memory profile repository for tests."""

    profiles: dict[str, UserProfile] = field(default_factory=dict)
    views: list[tuple[str, str]] = field(default_factory=list)
    fail_reads: bool = False
    fail_views: bool = False

    def get_by_email(self, email: str) -> UserProfile | None:
        if self.fail_reads:
            raise RuntimeError("profile store unavailable")
        return self.profiles.get(email)

    def create_profile(self, profile: UserProfile) -> UserProfile:
        self.profiles[profile.email] = profile
        return profile

    def save_preferences(self, email: str, preferences: ProfilePreferences) -> None:
        self.profiles[email] = replace(self.profiles[email], preferences=preferences)

    def save_categories(self, email: str, categories: list[DietCategory]) -> None:
        self.profiles[email] = replace(self.profiles[email], categories=categories)

    def save_saved_diets(self, email: str, diet_ids: list[str]) -> None:
        self.profiles[email] = replace(self.profiles[email], saved_diets=diet_ids)

    def record_view(self, email: str, diet_id: str) -> None:
        if self.fail_views:
            raise RuntimeError("profile store unavailable")
        self.views.append((email, diet_id))


@pytest.fixture
def settings() -> Settings:
    return Settings(
        recommendation_api_url="https://engine.test/api/v1",
        recipe_api_key="rapid-key",
        supabase_url="https://example.supabase.co",
        supabase_service_key=(
            "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9."
            "eyJyb2xlIjoic2VydmljZV9yb2xlIn0."
            "c2lnbmF0dXJl"
        ),
        admin_token="admin-token",
    )


@pytest.fixture
def catalog_client() -> FakeRecipeCatalogClient:
    return FakeRecipeCatalogClient(records=[make_recipe(i) for i in range(1, 6)])


@pytest.fixture
def api_client() -> FakeRecommendationApiClient:
    return FakeRecommendationApiClient()


@pytest.fixture
def profile_repository() -> InMemoryProfileRepository:
    return InMemoryProfileRepository()


@pytest.fixture
def container(
    settings: Settings,
    catalog_client: FakeRecipeCatalogClient,
    api_client: FakeRecommendationApiClient,
    profile_repository: InMemoryProfileRepository,
) -> AppContainer:
    cache = RecommendationCache()
    profile_service = ProfileService(profile_repository)
    recommendation_service = RecommendationService(
        api_client=api_client,
        catalog_client=catalog_client,
        cache=cache,
        profiles=profile_service,
    )
    personalization_service = PersonalizationService(
        profiles=profile_service,
        api_client=api_client,
        cache=cache,
        recommendations=recommendation_service,
    )

    async def close_resources() -> None:
        await recommendation_service.wait_for_background_tasks()

    return AppContainer(
        settings=settings,
        cache=cache,
        profile_service=profile_service,
        diet_service=DietCatalogService(catalog_client),
        recommendation_service=recommendation_service,
        personalization_service=personalization_service,
        close_resources=close_resources,
    )
