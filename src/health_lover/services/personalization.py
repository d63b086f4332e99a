"""Personalized recommendations built from the user's stored profile."""

import logging
from dataclasses import dataclass

from health_lover.adapters.recommendation_client import RecommendationApiClient
from health_lover.domain.diets import Diet
from health_lover.domain.recommendations import PersonalizedRequest, UserPreferences
from health_lover.services.cache import Cache
from health_lover.services.profiles import ProfileService
from health_lover.services.recommendations import (
    RecommendationService,
    response_records,
)

_logger = logging.getLogger(__name__)


@dataclass
class PersonalizationService:
    """Combines profile data, the engine and the cache into diet lists."""

    profiles: ProfileService
    api_client: RecommendationApiClient
    cache: Cache
    recommendations: RecommendationService

    def build_request(self, email: str, count: int = 8) -> PersonalizedRequest:
        """Build the engine request from the stored profile.

        Raises when the profile cannot be loaded.
        """
        profile = self.profiles.get_profile(email)
        preferences = profile.preferences
        return PersonalizedRequest(
            user_id=profile.email,
            preferences=UserPreferences(
                dietary_restrictions=tuple(preferences.dietary_restrictions),
                health_goals=tuple(preferences.health_goals),
                activity_level=preferences.activity_level or "moderate",
            ),
            liked_item_ids=tuple(
                int(diet_id) for diet_id in profile.saved_diets if diet_id.isdecimal()
            ),
            count=count,
        )

    async def get_personalized(self, email: str, count: int = 8) -> list[Diet]:
        """Return personalized diets; profile and engine failures propagate.

        The raw engine records are cached, so a repeated request skips the
        engine and goes straight to enrichment.
        """
        request = self.build_request(email, count)
        cached = self.cache.get(request)
        if isinstance(cached, list):
            records = cached
        else:
            payload = await self.api_client.get_personalized(request.to_payload())
            records = response_records(payload, "recommendations")
            self.cache.put(request, records)
        return await self.recommendations.enrich(records)

    async def get_recommendations(self, email: str, count: int = 8) -> list[Diet]:
        """Return personalized diets, degrading to popular diets on any failure."""
        try:
            return await self.get_personalized(email, count)
        except Exception:
            _logger.exception(
                "Personalized recommendations failed, using popular diets",
                extra={"email": email},
            )
        return await self.recommendations.get_popular(count)
