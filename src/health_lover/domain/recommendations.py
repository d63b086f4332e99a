"""Recommendation request variants and their cache keys.

Every request kind lists its fields explicitly and serializes them in a fixed
order, so two structurally equal requests always share one cache key no matter
how they were built. Bump ``KEY_VERSION`` when a variant's fields change.
"""

import json
from dataclasses import dataclass, field
from typing import ClassVar, Literal

KEY_VERSION = "v1"

RequestKind = Literal["similar", "popular", "personalized"]


def _key(kind: str, fields: list[tuple[str, object]]) -> str:
    body = json.dumps([[name, value] for name, value in fields], separators=(",", ":"))
    return f"{KEY_VERSION}:{kind}:{body}"


@dataclass(frozen=True)
class UserPreferences:
    """Preferences sent to the recommendation engine."""

    dietary_restrictions: tuple[str, ...] = ()
    health_goals: tuple[str, ...] = ()
    activity_level: str = "moderate"
    preferred_cuisines: tuple[str, ...] = ()
    disliked_ingredients: tuple[str, ...] = ()

    def fields(self) -> list[tuple[str, object]]:
        return [
            ("dietary_restrictions", list(self.dietary_restrictions)),
            ("health_goals", list(self.health_goals)),
            ("activity_level", self.activity_level),
            ("preferred_cuisines", list(self.preferred_cuisines)),
            ("disliked_ingredients", list(self.disliked_ingredients)),
        ]

    def to_payload(self) -> dict[str, object]:
        return dict(self.fields())


@dataclass(frozen=True)
class SimilarRequest:
    """Similar diets for one catalog id."""

    kind: ClassVar[RequestKind] = "similar"

    diet_id: str
    count: int = 4

    @property
    def cache_key(self) -> str:
        return _key(self.kind, [("diet_id", self.diet_id), ("count", self.count)])


@dataclass(frozen=True)
class PopularRequest:
    """Trending diets across all users."""

    kind: ClassVar[RequestKind] = "popular"

    count: int = 8

    @property
    def cache_key(self) -> str:
        return _key(self.kind, [("count", self.count)])


@dataclass(frozen=True)
class PersonalizedRequest:
    """Recommendations tailored to one user's profile."""

    kind: ClassVar[RequestKind] = "personalized"

    user_id: str
    preferences: UserPreferences = field(default_factory=UserPreferences)
    liked_item_ids: tuple[int, ...] = ()
    count: int = 8

    @property
    def cache_key(self) -> str:
        return _key(
            self.kind,
            [
                ("user_id", self.user_id),
                ("preferences", self.preferences.fields()),
                ("liked_item_ids", list(self.liked_item_ids)),
                ("count", self.count),
            ],
        )

    def to_payload(self) -> dict[str, object]:
        """Return the engine's request body."""
        return {
            "user_id": self.user_id,
            "preferences": self.preferences.to_payload(),
            "liked_recipes": list(self.liked_item_ids),
            "num_recommendations": self.count,
        }


RecommendationRequest = SimilarRequest | PopularRequest | PersonalizedRequest
