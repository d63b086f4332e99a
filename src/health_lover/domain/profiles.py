"""Domain models for user profiles."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ProfilePreferences:
    """Dietary preferences stored on a user profile."""

    dietary_restrictions: list[str] = field(default_factory=list)
    health_goals: list[str] = field(default_factory=list)
    activity_level: str = "moderate"
    age: int | None = None


@dataclass(frozen=True)
class DietCategory:
    """User-defined folder of saved diets."""

    id: str
    name: str
    diet_ids: list[str]


@dataclass(frozen=True)
class UserProfile:
    """Profile document keyed by email."""

    id: str
    email: str
    name: str
    preferences: ProfilePreferences
    categories: list[DietCategory]
    saved_diets: list[str]
