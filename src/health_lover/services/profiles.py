"""User profile business logic."""

from dataclasses import dataclass, replace
from typing import Protocol
from uuid import uuid4

from health_lover.domain.profiles import DietCategory, ProfilePreferences, UserProfile

DEFAULT_CATEGORY_NAMES = ("Favorites", "Try Later")
DEFAULT_AGE = 30


class ProfileNotFoundError(LookupError):
    """Raised when no profile exists for an email."""


class ProfileRepository(Protocol):
    """Persistence interface for profile documents keyed by email."""

    def get_by_email(self, email: str) -> UserProfile | None:
        """Return the profile for an email, if present."""

    def create_profile(self, profile: UserProfile) -> UserProfile:
        """Insert a new profile and return it."""

    def save_preferences(self, email: str, preferences: ProfilePreferences) -> None:
        """Replace the stored preferences."""

    def save_categories(self, email: str, categories: list[DietCategory]) -> None:
        """Replace the stored categories."""

    def save_saved_diets(self, email: str, diet_ids: list[str]) -> None:
        """Replace the stored saved-diet list."""

    def record_view(self, email: str, diet_id: str) -> None:
        """Append a diet view event for the user."""


@dataclass
class ProfileService:
    """Application service for profile reads and mutations."""

    repository: ProfileRepository

    def get_profile(self, email: str) -> UserProfile:
        """Return the stored profile or raise ProfileNotFoundError."""
        profile = self.repository.get_by_email(email)
        if profile is None:
            raise ProfileNotFoundError(email)
        return profile

    def ensure_profile(self, email: str) -> UserProfile:
        """Return the profile, creating one with defaults on first access."""
        existing = self.repository.get_by_email(email)
        if existing:
            return existing
        profile = UserProfile(
            id=str(uuid4()),
            email=email,
            name=email.split("@")[0],
            preferences=ProfilePreferences(age=DEFAULT_AGE),
            categories=[
                DietCategory(id=str(uuid4()), name=name, diet_ids=[])
                for name in DEFAULT_CATEGORY_NAMES
            ],
            saved_diets=[],
        )
        return self.repository.create_profile(profile)

    def update_preferences(
        self, email: str, preferences: ProfilePreferences
    ) -> UserProfile:
        """Replace preferences, creating the profile if needed."""
        profile = self.ensure_profile(email)
        self.repository.save_preferences(email, preferences)
        return replace(profile, preferences=preferences)

    def save_diet(self, email: str, diet_id: str) -> UserProfile:
        """Add a diet to the saved list once."""
        profile = self.get_profile(email)
        if diet_id in profile.saved_diets:
            return profile
        saved = [*profile.saved_diets, diet_id]
        self.repository.save_saved_diets(email, saved)
        return replace(profile, saved_diets=saved)

    def remove_saved_diet(self, email: str, diet_id: str) -> UserProfile:
        """Remove a diet from the saved list."""
        profile = self.get_profile(email)
        saved = [saved_id for saved_id in profile.saved_diets if saved_id != diet_id]
        self.repository.save_saved_diets(email, saved)
        return replace(profile, saved_diets=saved)

    def create_category(self, email: str, name: str) -> UserProfile:
        """Append an empty category."""
        profile = self.get_profile(email)
        categories = [
            *profile.categories,
            DietCategory(id=str(uuid4()), name=name, diet_ids=[]),
        ]
        self.repository.save_categories(email, categories)
        return replace(profile, categories=categories)

    def replace_categories(
        self, email: str, categories: list[DietCategory]
    ) -> UserProfile:
        """Replace every category."""
        profile = self.get_profile(email)
        self.repository.save_categories(email, categories)
        return replace(profile, categories=categories)

    def add_diet_to_category(
        self, email: str, category_id: str, diet_id: str
    ) -> UserProfile:
        """File a diet into a category and make sure it is saved."""
        profile = self.get_profile(email)
        if not any(category.id == category_id for category in profile.categories):
            raise ProfileNotFoundError(f"{email}: category {category_id}")
        categories = [
            replace(category, diet_ids=[*category.diet_ids, diet_id])
            if category.id == category_id and diet_id not in category.diet_ids
            else category
            for category in profile.categories
        ]
        self.repository.save_categories(email, categories)
        profile = replace(profile, categories=categories)
        if diet_id not in profile.saved_diets:
            saved = [*profile.saved_diets, diet_id]
            self.repository.save_saved_diets(email, saved)
            profile = replace(profile, saved_diets=saved)
        return profile

    def record_view(self, email: str, diet_id: str) -> None:
        """Persist a diet view for the user."""
        self.repository.record_view(email, diet_id)
