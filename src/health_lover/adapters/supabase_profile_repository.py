"""Supabase-backed profile repository."""

from dataclasses import asdict, dataclass
from datetime import UTC, datetime

from supabase import Client

from health_lover.domain.profiles import DietCategory, ProfilePreferences, UserProfile
from health_lover.services.profiles import ProfileRepository

_COLUMNS = "id, email, name, preferences, categories, saved_diets"


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for profile persistence."""

    client: Client

    def get_by_email(self, email: str) -> UserProfile | None:
        """Return the profile for an email, if present."""
        response = (
            self.client.table("profiles")
            .select(_COLUMNS)
            .eq("email", email)
            .limit(1)
            .execute()
        )
        if response.data:
            return _row_to_profile(response.data[0])
        return None

    def create_profile(self, profile: UserProfile) -> UserProfile:
        """Insert a new profile row and return it."""
        response = (
            self.client.table("profiles")
            .insert(
                {
                    "id": profile.id,
                    "email": profile.email,
                    "name": profile.name,
                    "preferences": asdict(profile.preferences),
                    "categories": [asdict(category) for category in profile.categories],
                    "saved_diets": profile.saved_diets,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create profile in Supabase")
        return _row_to_profile(response.data[0])

    def save_preferences(self, email: str, preferences: ProfilePreferences) -> None:
        """Replace stored preferences."""
        self._update(email, {"preferences": asdict(preferences)})

    def save_categories(self, email: str, categories: list[DietCategory]) -> None:
        """Replace stored categories."""
        self._update(
            email, {"categories": [asdict(category) for category in categories]}
        )

    def save_saved_diets(self, email: str, diet_ids: list[str]) -> None:
        """Replace the saved diet list."""
        self._update(email, {"saved_diets": diet_ids})

    def record_view(self, email: str, diet_id: str) -> None:
        """Insert a view event row."""
        self.client.table("diet_views").insert(
            {
                "email": email,
                "diet_id": diet_id,
                "viewed_at": datetime.now(tz=UTC).isoformat(),
            }
        ).execute()

    def _update(self, email: str, payload: dict[str, object]) -> None:
        payload["updated_at"] = datetime.now(tz=UTC).isoformat()
        self.client.table("profiles").update(payload).eq("email", email).execute()


def _row_to_profile(row: dict[str, object]) -> UserProfile:
    preferences = row.get("preferences") or {}
    return UserProfile(
        id=str(row["id"]),
        email=str(row["email"]),
        name=str(row.get("name") or ""),
        preferences=ProfilePreferences(
            dietary_restrictions=list(preferences.get("dietary_restrictions") or []),
            health_goals=list(preferences.get("health_goals") or []),
            activity_level=preferences.get("activity_level") or "moderate",
            age=preferences.get("age"),
        ),
        categories=[
            DietCategory(
                id=str(category.get("id", "")),
                name=str(category.get("name", "")),
                diet_ids=[str(diet_id) for diet_id in category.get("diet_ids") or []],
            )
            for category in row.get("categories") or []
        ],
        saved_diets=[str(diet_id) for diet_id in row.get("saved_diets") or []],
    )
