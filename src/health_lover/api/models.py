"""Pydantic models for API request bodies."""

from pydantic import BaseModel, Field

from health_lover.domain.profiles import DietCategory, ProfilePreferences


class TrackViewRequest(BaseModel):
    """View-tracking payload; ids are checked by the route."""

    user_id: str | int | None = None
    diet_id: str | int | None = None


class InteractionRequest(BaseModel):
    """A user's interaction with one diet."""

    user_id: str
    diet_id: str | int


class AddToFolderRequest(InteractionRequest):
    """A user filing a diet into a folder."""

    folder_name: str


class PreferencesPayload(BaseModel):
    """Profile preferences payload."""

    dietary_restrictions: list[str] = Field(default_factory=list)
    health_goals: list[str] = Field(default_factory=list)
    activity_level: str = "moderate"
    age: int | None = Field(default=None, ge=0)

    def to_domain(self) -> ProfilePreferences:
        return ProfilePreferences(
            dietary_restrictions=self.dietary_restrictions,
            health_goals=self.health_goals,
            activity_level=self.activity_level,
            age=self.age,
        )


class SavedDietRequest(BaseModel):
    """Diet id to save or file."""

    diet_id: str | int


class CategoryCreateRequest(BaseModel):
    """New category payload."""

    name: str = Field(min_length=1)


class CategoryPayload(BaseModel):
    """One category in a full replacement."""

    id: str
    name: str
    diet_ids: list[str] = Field(default_factory=list)


class CategoriesPayload(BaseModel):
    """Replacement list of categories."""

    categories: list[CategoryPayload]

    def to_domain(self) -> list[DietCategory]:
        return [
            DietCategory(id=item.id, name=item.name, diet_ids=item.diet_ids)
            for item in self.categories
        ]
