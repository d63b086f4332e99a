"""Diet domain models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class NutritionalFacts:
    """Per-serving macros for a diet."""

    calories: float
    protein: float
    carbs: float
    fat: float


@dataclass(frozen=True)
class SampleMeal:
    """Short meal teaser shown on diet cards."""

    name: str
    description: str


@dataclass(frozen=True)
class RecipeDetails:
    """Preparation details extracted from a catalog record."""

    ingredients: list[str]
    directions: list[str]
    servings: int
    prep_time: int
    cook_time: int
    difficulty: str


@dataclass(frozen=True)
class Diet:
    """Application view of a catalog recipe."""

    id: str
    name: str
    description: str
    image_url: str
    tags: list[str]
    nutritional_facts: NutritionalFacts
    benefits: list[str]
    sample_meals: list[SampleMeal]
    recipe: RecipeDetails | None = None


@dataclass(frozen=True)
class RecipeFilters:
    """Optional numeric bounds for catalog searches."""

    protein_lt: float | None = None
    protein_gt: float | None = None
    carbs_lt: float | None = None
    carbs_gt: float | None = None
    calories_lt: float | None = None
    calories_gt: float | None = None
    fat_lt: float | None = None
    fat_gt: float | None = None

    def to_params(self) -> dict[str, str]:
        """Return catalog query parameters for the bounds that are set."""
        fields = {
            "protein_in_grams__lt": self.protein_lt,
            "protein_in_grams__gt": self.protein_gt,
            "carbohydrates_in_grams__lt": self.carbs_lt,
            "carbohydrates_in_grams__gt": self.carbs_gt,
            "calories__lt": self.calories_lt,
            "calories__gt": self.calories_gt,
            "fat_in_grams__lt": self.fat_lt,
            "fat_in_grams__gt": self.fat_gt,
        }
        return {name: f"{value:g}" for name, value in fields.items() if value is not None}
