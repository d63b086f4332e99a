"""Mapping from external recipe records to the application's Diet shape."""

import math
import re

from health_lover.domain.diets import Diet, NutritionalFacts, RecipeDetails, SampleMeal

PLACEHOLDER_IMAGE_URL = (
    "https://images.unsplash.com/photo-1490645935967-10de6ba17061"
    "?q=80&w=2053&auto=format&fit=crop"
)

_NUMBERED_SLOTS = range(1, 11)
_HIGH_PROTEIN_G = 20
_LOW_PROTEIN_G = 10
_HIGH_FAT_G = 30
_VERY_LOW_CARB_G = 10
_LOW_CARB_G = 20
_LOW_CALORIES = 300
_HIGH_CALORIES = 500


def _number(record: dict[str, object], key: str) -> float:
    value = record.get(key)
    if isinstance(value, bool) or value is None:
        return 0
    if isinstance(value, int):
        return value
    if not isinstance(value, float):
        try:
            value = float(str(value))
        except ValueError:
            return 0
    return value if math.isfinite(value) else 0


def _text(record: dict[str, object], key: str) -> str:
    value = record.get(key)
    if value is None:
        return ""
    return str(value).strip()


def _category(record: dict[str, object]) -> dict[str, object]:
    category = record.get("category")
    return category if isinstance(category, dict) else {}


def derive_tags(record: dict[str, object]) -> list[str]:
    """Derive descriptive tags from category, macros and difficulty."""
    tags = ["keto"]
    category_name = _text(_category(record), "category")
    if category_name:
        tags.append(re.sub(r"\s+", "-", category_name.lower()))

    protein = _number(record, "protein_in_grams")
    fat = _number(record, "fat_in_grams")
    carbs = _number(record, "carbohydrates_in_grams")
    calories = _number(record, "calories")

    if protein > _HIGH_PROTEIN_G:
        tags.append("high-protein")
    elif 0 < protein < _LOW_PROTEIN_G:
        tags.append("low-protein")
    if fat > _HIGH_FAT_G:
        tags.append("high-fat")
    if 0 < carbs < _VERY_LOW_CARB_G:
        tags.append("very-low-carb")
    elif 0 < carbs < _LOW_CARB_G:
        tags.append("low-carb")
    if 0 < calories < _LOW_CALORIES:
        tags.append("low-calorie")
    elif calories > _HIGH_CALORIES:
        tags.append("high-calorie")

    difficulty = _text(record, "difficulty")
    if difficulty:
        tags.append(difficulty.lower())
    return tags


def extract_ingredients(record: dict[str, object]) -> list[str]:
    """Combine numbered measurement and ingredient slots in order."""
    ingredients: list[str] = []
    for slot in _NUMBERED_SLOTS:
        ingredient = _text(record, f"ingredient_{slot}")
        if not ingredient:
            continue
        measurement = _text(record, f"measurement_{slot}")
        ingredients.append(f"{measurement} {ingredient}" if measurement else ingredient)
    return ingredients


def extract_directions(record: dict[str, object]) -> list[str]:
    """Collect the non-empty numbered direction steps in order."""
    directions: list[str] = []
    for slot in _NUMBERED_SLOTS:
        step = _text(record, f"directions_step_{slot}")
        if step:
            directions.append(step)
    return directions


def _format_amount(value: float) -> str:
    return f"{value:g}"


def to_diet(record: dict[str, object]) -> Diet:
    """Map a raw catalog record to a Diet; missing fields get safe defaults."""
    ingredients = extract_ingredients(record)
    directions = extract_directions(record)
    calories = _number(record, "calories")
    protein = _number(record, "protein_in_grams")
    carbs = _number(record, "carbohydrates_in_grams")
    fat = _number(record, "fat_in_grams")
    prep_time = int(_number(record, "prep_time_in_minutes"))
    cook_time = int(_number(record, "cook_time_in_minutes"))
    difficulty = _text(record, "difficulty") or "Easy"
    name = _text(record, "recipe") or _text(record, "name") or "Untitled recipe"
    image_url = (
        _text(record, "image")
        or _text(_category(record), "thumbnail")
        or PLACEHOLDER_IMAGE_URL
    )
    teaser = ", ".join(ingredients[:3])
    if len(ingredients) > 3:
        teaser += "..."

    return Diet(
        id=_text(record, "id"),
        name=name,
        description=(
            f"{difficulty} keto recipe with {_format_amount(protein)}g protein and "
            f"only {_format_amount(carbs)}g carbs. "
            f"Ready in {prep_time + cook_time} minutes."
        ),
        image_url=image_url,
        tags=derive_tags(record),
        nutritional_facts=NutritionalFacts(
            calories=calories, protein=protein, carbs=carbs, fat=fat
        ),
        benefits=[
            "Keto-friendly recipe",
            f"{_format_amount(calories)} calories per serving",
            f"Contains {_format_amount(protein)}g of protein",
            f"Only {_format_amount(carbs)}g of carbohydrates",
        ],
        sample_meals=[SampleMeal(name=name, description=f"Ingredients: {teaser}")],
        recipe=RecipeDetails(
            ingredients=ingredients,
            directions=directions,
            servings=int(_number(record, "serving")) or 1,
            prep_time=prep_time,
            cook_time=cook_time,
            difficulty=difficulty,
        ),
    )


def recommendation_to_diet(
    recommendation: dict[str, object],
    catalog_record: dict[str, object] | None = None,
) -> Diet:
    """Map an engine recommendation, preferring its full catalog record."""
    if catalog_record is not None:
        return to_diet(catalog_record)
    return to_diet(recommendation)
