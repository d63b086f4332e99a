"""Tests for catalog record mapping."""

import json

import pytest

from health_lover.services.mapping import (
    PLACEHOLDER_IMAGE_URL,
    derive_tags,
    extract_directions,
    extract_ingredients,
    recommendation_to_diet,
    to_diet,
)


@pytest.mark.parametrize(
    ("protein", "expected"),
    [(20, set()), (21, {"high-protein"}), (10, set()), (9, {"low-protein"})],
)
def test_protein_thresholds_are_exclusive(protein: float, expected: set[str]) -> None:
    tags = set(derive_tags({"protein_in_grams": protein}))
    assert tags & {"high-protein", "low-protein"} == expected


@pytest.mark.parametrize(
    ("carbs", "expected"),
    [(9, {"very-low-carb"}), (10, {"low-carb"}), (19, {"low-carb"}), (20, set())],
)
def test_carb_thresholds(carbs: float, expected: set[str]) -> None:
    tags = set(derive_tags({"carbohydrates_in_grams": carbs}))
    assert tags & {"very-low-carb", "low-carb"} == expected


@pytest.mark.parametrize(
    ("calories", "expected"),
    [(299, {"low-calorie"}), (300, set()), (500, set()), (501, {"high-calorie"})],
)
def test_calorie_thresholds(calories: float, expected: set[str]) -> None:
    tags = set(derive_tags({"calories": calories}))
    assert tags & {"low-calorie", "high-calorie"} == expected


def test_derive_tags_full_record() -> None:
    record = {
        "category": {"category": "Main Dishes", "thumbnail": "thumb.jpg"},
        "protein_in_grams": 35,
        "fat_in_grams": 40,
        "carbohydrates_in_grams": 5,
        "calories": 650,
        "difficulty": "Medium",
    }

    assert derive_tags(record) == [
        "keto",
        "main-dishes",
        "high-protein",
        "high-fat",
        "very-low-carb",
        "high-calorie",
        "medium",
    ]


def test_extract_ingredients_and_directions_skip_empty_slots() -> None:
    record = {
        "ingredient_1": "eggs",
        "measurement_1": 2,
        "ingredient_2": "",
        "ingredient_3": "butter",
        "ingredient_10": "salt",
        "measurement_10": "1 pinch",
        "directions_step_1": "Whisk the eggs.",
        "directions_step_4": "Serve.",
        "directions_step_2": None,
    }

    assert extract_ingredients(record) == ["2 eggs", "butter", "1 pinch salt"]
    assert extract_directions(record) == ["Whisk the eggs.", "Serve."]


def test_to_diet_is_total_on_empty_record() -> None:
    diet = to_diet({})

    assert diet.id == ""
    assert diet.image_url == PLACEHOLDER_IMAGE_URL
    assert diet.tags == ["keto"]
    assert diet.nutritional_facts.calories == 0
    assert diet.nutritional_facts.protein == 0
    assert diet.nutritional_facts.carbs == 0
    assert diet.nutritional_facts.fat == 0
    assert diet.recipe is not None
    assert diet.recipe.servings == 1
    assert diet.recipe.difficulty == "Easy"


def test_to_diet_maps_catalog_record() -> None:
    record = {
        "id": 42,
        "recipe": "Bacon Egg Cups",
        "category": {"category": "Breakfast", "thumbnail": "thumb.jpg"},
        "calories": 250,
        "protein_in_grams": 18,
        "carbohydrates_in_grams": 2,
        "fat_in_grams": 19,
        "difficulty": "Easy",
        "prep_time_in_minutes": 5,
        "cook_time_in_minutes": 15,
        "serving": 4,
        "ingredient_1": "eggs",
        "measurement_1": 6,
        "ingredient_2": "bacon",
        "ingredient_3": "cheddar",
        "ingredient_4": "chives",
        "directions_step_1": "Bake.",
    }

    diet = to_diet(record)

    assert diet.id == "42"
    assert diet.name == "Bacon Egg Cups"
    assert diet.image_url == "thumb.jpg"
    assert diet.description == (
        "Easy keto recipe with 18g protein and only 2g carbs. Ready in 20 minutes."
    )
    assert diet.sample_meals[0].description == "Ingredients: 6 eggs, bacon, cheddar..."
    assert diet.recipe is not None
    assert diet.recipe.servings == 4
    assert diet.recipe.directions == ["Bake."]


def test_to_diet_tolerates_bad_numeric_values() -> None:
    diet = to_diet({"id": 1, "calories": "n/a", "protein_in_grams": "12.5"})

    assert diet.nutritional_facts.calories == 0
    assert diet.nutritional_facts.protein == 12.5


@pytest.mark.parametrize(
    "raw",
    [
        '{"id": 1, "prep_time_in_minutes": NaN, "calories": Infinity}',
        '{"id": 1, "serving": "1e400", "protein_in_grams": -Infinity}',
    ],
)
def test_to_diet_treats_non_finite_numbers_as_missing(raw: str) -> None:
    diet = to_diet(json.loads(raw))

    assert diet.nutritional_facts.calories == 0
    assert diet.nutritional_facts.protein == 0
    assert diet.recipe.servings == 1
    assert diet.tags == ["keto"]


def test_recommendation_to_diet_prefers_catalog_record() -> None:
    recommendation = {"id": 7, "recipe": "Engine name"}
    catalog_record = {"id": 7, "recipe": "Catalog name", "image": "full.jpg"}

    enriched = recommendation_to_diet(recommendation, catalog_record)
    bare = recommendation_to_diet(recommendation)

    assert enriched.name == "Catalog name"
    assert enriched.image_url == "full.jpg"
    assert bare.name == "Engine name"
    assert bare.image_url == PLACEHOLDER_IMAGE_URL
