"""Meal and drink suggestion models."""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from sehat_sense.domain.analysis import ModelPayload


class Difficulty(StrEnum):
    """Recipe difficulty."""

    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"


class HealthScore(ModelPayload):
    """Per-condition suitability score."""

    condition: str
    score: float = Field(ge=0, le=10)


class MealNutrition(ModelPayload):
    """Nutrition breakdown of a suggested meal."""

    calories: float = Field(ge=0)
    protein: float = Field(ge=0)
    carbs: float = Field(ge=0)
    fats: float = Field(ge=0)


class MealIdea(ModelPayload):
    """Meal suggestion as returned by the model, before the image is resolved."""

    name: str
    image_search_term: str
    description: str
    health_scores: tuple[HealthScore, ...] = ()
    nutrition: MealNutrition
    prep_time: str
    difficulty: Difficulty
    ingredients: tuple[str, ...]
    recipe: tuple[str, ...]
    why_its_good: str


class MealSuggestion(MealIdea):
    """Meal suggestion with a resolved image URL."""

    image: str


class DrinkSuggestion(ModelPayload):
    """Healthy drink suggestion."""

    name: str
    perfect_for: tuple[str, ...]
    calories: float = Field(ge=0)
    sugar: str
    key_nutrients: str
    why_it_works: str
    ingredients: tuple[str, ...]
    prep_time: str
    best_time: str
    recipe: str
    warnings: str = ""

    @field_validator("warnings", mode="before")
    @classmethod
    def _blank_warnings(cls, value: object) -> object:
        return "" if value is None else value


class MealFilters(BaseModel):
    """Preferences for meal ideas."""

    model_config = ConfigDict(frozen=True)

    meal_type: str = "Lunch"
    time: str = "Moderate (20-30 min)"
    cuisine: str = "North Indian"


class DrinkFilters(BaseModel):
    """Preferences for drink suggestions."""

    model_config = ConfigDict(frozen=True)

    drink_type: str = "all"
    time_of_day: str = "any"
