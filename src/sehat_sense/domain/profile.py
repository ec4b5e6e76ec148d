"""User health profile model."""

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from sehat_sense.domain.conditions import Condition


class Gender(StrEnum):
    """Self-reported gender."""

    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class DietaryPreference(StrEnum):
    """Dietary preference used when suggesting food."""

    VEGETARIAN = "vegetarian"
    NON_VEGETARIAN = "non-vegetarian"
    VEGAN = "vegan"
    EGGETARIAN = "eggetarian"


class ActivityLevel(StrEnum):
    """Daily activity level."""

    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    ACTIVE = "active"


def compute_bmi(weight: float | None, height: float | None) -> float | None:
    """Return BMI from kilograms and centimetres, rounded to one decimal."""
    if weight is None or height is None or weight <= 0 or height <= 0:
        return None
    return round(weight / (height / 100) ** 2, 1)


class UserProfile(BaseModel):
    """The single health profile of this installation.

    ``bmi`` and ``weight_loss_goal`` are derived on every construction and
    any value supplied for them is discarded.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str
    age: int | None = Field(default=None, gt=0)
    gender: Gender | None = None
    conditions: tuple[Condition, ...] = ()
    metrics: dict[str, float | str] = Field(default_factory=dict)
    dietary_preference: DietaryPreference = DietaryPreference.VEGETARIAN
    allergies: tuple[str, ...] = ()
    weight_loss_goal: bool = False
    current_weight: float | None = Field(default=None, gt=0)
    target_weight: float | None = Field(default=None, gt=0)
    height: float | None = Field(default=None, gt=0)
    bmi: float | None = None
    water_intake: int | None = Field(default=None, gt=0)
    activity_level: ActivityLevel | None = None
    sleep_hours: float | None = Field(default=None, ge=4, le=10)

    @field_validator("conditions", mode="after")
    @classmethod
    def _dedupe_conditions(
        cls, value: tuple[Condition, ...]
    ) -> tuple[Condition, ...]:
        return tuple(dict.fromkeys(value))

    @model_validator(mode="before")
    @classmethod
    def _derive_fields(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        derived = dict(data)
        conditions = derived.get("conditions") or ()
        derived["weight_loss_goal"] = any(
            str(item) == Condition.WEIGHT_LOSS_GOAL.value for item in conditions
        )
        derived["bmi"] = compute_bmi(
            _as_float(derived.get("current_weight")),
            _as_float(derived.get("height")),
        )
        return derived

    def has_condition(self, condition: Condition) -> bool:
        """Return whether the profile lists the condition."""
        return condition in self.conditions


def _as_float(value: object) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None
