"""Domain models for logged meals."""

from datetime import datetime
from enum import StrEnum
from uuid import uuid4

from pydantic import AwareDatetime, BaseModel, ConfigDict

from sehat_sense.domain.analysis import FoodAnalysis


class MealType(StrEnum):
    """Meal slot of a logged meal."""

    BREAKFAST = "Breakfast"
    LUNCH = "Lunch"
    DINNER = "Dinner"
    SNACK = "Snack"


class LoggedMeal(BaseModel):
    """A described meal with its analysis; immutable once created."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    timestamp: AwareDatetime
    meal_type: MealType = MealType.LUNCH
    analysis: FoodAnalysis

    @classmethod
    def create(
        cls,
        name: str,
        analysis: FoodAnalysis,
        meal_type: MealType = MealType.LUNCH,
        now: datetime | None = None,
    ) -> "LoggedMeal":
        """Create a new meal stamped with the current time."""
        return cls(
            id=uuid4().hex,
            name=name,
            timestamp=now or datetime.now().astimezone(),
            meal_type=meal_type,
            analysis=analysis,
        )


FoodLog = dict[str, tuple[LoggedMeal, ...]]
