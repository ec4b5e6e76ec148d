"""Persisted application state document."""

from pydantic import BaseModel, ConfigDict, Field

from sehat_sense.domain.meals import LoggedMeal
from sehat_sense.domain.profile import UserProfile


class AppState(BaseModel):
    """The whole durable payload: one profile and one food log."""

    model_config = ConfigDict(frozen=True)

    profile: UserProfile | None = None
    food_log: dict[str, tuple[LoggedMeal, ...]] = Field(default_factory=dict)
