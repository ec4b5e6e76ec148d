"""Analyze described meals and file them in the food log."""

from dataclasses import dataclass

from sehat_sense.domain.errors import ProfileMissingError, ProfileValidationError
from sehat_sense.domain.meals import LoggedMeal, MealType
from sehat_sense.services.gateway import HealthGateway
from sehat_sense.services.store import StateStore


@dataclass
class MealLoggingService:
    """Runs the analyzer flow: analyze, then log on success only."""

    gateway: HealthGateway
    store: StateStore

    async def analyze_and_log(
        self, description: str, meal_type: MealType = MealType.LUNCH
    ) -> LoggedMeal:
        """Analyze a meal description and add it to today's log."""
        name = description.strip()
        if not name:
            raise ProfileValidationError("Please describe your meal.")
        profile = self.store.profile
        if profile is None:
            raise ProfileMissingError("Cannot analyze food without a profile")
        analysis = await self.gateway.analyze_food(name, profile)
        meal = LoggedMeal.create(name=name, analysis=analysis, meal_type=meal_type)
        self.store.add_meal(meal)
        return meal
