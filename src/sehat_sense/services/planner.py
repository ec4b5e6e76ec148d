"""Meal and drink planning for the current profile."""

from dataclasses import dataclass

from sehat_sense.domain.errors import ProfileMissingError
from sehat_sense.domain.profile import UserProfile
from sehat_sense.domain.suggestions import (
    DrinkFilters,
    DrinkSuggestion,
    MealFilters,
    MealSuggestion,
)
from sehat_sense.services.gateway import HealthGateway
from sehat_sense.services.store import StateStore


@dataclass
class PlannerService:
    """Profile-bound wrappers over the suggestion operations."""

    gateway: HealthGateway
    store: StateStore

    async def meal_ideas(
        self, filters: MealFilters | None = None
    ) -> list[MealSuggestion]:
        """Return personalized meal ideas."""
        return await self.gateway.generate_meal_ideas(self._profile(), filters)

    async def drinks(
        self, filters: DrinkFilters | None = None
    ) -> list[DrinkSuggestion]:
        """Return personalized drink suggestions."""
        return await self.gateway.generate_drink_suggestions(self._profile(), filters)

    def _profile(self) -> UserProfile:
        profile = self.store.profile
        if profile is None:
            raise ProfileMissingError("Cannot plan meals without a profile")
        return profile
