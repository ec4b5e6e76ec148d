"""Shared test fixtures."""

import json
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

import pytest

from sehat_sense.config import Settings
from sehat_sense.domain.analysis import FoodAnalysis
from sehat_sense.domain.conditions import Condition
from sehat_sense.domain.errors import ServiceUnavailable
from sehat_sense.domain.meals import LoggedMeal
from sehat_sense.domain.profile import UserProfile
from sehat_sense.services.gateway import (
    GenerationRequest,
    GenerativeClient,
    HealthGateway,
)
from sehat_sense.services.store import StateStorage, StateStore

IST = timezone(timedelta(hours=5, minutes=30))

FOOD_ANALYSIS_PAYLOAD: dict[str, object] = {
    "overallScore": 78,
    "calories": 420,
    "protein": 18,
    "carbs": 52,
    "fats": 12,
    "fiber": 8,
    "bloodSugarImpact": {
        "level": "moderate",
        "explanation": "Rice raises blood sugar moderately.",
        "tip": "Swap half the rice for dal.",
    },
    "liverHealth": {
        "score": 7,
        "explanation": "Low fat cooking.",
        "tip": "Use hung curd instead of paneer.",
    },
    "cholesterolImpact": {
        "effect": "neutral",
        "explanation": "No saturated fat detected.",
        "tip": "Add flax seeds.",
    },
    "weightLossAlignment": {
        "percentage": 80,
        "explanation": "Fits a 1500 calorie goal.",
        "tip": "Skip one roti.",
    },
    "smartSuggestions": ["Add cucumber salad.", "Drink water before meals."],
}


def meal_idea_payload(name: str = "Moong Dal Cheela") -> dict[str, object]:
    return {
        "name": name,
        "imageSearchTerm": "moong dal chilla",
        "description": "A savory pancake.",
        "healthScores": [{"condition": "bloodSugar", "score": 9}],
        "nutrition": {"calories": 180, "protein": 12, "carbs": 22, "fats": 5},
        "prepTime": "15 minutes",
        "difficulty": "Easy",
        "ingredients": ["1 cup moong dal", "1 onion"],
        "recipe": ["Grind dal.", "Cook like a pancake."],
        "whyItsGood": "Low glycemic index.",
    }


def drink_payload(name: str = "Amla-Ginger Shot") -> dict[str, object]:
    return {
        "name": name,
        "perfectFor": ["Fatty Liver"],
        "calories": 25,
        "sugar": "4g",
        "keyNutrients": "Vitamin C",
        "whyItWorks": "Amla supports liver detox.",
        "ingredients": ["2 amla", "1 inch ginger"],
        "prepTime": "5 mins",
        "bestTime": "Morning",
        "recipe": "Blend and strain.",
    }


@dataclass
class InMemoryStateStorage(StateStorage):
    """In-memory state storage for tests."""

    payload: dict[str, object] | None = None
    writes: int = 0
    fail_writes: bool = False

    def read(self) -> dict[str, object] | None:
        if self.payload is None:
            return None
        return json.loads(json.dumps(self.payload))

    def write(self, payload: dict[str, object]) -> None:
        if self.fail_writes:
            raise OSError("disk full")
        self.payload = json.loads(json.dumps(payload))
        self.writes += 1


@dataclass
class ScriptedGenerativeClient(GenerativeClient):
    """Generative client replaying queued replies and recording requests."""

    replies: list[str | Exception] = field(default_factory=list)
    requests: list[GenerationRequest] = field(default_factory=list)

    def queue(self, reply: str | Exception) -> None:
        self.replies.append(reply)

    async def generate(self, request: GenerationRequest) -> str:
        self.requests.append(request)
        if not self.replies:
            raise ServiceUnavailable("no scripted reply")
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


def make_meal(
    name: str = "Poha with peanuts",
    timestamp: datetime | None = None,
    score: int = 78,
) -> LoggedMeal:
    analysis = FoodAnalysis.model_validate(
        {**FOOD_ANALYSIS_PAYLOAD, "overallScore": score}
    )
    return LoggedMeal.create(
        name=name,
        analysis=analysis,
        now=timestamp or datetime(2024, 3, 10, 13, 0, tzinfo=IST),
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(openai_api_key="openai-key")


@pytest.fixture
def profile() -> UserProfile:
    return UserProfile(
        name="Asha",
        age=42,
        gender="female",
        conditions=[Condition.PREDIABETES, Condition.WEIGHT_LOSS_GOAL],
        dietary_preference="vegetarian",
        allergies=["peanuts"],
        current_weight=72,
        target_weight=65,
        height=160,
        water_intake=2,
        activity_level="light",
        sleep_hours=7,
    )


@pytest.fixture
def storage() -> InMemoryStateStorage:
    return InMemoryStateStorage()


@pytest.fixture
def store(storage: InMemoryStateStorage) -> StateStore:
    return StateStore.open(storage, timezone=IST)


@pytest.fixture
def client() -> ScriptedGenerativeClient:
    return ScriptedGenerativeClient()


@pytest.fixture
def gateway(client: ScriptedGenerativeClient) -> HealthGateway:
    return HealthGateway(client=client, model="text-model", vision_model="vision-model")
