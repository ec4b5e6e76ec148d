"""Food analysis models returned by the generative service."""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ModelPayload(BaseModel):
    """Base for model-facing payloads: camelCase on the wire, frozen in memory."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )


class ImpactLevel(StrEnum):
    """Blood sugar impact level."""

    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"


class CholesterolEffect(StrEnum):
    """Effect of a meal on cholesterol."""

    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"


class BloodSugarImpact(ModelPayload):
    """Blood sugar assessment."""

    level: ImpactLevel
    explanation: str
    tip: str


class LiverHealth(ModelPayload):
    """Liver health assessment."""

    score: float = Field(ge=0, le=10)
    explanation: str
    tip: str


class CholesterolImpact(ModelPayload):
    """Cholesterol assessment."""

    effect: CholesterolEffect
    explanation: str
    tip: str


class WeightLossAlignment(ModelPayload):
    """How well a meal fits a weight-loss goal."""

    percentage: float = Field(ge=0, le=100)
    explanation: str
    tip: str


class FoodAnalysis(ModelPayload):
    """Condition-aware nutrition analysis of a described meal."""

    overall_score: int = Field(ge=0, le=100)
    calories: float = Field(ge=0)
    protein: float = Field(ge=0)
    carbs: float = Field(ge=0)
    fats: float = Field(ge=0)
    fiber: float = Field(ge=0)
    blood_sugar_impact: BloodSugarImpact
    liver_health: LiverHealth
    cholesterol_impact: CholesterolImpact
    weight_loss_alignment: WeightLossAlignment
    smart_suggestions: tuple[str, ...] = ()
