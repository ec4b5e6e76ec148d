"""Gateway between domain state and the generative service."""

import base64
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Protocol, TypeVar
from urllib.parse import quote

from pydantic import TypeAdapter

from sehat_sense.domain.analysis import FoodAnalysis
from sehat_sense.domain.chat import ChatMessage, Sender
from sehat_sense.domain.conditions import derive_conditions
from sehat_sense.domain.errors import ExtractionError, ParseError
from sehat_sense.domain.profile import UserProfile
from sehat_sense.domain.reports import ReportAnalysis
from sehat_sense.domain.suggestions import (
    DrinkFilters,
    DrinkSuggestion,
    MealFilters,
    MealIdea,
    MealSuggestion,
)
from sehat_sense.services import prompts
from sehat_sense.services.parsing import parse_json_payload, parse_report_text

MAX_REPORT_BYTES = 5 * 1024 * 1024
DEFAULT_IMAGE_SEARCH_URL = "https://source.unsplash.com/500x300/?{query}"

_FOOD_ANALYSIS = TypeAdapter(FoodAnalysis)
_MEAL_IDEAS = TypeAdapter(list[MealIdea])
_DRINKS = TypeAdapter(list[DrinkSuggestion])

T = TypeVar("T")

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Attachment:
    """Inline binary attachment sent with a prompt."""

    data: bytes
    mime_type: str

    def base64(self) -> str:
        """Return the payload as base64 text."""
        return base64.b64encode(self.data).decode("utf-8")

    def data_url(self) -> str:
        """Return the payload as a data URL."""
        return f"data:{self.mime_type};base64,{self.base64()}"


@dataclass(frozen=True)
class ConversationTurn:
    """Prior chat turn replayed as history; role is ``user`` or ``model``."""

    role: str
    text: str


@dataclass(frozen=True)
class GenerationRequest:
    """A single request to the generative service."""

    model: str
    prompt: str
    attachment: Attachment | None = None
    system_instruction: str | None = None
    history: tuple[ConversationTurn, ...] = field(default_factory=tuple)


class GenerativeClient(Protocol):
    """Interface for the external text/multimodal generation service."""

    async def generate(self, request: GenerationRequest) -> str:
        """Return the text completion for a request.

        Transport and service failures are raised as ``ServiceUnavailable``.
        """


@dataclass
class HealthGateway:
    """Builds prompts from profile state and parses replies into models.

    Every operation is a single attempt; errors from the client propagate
    unchanged.
    """

    client: GenerativeClient
    model: str
    vision_model: str
    image_search_url: str = DEFAULT_IMAGE_SEARCH_URL

    async def analyze_report(
        self, data: bytes, mime_type: str | None = None
    ) -> ReportAnalysis:
        """Extract lab values from a report image or PDF."""
        if not data:
            raise ExtractionError("Report file is empty")
        if len(data) >= MAX_REPORT_BYTES:
            raise ExtractionError("Report file must be smaller than 5MB")
        attachment = Attachment(
            data=data, mime_type=mime_type or sniff_mime_type(data)
        )
        text = await self.client.generate(
            GenerationRequest(
                model=self.vision_model,
                prompt=prompts.REPORT_PROMPT,
                attachment=attachment,
            )
        )
        report_data = parse_report_text(text)
        if not report_data.present():
            _logger.warning("Report extraction found no values: raw=%r", text)
            raise ExtractionError(
                "Could not read report. Please upload a clearer image or enter "
                "manually."
            )
        return ReportAnalysis(
            report_data=report_data, conditions=derive_conditions(report_data)
        )

    async def analyze_food(
        self, description: str, profile: UserProfile
    ) -> FoodAnalysis:
        """Analyze a free-text meal description against the profile."""
        text = await self._generate(prompts.food_analysis_prompt(description, profile))
        return self._parse(text, "{", _FOOD_ANALYSIS, action="food analysis")

    async def generate_meal_ideas(
        self, profile: UserProfile, filters: MealFilters | None = None
    ) -> list[MealSuggestion]:
        """Suggest meals for the profile, each with an image URL."""
        prompt = prompts.meal_ideas_prompt(profile, filters or MealFilters())
        text = await self._generate(prompt)
        ideas = self._parse(text, "[", _MEAL_IDEAS, action="meal ideas")
        _check_count(ideas, prompts.MEAL_IDEA_COUNT, text, action="meal ideas")
        return [
            MealSuggestion(
                **idea.model_dump(),
                image=self.image_url(idea.image_search_term),
            )
            for idea in ideas
        ]

    async def generate_drink_suggestions(
        self, profile: UserProfile, filters: DrinkFilters | None = None
    ) -> list[DrinkSuggestion]:
        """Suggest healthy drinks for the profile."""
        prompt = prompts.drink_suggestions_prompt(profile, filters or DrinkFilters())
        text = await self._generate(prompt)
        drinks = self._parse(text, "[", _DRINKS, action="drink suggestions")
        _check_count(drinks, prompts.DRINK_COUNT, text, action="drink suggestions")
        return drinks

    async def chat_response(
        self,
        message: str,
        profile: UserProfile,
        history: Sequence[ChatMessage] = (),
    ) -> str:
        """Reply to a chat message as the health coach; returns raw text."""
        turns = tuple(
            ConversationTurn(
                role="user" if item.sender is Sender.USER else "model",
                text=item.text,
            )
            for item in history
        )
        return await self.client.generate(
            GenerationRequest(
                model=self.model,
                prompt=message,
                system_instruction=prompts.coach_instruction(profile),
                history=turns,
            )
        )

    def image_url(self, search_term: str) -> str:
        """Turn an image search term into an image URL."""
        return self.image_search_url.format(query=quote(search_term, safe="!~*'()"))

    async def _generate(self, prompt: str) -> str:
        return await self.client.generate(
            GenerationRequest(model=self.model, prompt=prompt)
        )

    def _parse(
        self, text: str, opener: str, adapter: TypeAdapter[T], *, action: str
    ) -> T:
        try:
            return parse_json_payload(text, opener, adapter)
        except ParseError as exc:
            _logger.warning(
                "Failed to parse %s: %s raw=%r", action, exc, exc.raw_text
            )
            raise


def _check_count(
    items: Sequence[object], expected: int, text: str, *, action: str
) -> None:
    if not items:
        _logger.warning("Empty %s response: raw=%r", action, text)
        raise ParseError(f"Model returned no {action}", raw_text=text)
    if len(items) != expected:
        _logger.info("Expected %s %s, got %s", expected, action, len(items))


def sniff_mime_type(data: bytes) -> str:
    """Infer a report MIME type from file signatures."""
    if data.startswith(b"%PDF"):
        return "application/pdf"
    if data.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if data[:4] == b"RIFF" and data[8:12] == b"WEBP":
        return "image/webp"
    return "image/jpeg"
