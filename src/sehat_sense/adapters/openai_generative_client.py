"""OpenAI Responses API client for text and multimodal generation."""

import logging
from dataclasses import dataclass

import openai
from openai import AsyncOpenAI

from sehat_sense.domain.errors import ServiceUnavailable
from sehat_sense.services.gateway import (
    Attachment,
    GenerationRequest,
    GenerativeClient,
)

_ROLES = {"user": "user", "model": "assistant"}

_logger = logging.getLogger(__name__)


@dataclass
class OpenAIGenerativeClient(GenerativeClient):
    """Generative client backed by OpenAI Responses API."""

    client: AsyncOpenAI
    store: bool = False

    @classmethod
    def create(cls, api_key: str, store: bool = False) -> "OpenAIGenerativeClient":
        """Create an OpenAI generative client."""
        return cls(client=AsyncOpenAI(api_key=api_key, max_retries=0), store=store)

    async def generate(self, request: GenerationRequest) -> str:
        """Call OpenAI Responses API and return the output text."""
        request_payload: dict[str, object] = {
            "model": request.model,
            "input": _build_input(request),
            "store": self.store,
        }
        if request.system_instruction:
            request_payload["instructions"] = request.system_instruction

        try:
            response = await self.client.responses.create(**request_payload)
        except openai.OpenAIError as exc:
            _logger.warning("OpenAI request failed: %s", exc)
            raise ServiceUnavailable(f"OpenAI request failed: {exc}") from exc
        output_text = response.output_text
        if not output_text:
            raise ServiceUnavailable("OpenAI returned an empty response")
        return output_text

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.client.close()


def _build_input(request: GenerationRequest) -> list[dict[str, object]]:
    messages: list[dict[str, object]] = [
        {"role": _ROLES.get(turn.role, "user"), "content": turn.text}
        for turn in request.history
    ]
    content: list[dict[str, object]] = [{"type": "input_text", "text": request.prompt}]
    if request.attachment is not None:
        content.append(_attachment_part(request.attachment))
    messages.append({"role": "user", "content": content})
    return messages


def _attachment_part(attachment: Attachment) -> dict[str, object]:
    if attachment.mime_type.startswith("image/"):
        return {"type": "input_image", "image_url": attachment.data_url()}
    return {
        "type": "input_file",
        "filename": "report.pdf",
        "file_data": attachment.data_url(),
    }
