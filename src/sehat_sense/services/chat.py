"""Ephemeral health coach chat session."""

import logging
from dataclasses import dataclass, field

from sehat_sense.domain.chat import ChatMessage, Sender
from sehat_sense.domain.errors import ProfileMissingError, ServiceUnavailable
from sehat_sense.services.gateway import HealthGateway
from sehat_sense.services.store import StateStore

CONNECTION_APOLOGY = "Sorry, I am having trouble connecting. Please try again."

_logger = logging.getLogger(__name__)


def greeting_for(conditions: str) -> str:
    """Opening message of a chat session."""
    return (
        f"Hi! I'm here to help with your {conditions}. Ask me anything about "
        "food, nutrition, or healthy habits 😊"
    )


@dataclass
class ChatSession:
    """Transcript of one chat session; never persisted."""

    gateway: HealthGateway
    store: StateStore
    messages: list[ChatMessage] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.messages:
            return
        profile = self.store.profile
        conditions = (
            ", ".join(c.spoken for c in profile.conditions) if profile else ""
        )
        self.messages.append(
            ChatMessage(sender=Sender.AI, text=greeting_for(conditions or "health"))
        )

    async def send(self, text: str) -> ChatMessage | None:
        """Send a user message and append the coach's reply.

        Blank messages are ignored. Service failures are logged and answered
        with an apology instead of a reply.
        """
        if not text.strip():
            return None
        profile = self.store.profile
        if profile is None:
            raise ProfileMissingError("Cannot chat without a profile")
        history = tuple(self.messages)
        self.messages.append(ChatMessage(sender=Sender.USER, text=text))
        try:
            reply_text = await self.gateway.chat_response(text, profile, history)
        except ServiceUnavailable:
            _logger.exception("Chat reply failed")
            reply_text = CONNECTION_APOLOGY
        reply = ChatMessage(sender=Sender.AI, text=reply_text)
        self.messages.append(reply)
        return reply
