"""Chat transcript models."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from uuid import uuid4


class Sender(StrEnum):
    """Author of a chat message."""

    USER = "user"
    AI = "ai"


@dataclass(frozen=True)
class ChatMessage:
    """A single chat message, kept only for the active session."""

    sender: Sender
    text: str
    id: str = field(default_factory=lambda: uuid4().hex)
    timestamp: datetime = field(default_factory=lambda: datetime.now().astimezone())
