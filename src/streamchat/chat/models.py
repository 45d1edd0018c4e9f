"""Data models for the conversation core.

Hides the in-memory representation of messages and of the updates that
flow from a streaming turn back to the render loop.
"""

from dataclasses import dataclass
from enum import Enum

from ..llm.models import ChatMessage


class Role(str, Enum):
    """Who said a message."""

    USER = "user"
    ASSISTANT = "assistant"


@dataclass
class Message:
    """A message in the transcript.

    Assistant replies start empty and only ever grow by appending while
    ``done`` is False.
    """

    role: Role
    content: str = ""
    turn_id: int | None = None
    done: bool = True
    error: str | None = None

    @property
    def in_progress(self) -> bool:
        return not self.done


@dataclass(frozen=True)
class Fragment:
    """An incremental piece of a reply, tagged with the turn it belongs to."""

    turn_id: int
    text: str


@dataclass(frozen=True)
class TurnEnded:
    """Completion marker sent after the last fragment of a turn."""

    turn_id: int
    error: str | None = None
    usage: dict[str, int] | None = None


Update = Fragment | TurnEnded


@dataclass(frozen=True)
class PendingTurn:
    """A submitted turn waiting for its reply to be streamed."""

    turn_id: int
    model: str
    snapshot: tuple[ChatMessage, ...]
