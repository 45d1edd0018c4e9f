"""Conversation transcript.

The transcript is owned by the render loop. Background stream tasks never
touch it; they only produce updates that the loop applies here.
"""

from ..llm.models import ChatMessage
from .models import Fragment, Message, Role, TurnEnded, Update


class Transcript:
    """Ordered, role-tagged conversation history.

    Append-only, except that the single in-progress assistant reply grows in
    place as fragments for the active turn arrive.
    """

    def __init__(self) -> None:
        self._messages: list[Message] = []
        self._active_index: int | None = None
        self._active_turn: int | None = None
        self._last_turn = 0

    def __len__(self) -> int:
        return len(self._messages)

    @property
    def messages(self) -> tuple[Message, ...]:
        return tuple(self._messages)

    @property
    def active_turn(self) -> int | None:
        """Turn id of the reply currently receiving fragments, if any."""
        return self._active_turn

    @property
    def in_progress(self) -> bool:
        return self._active_turn is not None

    def append(self, role: Role, initial_content: str = "") -> int:
        """Append a finished message and return its index."""
        self._messages.append(Message(role=Role(role), content=initial_content))
        return len(self._messages) - 1

    def start_reply(self) -> int:
        """Append an empty assistant placeholder and make it the active turn.

        A reply that was still in progress is marked done; any fragments it
        still receives are discarded by the turn id check.

        Returns:
            The new turn id
        """
        if self._active_index is not None:
            self._messages[self._active_index].done = True

        self._last_turn += 1
        self._messages.append(
            Message(role=Role.ASSISTANT, turn_id=self._last_turn, done=False)
        )
        self._active_index = len(self._messages) - 1
        self._active_turn = self._last_turn
        return self._last_turn

    def append_fragment(self, fragment: Fragment) -> bool:
        """Grow the active reply by one fragment.

        Returns:
            True if applied, False if no reply is in progress for the
            fragment's turn (the fragment is dropped)
        """
        if self._active_index is None or fragment.turn_id != self._active_turn:
            return False
        self._messages[self._active_index].content += fragment.text
        return True

    def finish_turn(self, turn_id: int, error: str | None = None) -> bool:
        """Mark the active reply as terminated, optionally with an error."""
        if self._active_index is None or turn_id != self._active_turn:
            return False
        message = self._messages[self._active_index]
        message.done = True
        message.error = error
        self._active_index = None
        self._active_turn = None
        return True

    def apply(self, update: Update) -> bool:
        if isinstance(update, Fragment):
            return self.append_fragment(update)
        if isinstance(update, TurnEnded):
            return self.finish_turn(update.turn_id, update.error)
        raise TypeError(f"Unknown transcript update: {update!r}")

    def render_as_text(self) -> list[str]:
        """Flatten the conversation into display lines.

        Each message renders as ``"{role}: {content}"``; multi-line content
        continues on following lines. A failed reply gets an extra
        ``[error]`` line.
        """
        blocks = []
        for message in self._messages:
            blocks.append(f"{message.role.value}: {message.content}")
            if message.error:
                blocks.append(f"  [error] {message.error}")
        return "\n".join(blocks).splitlines()

    def snapshot(self) -> tuple[ChatMessage, ...]:
        """Immutable copy of the conversation, as sent to the server."""
        return tuple(
            ChatMessage(role=message.role.value, content=message.content)
            for message in self._messages
        )

    def last_reply(self) -> str | None:
        """Text of the most recent assistant reply."""
        for message in reversed(self._messages):
            if message.role is Role.ASSISTANT:
                return message.content
        return None
