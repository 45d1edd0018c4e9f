"""Render loop state machine.

Hides the orchestration decisions of the chat loop: who owns the
transcript, how a submit becomes a turn, how streamed updates are applied
and which slice of the history is visible. The Textual app drives it; the
session itself never touches the terminal or the network.
"""

from ..chat.channel import UpdateChannel
from ..chat.models import PendingTurn, Role, TurnEnded
from ..chat.transcript import Transcript
from .config import SCROLL_STEP
from .input_handler import KeyAction, UIAction
from .models import LoopState, UIState


class ChatSession:
    """Owns the transcript and UI state for one run of the chat loop.

    Example:
        session = ChatSession(model="llama3.2")
        turn = session.dispatch(KeyAction(UIAction.SUBMIT))
        # ... hand `turn` to a StreamingClient bound to session.channel
        session.drain()  # apply whatever has streamed in so far
    """

    def __init__(
        self,
        model: str,
        channel: UpdateChannel | None = None,
        scroll_step: int = SCROLL_STEP,
    ) -> None:
        self.model = model
        self.channel = channel or UpdateChannel()
        self.transcript = Transcript()
        self.ui = UIState()
        self.state = LoopState.RUNNING
        self.turns = 0
        self.prompt_tokens = 0
        self.completion_tokens = 0
        self._scroll_step = scroll_step
        self._closed = False

    @property
    def running(self) -> bool:
        return self.state is LoopState.RUNNING

    @property
    def busy(self) -> bool:
        """True while a reply is still streaming in."""
        return self.transcript.in_progress

    def dispatch(self, action: KeyAction) -> PendingTurn | None:
        """Apply one UI action.

        Returns:
            The turn to stream if the action submitted one, else None
        """
        if action.kind is UIAction.INSERT:
            self.ui.insert(action.char)
        elif action.kind is UIAction.DELETE:
            self.ui.delete()
        elif action.kind is UIAction.SCROLL_UP:
            self.ui.scroll_up(self._scroll_step)
        elif action.kind is UIAction.SCROLL_DOWN:
            self.ui.scroll_down(self._scroll_step)
        elif action.kind is UIAction.QUIT:
            self.state = LoopState.TERMINATING
        elif action.kind is UIAction.SUBMIT:
            return self.submit()
        return None

    def submit(self) -> PendingTurn | None:
        """Turn the input buffer into a user message and a reply placeholder.

        Empty input is ignored, and so is a submit while a reply is still
        streaming; in that case the buffer is kept for later.
        """
        if not self.ui.input_buffer or self.busy:
            return None

        self.transcript.append(Role.USER, self.ui.take_input())
        # Snapshot before the placeholder: the request carries what was said so far.
        snapshot = self.transcript.snapshot()
        turn_id = self.transcript.start_reply()
        self.turns += 1
        return PendingTurn(turn_id=turn_id, model=self.model, snapshot=snapshot)

    def drain(self) -> int:
        """Apply every pending update to the transcript.

        Returns:
            Number of updates taken off the channel
        """
        updates = self.channel.drain()
        for update in updates:
            applied = self.transcript.apply(update)
            if applied and isinstance(update, TurnEnded) and update.usage:
                self.prompt_tokens += update.usage.get("prompt_tokens", 0)
                self.completion_tokens += update.usage.get("completion_tokens", 0)
        return len(updates)

    def visible_lines(self) -> list[str]:
        """History lines from the scroll offset down.

        The offset is clamped to the line count, so scrolling past the end
        shows an empty window.
        """
        lines = self.transcript.render_as_text()
        start = min(self.ui.scroll_offset, len(lines))
        return lines[start:]

    def close(self) -> bool:
        """Stop consuming updates; stream tasks still running see a closed channel.

        Returns:
            False if the session was already closed
        """
        if self._closed:
            return False
        self._closed = True
        self.state = LoopState.TERMINATING
        self.channel.close()
        return True
