"""Main Textual TUI application.

Drives the chat session: a timer tick drains streamed updates and redraws,
key events go through the input handler, and every submitted turn runs as
a supervised background worker.
"""

import asyncio
import contextlib

from textual import events, work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.css.query import NoMatches
from textual.widgets import Footer, Header
from textual.worker import Worker

from ..chat.client import StreamingClient
from ..chat.models import PendingTurn, TurnEnded
from ..llm.base import ChatProvider
from .config import TICK_INTERVAL, LogLevel
from .input_handler import KeyAction, UIAction, translate_key
from .session import ChatSession
from .styles import APP_CSS
from .themes import EMBER_DARK
from .widgets import ChatHistoryPanel, DebugPanel, InputPanel, StatusPanel, copy_text


class StreamChatApp(App):
    """Textual TUI for streaming chat with a local model server."""

    CSS = APP_CSS
    TITLE = "Streamchat"
    AUTO_FOCUS = None
    ENABLE_COMMAND_PALETTE = False

    BINDINGS = [
        Binding("escape", "chat_key('escape')", "Quit", priority=True),
        Binding("pageup", "chat_key('pageup')", "Scroll Up", priority=True),
        Binding("pagedown", "chat_key('pagedown')", "Scroll Down", priority=True),
        Binding("ctrl+r", "copy_last_response", "Copy Reply"),
        Binding("ctrl+d", "toggle_debug", "Log"),
    ]

    def __init__(
        self,
        provider: ChatProvider,
        model: str,
        log_level: str | None = None,
        tick_interval: float = TICK_INTERVAL,
    ) -> None:
        super().__init__()
        self._provider = provider
        self._log_level = log_level
        self._tick_interval = tick_interval
        self.session = ChatSession(model=model)
        self._client = StreamingClient(
            provider, self.session.channel, debug_callback=self._route_debug
        )
        self._stream_worker: Worker | None = None
        self._released = False

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        yield ChatHistoryPanel(id="chat-history")
        yield DebugPanel(id="debug-panel")
        yield InputPanel(id="chat-input")
        yield StatusPanel(id="status")
        yield Footer()

    def on_mount(self) -> None:
        """Called when app is mounted."""
        self.register_theme(EMBER_DARK)
        self.theme = "ember-dark"
        self.sub_title = self.session.model

        if self._log_level is not None:
            log_panel = self.query_one("#debug-panel", DebugPanel)
            log_panel.log_level = LogLevel.from_string(self._log_level)
            log_panel.show()
            log_panel.info("TUI", f"Log panel enabled with level: {self._log_level.upper()}")

        self.set_interval(self._tick_interval, self._tick)
        self._redraw()

    def on_unmount(self) -> None:
        """Stop the stream worker and close the session."""
        self._release_session()

    def _release_session(self) -> None:
        if self._released:
            return
        self._released = True
        if self._stream_worker is not None and self._stream_worker.is_running:
            self._stream_worker.cancel()
        self.session.close()

    def _route_debug(self, level: str, component: str, message: str) -> None:
        """Route debug messages from non-UI components to the log panel."""
        if self._released:
            return
        with contextlib.suppress(NoMatches):
            log_panel = self.query_one("#debug-panel", DebugPanel)
            log_panel.write_entry(component, message, LogLevel.from_string(level))

    def _tick(self) -> None:
        """Apply whatever has streamed in since the last tick."""
        if self.session.drain():
            self._redraw()

    def _redraw(self) -> None:
        session = self.session
        history = self.query_one("#chat-history", ChatHistoryPanel)
        history.show_lines(session.visible_lines(), len(session.transcript))
        history.set_class(session.busy, "streaming")
        self.query_one("#chat-input", InputPanel).show_input(
            session.ui.input_buffer, busy=session.busy
        )
        self.query_one("#status", StatusPanel).update_status(
            model=session.model,
            turns=session.turns,
            streaming=session.busy,
            prompt_tokens=session.prompt_tokens,
            completion_tokens=session.completion_tokens,
        )

    def on_key(self, event: events.Key) -> None:
        """Translate typing, backspace and enter into chat actions."""
        action = translate_key(event.key, event.character)
        if action is None:
            return
        event.stop()
        event.prevent_default()
        self._dispatch(action)

    def action_chat_key(self, key: str) -> None:
        """Handle keys bound with priority (escape, paging)."""
        action = translate_key(key)
        if action is not None:
            self._dispatch(action)

    def _dispatch(self, action: KeyAction) -> None:
        session = self.session
        if action.kind is UIAction.SUBMIT and session.busy and session.ui.input_buffer:
            self.notify("Still waiting for the previous reply", severity="warning", timeout=2)

        turn = session.dispatch(action)
        if not session.running:
            self._route_debug("info", "TUI", "Quit requested")
            self._release_session()
            self.exit()
            return

        if turn is not None:
            self._route_debug("debug", "TUI", f"Submitted turn {turn.turn_id}")
            self._stream_worker = self._stream_turn(turn)
        self._redraw()

    @work(group="stream", exit_on_error=False)
    async def _stream_turn(self, turn: PendingTurn) -> None:
        """Stream one turn as a background async worker."""
        try:
            await self._client.run_turn(turn)
        except Exception as e:
            self._route_debug("error", "TUI", f"Stream worker failed: {e}")
            self.session.channel.send(TurnEnded(turn_id=turn.turn_id, error=str(e)))

    def action_toggle_debug(self) -> None:
        """Toggle the log panel visibility."""
        log_panel = self.query_one("#debug-panel", DebugPanel)
        is_visible = log_panel.toggle()
        self.notify(f"Log panel {'shown' if is_visible else 'hidden'}", timeout=2)

    def action_copy_last_response(self) -> None:
        """Copy last assistant reply to clipboard."""
        reply = self.session.transcript.last_reply()
        if reply:
            copy_text(self, reply, "Reply copied")
        else:
            self.notify("No reply to copy", severity="warning")


async def run_textual_tui(
    provider: ChatProvider,
    model: str,
    log_level: str | None = None,
) -> int:
    """Run the Textual TUI.

    Textual acquires the terminal (alternate screen, raw input) and restores
    it on every exit path, including errors.

    Args:
        provider: Chat provider instance
        model: Model identifier sent with every turn
        log_level: Log level for panel (debug/info/warning/error), None to hide

    Returns:
        The app's return code (non-zero if it exited on an error)
    """
    app = StreamChatApp(provider=provider, model=model, log_level=log_level)
    async with provider:
        try:
            await app.run_async()
        except (KeyboardInterrupt, asyncio.CancelledError):
            pass
    return app.return_code or 0
