"""Custom Textual widgets for the TUI.

Hides widget implementation details:
- History window rendering
- Input line and cursor drawing
- Status display formatting
- Log rendering and level filtering
"""

from datetime import datetime

from rich.text import Text
from textual.events import Click
from textual.widgets import RichLog, Static

from .config import HISTORY_TITLE, INPUT_TITLE, LOG_TIMESTAMP_FORMAT, LogLevel


class ChatHistoryPanel(Static):
    """Conversation window; shows the history lines it is given, wrapped."""

    BORDER_TITLE = HISTORY_TITLE

    def show_lines(self, lines: list[str], message_count: int) -> None:
        """Redraw the visible history window."""
        # Plain Text so model output is never parsed as markup
        self.update(Text("\n".join(lines)))
        self.border_subtitle = f"{message_count} messages | PgUp/PgDn to scroll"


class InputPanel(Static):
    """Single input line with a block cursor after the text."""

    BORDER_TITLE = INPUT_TITLE

    def show_input(self, buffer: str, busy: bool = False) -> None:
        text = Text(buffer)
        text.append(" ", style="reverse")
        self.update(text)
        self.border_subtitle = "Waiting for reply..." if busy else "Enter to send"


class StatusPanel(Static):
    """One-line status bar: model, turns, streaming state and token usage."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._model = ""
        self._turns = 0
        self._streaming = False
        self._prompt_tokens = 0
        self._completion_tokens = 0

    def on_mount(self) -> None:
        self._update_display()

    def update_status(
        self,
        model: str,
        turns: int = 0,
        streaming: bool = False,
        prompt_tokens: int = 0,
        completion_tokens: int = 0,
    ) -> None:
        """Update the status display.

        Args:
            model: Model the chat is talking to
            turns: Number of turns submitted so far
            streaming: Whether a reply is currently streaming in
            prompt_tokens: Total prompt tokens reported by the server
            completion_tokens: Total completion tokens reported by the server
        """
        self._model = model
        self._turns = turns
        self._streaming = streaming
        self._prompt_tokens = prompt_tokens
        self._completion_tokens = completion_tokens
        self._update_display()

    def _update_display(self) -> None:
        state = "[bold yellow]streaming[/]" if self._streaming else "[green]idle[/]"
        total = self._prompt_tokens + self._completion_tokens
        parts = [
            f"[bold cyan]Model:[/] {self._model}",
            f"[bold green]Turns:[/] {self._turns}",
            f"[bold magenta]Tokens:[/] {total:,} "
            f"[dim]({self._prompt_tokens:,}/{self._completion_tokens:,})[/]",
            state,
        ]
        self.update("  ".join(parts))


class DebugPanel(RichLog):
    """Log panel for real-time tracing with level filtering.

    Shows timestamped log messages from all components.
    Supports standard log levels: DEBUG < INFO < WARNING < ERROR.
    Hidden by default, shown with STREAMCHAT_LOG_LEVEL or toggled with Ctrl+D.
    """

    BORDER_TITLE = "Log"
    BORDER_SUBTITLE = "Trace log"

    LEVEL_COLORS = {
        LogLevel.DEBUG: "dim white",
        LogLevel.INFO: "cyan",
        LogLevel.WARNING: "yellow",
        LogLevel.ERROR: "red",
    }

    COMPONENT_COLORS = {
        "TUI": "cyan",
        "STREAM": "green",
    }

    def __init__(self, *args, log_level: int = LogLevel.DEBUG, **kwargs) -> None:
        super().__init__(
            *args,
            markup=True,
            highlight=False,
            auto_scroll=True,
            wrap=False,
            **kwargs
        )
        self._log_level = log_level
        self.display = False

    @property
    def log_level(self) -> int:
        """Current log level threshold."""
        return self._log_level

    @log_level.setter
    def log_level(self, level: int) -> None:
        self._log_level = level
        self._update_subtitle()

    def _update_subtitle(self) -> None:
        if self.display:
            self.border_subtitle = f"Level: {LogLevel.name(self._log_level)}"
        else:
            self.border_subtitle = "Hidden"

    def write_entry(
        self,
        component: str,
        message: str,
        level: int = LogLevel.DEBUG
    ) -> None:
        """Add a log entry if it meets the current level threshold.

        Args:
            component: Component name (TUI, STREAM)
            message: Log message
            level: Log level (LogLevel.DEBUG, INFO, WARNING, ERROR)
        """
        if level < self._log_level:
            return

        timestamp = datetime.now().strftime(LOG_TIMESTAMP_FORMAT)
        level_color = self.LEVEL_COLORS.get(level, "white")
        comp_color = self.COMPONENT_COLORS.get(component, "white")

        line = Text.from_markup(
            f"[dim]{timestamp}[/] "
            f"[{level_color}]{LogLevel.name(level):<5}[/] "
            f"[{comp_color}]\\[{component}][/] "
        )
        line.append(message)
        self.write(line)

    def info(self, component: str, message: str) -> None:
        self.write_entry(component, message, LogLevel.INFO)

    def show(self) -> None:
        self.display = True
        self._update_subtitle()

    def hide(self) -> None:
        self.display = False
        self.border_subtitle = "Hidden"

    def toggle(self) -> bool:
        """Toggle visibility. Returns new state."""
        if self.display:
            self.hide()
            return False
        self.show()
        return True

    def get_plain_text(self) -> str:
        """Get plain text content of the log for copying."""
        return "\n".join(line.text for line in self.lines)

    def on_click(self, event: Click) -> None:
        """Copy log content to clipboard when clicked."""
        event.stop()
        text = self.get_plain_text()
        if not text.strip():
            self.app.notify("Log is empty", timeout=2)
            return
        copy_text(self.app, text, "Log copied")


def copy_text(app, text: str, notice: str) -> None:
    """Copy to the system clipboard, falling back to the terminal (OSC 52)."""
    try:
        import pyperclip
        pyperclip.copy(text)
        app.notify(notice, timeout=2)
    except Exception:
        app.copy_to_clipboard(text)
        app.notify(f"{notice} (terminal)", timeout=2)
