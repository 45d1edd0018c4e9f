"""Data models for the TUI.

Hides the representation of editable UI state and of the loop lifecycle.
"""

from dataclasses import dataclass
from enum import Enum


class LoopState(str, Enum):
    """Lifecycle of the render loop."""

    RUNNING = "running"
    TERMINATING = "terminating"


@dataclass
class UIState:
    """Pending input text and how far the history is scrolled."""

    input_buffer: str = ""
    scroll_offset: int = 0

    def insert(self, char: str) -> None:
        self.input_buffer += char

    def delete(self) -> None:
        self.input_buffer = self.input_buffer[:-1]

    def scroll_up(self, step: int) -> None:
        self.scroll_offset = max(0, self.scroll_offset - step)

    def scroll_down(self, step: int) -> None:
        # Unbounded here; the visible window is clamped at draw time.
        self.scroll_offset += step

    def take_input(self) -> str:
        """Return the buffer contents and clear it."""
        text, self.input_buffer = self.input_buffer, ""
        return text
