"""Terminal UI module for streamchat.

Provides a Textual-based TUI for streaming chat.

Module structure (Parnas principle - each module hides a design decision):
- models.py: UI state (input buffer, scroll offset, loop lifecycle)
- input_handler.py: Key event to UI action translation
- session.py: Render loop state machine (owns the transcript)
- widgets.py: Custom widgets (history window, input line, status, log)
- styles.py: CSS styling (layout decisions)
- themes.py: Color palettes and theme configuration
- app.py: Application orchestration (tick, keys, stream workers)
"""

from .app import StreamChatApp, run_textual_tui
from .config import LogLevel
from .input_handler import KeyAction, UIAction, translate_key
from .models import LoopState, UIState
from .session import ChatSession
from .widgets import ChatHistoryPanel, DebugPanel, InputPanel, StatusPanel

__all__ = [
    "ChatHistoryPanel",
    "ChatSession",
    "DebugPanel",
    "InputPanel",
    "KeyAction",
    "LogLevel",
    "LoopState",
    "StatusPanel",
    "StreamChatApp",
    "UIAction",
    "UIState",
    "run_textual_tui",
    "translate_key",
]
