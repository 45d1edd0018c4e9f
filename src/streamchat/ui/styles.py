"""CSS styles for the TUI.

Hides layout and styling decisions from the application logic.

Layout:
- Chat history takes four fifths of the body, the input line the rest
- The log panel, when shown, sits between history and input
- A one-line status bar above the footer
"""

APP_CSS = """
Screen {
    layout: vertical;
    background: $background;
}

#chat-history {
    height: 4fr;
    background: $panel;
    border: round $primary 60%;
    border-title-color: $primary;
    border-title-style: bold;
    border-title-align: left;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    padding: 0 1;
    overflow: hidden hidden;

    &.streaming {
        border: round $accent;
        border-title-color: $accent;
    }
}

#debug-panel {
    height: 2fr;
    background: $panel;
    border: round $warning 60%;
    border-title-color: $warning;
    border-title-style: bold;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    padding: 0 1;
    scrollbar-gutter: stable;
}

#chat-input {
    height: 1fr;
    min-height: 3;
    background: $surface;
    border: round $secondary 60%;
    border-title-color: $secondary;
    border-title-style: bold;
    border-title-align: left;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    padding: 0 1;
}

#status {
    height: 1;
    padding: 0 1;
    background: $surface;
    color: $text-muted;
}
"""
