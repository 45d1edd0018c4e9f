"""Theme definitions for the TUI.

This module hides the design decisions about:
- Color palettes and visual appearance
- Theme variables (borders, scrollbars, footer)

To add a new theme, define it here and register in the app.
"""

from textual.theme import Theme

# Warm low-contrast palette for long reading sessions
EMBER_DARK = Theme(
    name="ember-dark",
    primary="#83a598",      # Aqua blue - history panel
    secondary="#d3869b",    # Rose - input panel
    accent="#fabd2f",       # Yellow - streaming highlight
    foreground="#ebdbb2",   # Cream text
    background="#1d2021",   # Hard dark background
    success="#b8bb26",      # Green
    warning="#fe8019",      # Orange - log panel
    error="#fb4934",        # Red
    surface="#282828",      # Main surface
    panel="#232627",        # Panel backgrounds
    dark=True,
    variables={
        "border": "#504945",
        "border-blurred": "#3c3836",

        "scrollbar": "#3c3836",
        "scrollbar-hover": "#504945",
        "scrollbar-active": "#83a598",
        "scrollbar-background": "#232627",

        "footer-foreground": "#d5c4a1",
        "footer-background": "#1d2021",
        "footer-key-foreground": "#fabd2f",
        "footer-key-background": "#3c3836",
        "footer-description-foreground": "#bdae93",

        "text-muted": "#928374",
        "text-disabled": "#504945",
    },
)
