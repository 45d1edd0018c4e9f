"""Provider factory functions for CLI.

Centralizes creation of the chat provider and UI settings from environment
variables. Hides configuration details from the command implementation.
"""

import os
from typing import Any

from rich.console import Console

from ..llm import create_chat_provider
from ..llm.providers import DEFAULT_OLLAMA_HOST
from ..ui.config import LogLevel

# Default console for output
_console = Console()


def get_provider(model: str, console: Console | None = None) -> Any:
    """Create the chat provider from environment variables.

    Args:
        model: Default model for the provider
        console: Optional Rich console for output

    Returns:
        Ollama chat provider instance

    Raises:
        SystemExit: If STREAMCHAT_CONNECT_TIMEOUT is not a number

    Environment variables:
        OLLAMA_HOST: Server base URL (default: http://localhost:11434)
        STREAMCHAT_CONNECT_TIMEOUT: Seconds to establish a connection (default: 10)
    """
    import typer

    con = console or _console
    host = os.getenv("OLLAMA_HOST", DEFAULT_OLLAMA_HOST)
    if "://" not in host:
        host = f"http://{host}"

    raw_timeout = os.getenv("STREAMCHAT_CONNECT_TIMEOUT", "10")
    try:
        connect_timeout = float(raw_timeout)
    except ValueError:
        con.print(f"[red]Error: STREAMCHAT_CONNECT_TIMEOUT must be a number, got {raw_timeout!r}[/red]")
        raise typer.Exit(code=1)

    return create_chat_provider(
        "ollama",
        host=host,
        model=model,
        connect_timeout=connect_timeout,
    )


def get_log_level(console: Console | None = None) -> str | None:
    """Read the log panel level from the environment.

    Returns:
        Level name, or None to keep the log panel hidden

    Environment variables:
        STREAMCHAT_LOG_LEVEL: debug, info, warning or error
    """
    con = console or _console
    level = os.getenv("STREAMCHAT_LOG_LEVEL")
    if not level:
        return None
    if not LogLevel.is_valid(level):
        con.print(f"[yellow]Warning: Unknown STREAMCHAT_LOG_LEVEL {level!r}, using debug[/yellow]")
        return "debug"
    return level.lower()
