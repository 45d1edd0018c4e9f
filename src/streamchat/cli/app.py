"""Main CLI application using Typer."""
import asyncio

import typer
from dotenv import load_dotenv
from rich.console import Console

from ..llm.providers import DEFAULT_MODEL
from ..ui import run_textual_tui
from .providers import get_log_level, get_provider

# Load environment variables
load_dotenv()

# Create Typer app
app = typer.Typer(
    name="streamchat",
    help="Terminal chat with a local Ollama model, streamed live",
    add_completion=False,
)

# Console for rich output
console = Console()


@app.command()
def chat(
    model: str = typer.Argument(
        DEFAULT_MODEL,
        help="Model to chat with"
    )
):
    """Chat with a local model. Enter sends, PgUp/PgDn scroll, Esc quits."""
    provider = get_provider(model, console)
    log_level = get_log_level(console)

    try:
        return_code = asyncio.run(run_textual_tui(provider, model, log_level=log_level))
    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)

    if return_code:
        raise typer.Exit(code=return_code)


if __name__ == "__main__":
    app()
