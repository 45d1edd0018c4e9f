"""Tests for the command line entry point."""
import importlib

import pytest
from typer.testing import CliRunner

from streamchat.llm import OllamaProvider

cli_module = importlib.import_module("streamchat.cli.app")

runner = CliRunner()


@pytest.fixture
def launched(monkeypatch):
    """Replace the TUI with a recorder so commands run headless."""
    for name in ("OLLAMA_HOST", "STREAMCHAT_CONNECT_TIMEOUT", "STREAMCHAT_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)

    calls = []
    result = {"return_code": 0, "error": None}

    async def fake_run(provider, model, log_level=None):
        calls.append({"provider": provider, "model": model, "log_level": log_level})
        await provider.close()
        if result["error"] is not None:
            raise result["error"]
        return result["return_code"]

    monkeypatch.setattr(cli_module, "run_textual_tui", fake_run)
    return calls, result


class TestChatCommand:
    """Tests for the chat command."""

    def test_default_model(self, launched):
        calls, _ = launched
        outcome = runner.invoke(cli_module.app, [])

        assert outcome.exit_code == 0
        assert calls[0]["model"] == "llama3.2"
        assert calls[0]["log_level"] is None

        provider = calls[0]["provider"]
        assert isinstance(provider, OllamaProvider)
        assert provider.host == "http://localhost:11434"
        assert provider.model == "llama3.2"

    def test_positional_model(self, launched):
        calls, _ = launched
        outcome = runner.invoke(cli_module.app, ["mistral"])

        assert outcome.exit_code == 0
        assert calls[0]["model"] == "mistral"
        assert calls[0]["provider"].model == "mistral"

    def test_host_from_environment(self, launched, monkeypatch):
        calls, _ = launched
        monkeypatch.setenv("OLLAMA_HOST", "gpu-box:11434")

        outcome = runner.invoke(cli_module.app, [])

        assert outcome.exit_code == 0
        assert calls[0]["provider"].host == "http://gpu-box:11434"

    def test_invalid_connect_timeout_exits(self, launched, monkeypatch):
        calls, _ = launched
        monkeypatch.setenv("STREAMCHAT_CONNECT_TIMEOUT", "soon")

        outcome = runner.invoke(cli_module.app, [])

        assert outcome.exit_code == 1
        assert calls == []

    def test_nonzero_return_code_is_propagated(self, launched):
        _, result = launched
        result["return_code"] = 3

        outcome = runner.invoke(cli_module.app, [])

        assert outcome.exit_code == 3

    def test_failure_is_reported(self, launched):
        _, result = launched
        result["error"] = RuntimeError("terminal unavailable")

        outcome = runner.invoke(cli_module.app, [])

        assert outcome.exit_code == 1
        assert "Error" in outcome.output


class TestLogLevel:
    """Tests for STREAMCHAT_LOG_LEVEL handling."""

    def test_level_is_lowercased(self, launched, monkeypatch):
        calls, _ = launched
        monkeypatch.setenv("STREAMCHAT_LOG_LEVEL", "INFO")

        runner.invoke(cli_module.app, [])

        assert calls[0]["log_level"] == "info"

    def test_unknown_level_falls_back_to_debug(self, launched, monkeypatch):
        calls, _ = launched
        monkeypatch.setenv("STREAMCHAT_LOG_LEVEL", "chatty")

        outcome = runner.invoke(cli_module.app, [])

        assert calls[0]["log_level"] == "debug"
        assert "Warning" in outcome.output
