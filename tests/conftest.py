"""Pytest configuration and shared fixtures."""
import asyncio
import os
from collections.abc import Sequence
from typing import Any

import pytest

from streamchat.chat import Transcript, UpdateChannel
from streamchat.llm import ChatMessage, ChatProvider, StreamingResponse


class FakeProvider(ChatProvider):
    """Provider that replays canned chunks instead of calling a server."""

    def __init__(
        self,
        chunks: Sequence[str] = (),
        error: Exception | None = None,
        usage: dict[str, int] | None = None,
        delay: float = 0.0,
    ) -> None:
        self.chunks = list(chunks)
        self.error = error
        self.usage = usage
        self.delay = delay
        self.requests: list[tuple[tuple[ChatMessage, ...], str | None]] = []
        self.closed = False

    async def stream_chat(
        self,
        messages: Sequence[ChatMessage],
        model: str | None = None,
        **kwargs: Any
    ) -> StreamingResponse:
        self.requests.append((tuple(messages), model))
        stream = StreamingResponse(self._generate(lambda usage: stream.set_usage(usage)))
        return stream

    async def _generate(self, on_usage):
        for chunk in self.chunks:
            if self.delay:
                await asyncio.sleep(self.delay)
            yield chunk
        if self.error is not None:
            raise self.error
        if self.usage is not None:
            on_usage(self.usage)

    async def close(self) -> None:
        self.closed = True


@pytest.fixture(scope="session")
def ollama_host():
    """Return the Ollama host for integration tests."""
    return os.getenv("OLLAMA_HOST", "http://localhost:11434")


@pytest.fixture
def make_provider():
    """Factory for fake providers with canned replies."""
    return FakeProvider


@pytest.fixture
def transcript():
    return Transcript()


@pytest.fixture
def channel():
    return UpdateChannel()
