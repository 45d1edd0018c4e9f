from collections.abc import AsyncIterator
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class StreamingResponse:
    """Wrapper for streaming chat responses that captures usage info.

    Acts as an async iterator for text chunks while storing token usage
    that becomes available at the end of the stream.

    Usage:
        stream = await provider.stream_chat(messages)
        async for chunk in stream:
            print(chunk, end="")
        # After iteration, usage is available
        print(stream.usage)  # {"prompt_tokens": 26, "completion_tokens": 298}
    """

    def __init__(self, async_iter: AsyncIterator[str]):
        """Initialize with an async iterator of text chunks.

        Args:
            async_iter: Async iterator yielding text chunks
        """
        self._iter = async_iter
        self._usage: dict[str, int] | None = None

    @property
    def usage(self) -> dict[str, int] | None:
        """Get token usage info (available after iteration completes)."""
        return self._usage

    def set_usage(self, usage: dict[str, int]) -> None:
        """Set token usage info (called by provider at end of stream)."""
        self._usage = usage

    def __aiter__(self) -> "StreamingResponse":
        return self

    async def __anext__(self) -> str:
        return await self._iter.__anext__()

    async def aclose(self) -> None:
        """Close the underlying generator, releasing its HTTP response."""
        aclose = getattr(self._iter, "aclose", None)
        if aclose is not None:
            await aclose()


class ChatMessage(BaseModel):
    """Represents a chat message in a conversation."""

    model_config = ConfigDict(frozen=True)

    role: str = Field(description="Role of the message sender: 'user' or 'assistant'")
    content: str = Field(description="Content of the message")


class ChatRequest(BaseModel):
    """Body of a streaming chat request."""

    model: str = Field(description="Model identifier known to the server")
    messages: list[ChatMessage] = Field(description="Full conversation context")
    stream: bool = Field(default=True, description="Ask the server to stream the reply")


class ChunkMessage(BaseModel):
    """Partial assistant message carried by one stream record."""

    model_config = ConfigDict(extra="ignore")

    role: str = "assistant"
    content: str = ""


class ChatChunk(BaseModel):
    """One newline-delimited JSON record of a streamed reply.

    Only the fields the client consumes are modelled; everything else the
    server sends (timings, context, ...) is ignored.
    """

    model_config = ConfigDict(extra="ignore")

    message: ChunkMessage | None = None
    done: bool = False
    error: str | None = None
    prompt_eval_count: int | None = None
    eval_count: int | None = None

    def usage(self) -> dict[str, Any] | None:
        """Token counts reported on the final record, if any."""
        if self.prompt_eval_count is None and self.eval_count is None:
            return None
        return {
            "prompt_tokens": self.prompt_eval_count or 0,
            "completion_tokens": self.eval_count or 0,
        }
