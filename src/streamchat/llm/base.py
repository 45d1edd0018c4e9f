from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

from .models import ChatMessage, StreamingResponse


class ChatProviderError(Exception):
    """Base class for failures talking to a chat server."""


class ChatProvider(ABC):
    """Abstract base class for streaming chat providers.

    This module hides the design decision of which chat server is used.
    Implementations must handle provider-specific details like:
    - HTTP client setup and connection reuse
    - Request/response format conversion
    - Decoding of the incremental response body

    Supports async context manager protocol for proper resource cleanup:
        async with provider:
            stream = await provider.stream_chat(messages)
        # Automatically cleaned up
    """

    @abstractmethod
    async def stream_chat(
        self,
        messages: Sequence[ChatMessage],
        model: str | None = None,
        **kwargs: Any
    ) -> StreamingResponse:
        """Generate a streaming chat completion.

        Each call opens a new request; the returned stream is not restartable.

        Args:
            messages: Conversation history, replayed verbatim to the server
            model: Model to use (None uses provider's default)
            **kwargs: Provider-specific parameters

        Returns:
            StreamingResponse that yields text chunks and captures usage info.
            After iteration, access usage via stream_response.usage

        Raises:
            ChatProviderError: If the request cannot be established or the
                server reports an error
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections or resources."""
        pass

    async def __aenter__(self) -> "ChatProvider":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit with automatic cleanup.

        Note: Suppresses "Event loop is closed" errors during cleanup.
        This is a known harmless race condition in httpx/anyio cleanup:
        https://github.com/encode/httpx/issues/914
        """
        try:
            await self.close()
        except RuntimeError as e:
            if "Event loop is closed" not in str(e):
                raise
