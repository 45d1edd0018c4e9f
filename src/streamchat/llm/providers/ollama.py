from collections.abc import AsyncIterator, Callable, Sequence
from typing import Any

import httpx
from pydantic import ValidationError

from ..base import ChatProvider, ChatProviderError
from ..models import ChatChunk, ChatMessage, ChatRequest, StreamingResponse

DEFAULT_OLLAMA_HOST = "http://localhost:11434"
DEFAULT_MODEL = "llama3.2"
CHAT_PATH = "/api/chat"


class OllamaConnectionError(ChatProviderError):
    """The Ollama server could not be reached, or the connection dropped."""


class OllamaResponseError(ChatProviderError):
    """The Ollama server answered with an error status or error record."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def decode_chunk(line: str) -> ChatChunk | None:
    """Decode one NDJSON record of a streamed reply.

    Returns None for blank, truncated or otherwise malformed lines.
    """
    line = line.strip()
    if not line:
        return None
    try:
        return ChatChunk.model_validate_json(line)
    except ValidationError:
        return None


def _error_detail(response: httpx.Response) -> str:
    detail = None
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        detail = body.get("error")
    return f"HTTP {response.status_code}: {detail or response.reason_phrase}"


class OllamaProvider(ChatProvider):
    """Ollama chat provider using the native streaming /api/chat endpoint.

    Hidden design decisions:
    - One pooled httpx.AsyncClient reused across turns
    - Newline-delimited JSON decoding of the response body
    - Mapping of transport and server failures to ChatProviderError
    """

    def __init__(
        self,
        host: str = DEFAULT_OLLAMA_HOST,
        model: str = DEFAULT_MODEL,
        connect_timeout: float | None = 10.0,
        client: httpx.AsyncClient | None = None,
        **client_kwargs: Any
    ):
        """Initialize Ollama provider.

        Args:
            host: Base URL of the Ollama server
            model: Default model to use
            connect_timeout: Seconds allowed to establish a connection.
                Reads are never timed out; a reply may stream indefinitely.
            client: Pre-built client (tests inject one with a mock transport)
            **client_kwargs: Additional kwargs for httpx.AsyncClient
        """
        self._host = host.rstrip("/")
        self._model = model
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(None, connect=connect_timeout),
            **client_kwargs
        )

    @property
    def model(self) -> str:
        """Get the default model name."""
        return self._model

    @property
    def host(self) -> str:
        return self._host

    @property
    def chat_url(self) -> str:
        return f"{self._host}{CHAT_PATH}"

    async def stream_chat(
        self,
        messages: Sequence[ChatMessage],
        model: str | None = None,
        **kwargs: Any
    ) -> StreamingResponse:
        """Stream a chat reply from Ollama.

        The request is only sent once iteration starts.

        Args:
            messages: Conversation history
            model: Model to use (overrides default)
            **kwargs: Extra top-level request fields (e.g. ``options``)

        Returns:
            StreamingResponse that yields text chunks and captures usage info
        """
        request = ChatRequest(model=model or self._model, messages=list(messages))
        payload = request.model_dump()
        payload.update(kwargs)

        stream = StreamingResponse(
            self._stream_generator(payload, on_usage=lambda usage: stream.set_usage(usage))
        )
        return stream

    async def _stream_generator(
        self,
        payload: dict[str, Any],
        on_usage: Callable[[dict[str, int]], None],
    ) -> AsyncIterator[str]:
        """Internal generator that yields content chunks and captures usage."""
        connected = False
        try:
            async with self._client.stream("POST", self.chat_url, json=payload) as response:
                connected = True
                if response.is_error:
                    await response.aread()
                    raise OllamaResponseError(
                        _error_detail(response), status_code=response.status_code
                    )

                async for line in response.aiter_lines():
                    chunk = decode_chunk(line)
                    if chunk is None:
                        continue
                    if chunk.error:
                        raise OllamaResponseError(chunk.error)
                    if chunk.message is not None and chunk.message.content:
                        yield chunk.message.content
                    if chunk.done:
                        usage = chunk.usage()
                        if usage is not None:
                            on_usage(usage)
                        break
        except httpx.TransportError as e:
            if connected:
                raise OllamaConnectionError(f"Stream from {self._host} interrupted: {e}") from e
            raise OllamaConnectionError(f"Cannot reach Ollama at {self._host}: {e}") from e

    async def close(self) -> None:
        """Close the HTTP client if this provider created it."""
        if self._owns_client:
            await self._client.aclose()
