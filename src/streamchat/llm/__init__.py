from .base import ChatProvider, ChatProviderError
from .factory import create_chat_provider
from .models import ChatChunk, ChatMessage, ChatRequest, StreamingResponse
from .providers import OllamaConnectionError, OllamaProvider, OllamaResponseError

__all__ = [
    "ChatProvider",
    "ChatProviderError",
    "create_chat_provider",
    "ChatChunk",
    "ChatMessage",
    "ChatRequest",
    "StreamingResponse",
    "OllamaConnectionError",
    "OllamaProvider",
    "OllamaResponseError",
]
