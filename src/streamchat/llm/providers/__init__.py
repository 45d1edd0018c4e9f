from .ollama import (
    DEFAULT_MODEL,
    DEFAULT_OLLAMA_HOST,
    OllamaConnectionError,
    OllamaProvider,
    OllamaResponseError,
    decode_chunk,
)

__all__ = [
    "DEFAULT_MODEL",
    "DEFAULT_OLLAMA_HOST",
    "OllamaConnectionError",
    "OllamaProvider",
    "OllamaResponseError",
    "decode_chunk",
]
