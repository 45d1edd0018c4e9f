from typing import Any

from .base import ChatProvider
from .providers import OllamaProvider


def create_chat_provider(provider: str, **config: Any) -> ChatProvider:
    """Create a chat provider instance.

    This factory function hides the instantiation logic for different providers.

    Args:
        provider: Provider type (currently only 'ollama')
        **config: Provider-specific configuration
            For Ollama:
                - host: str (default: 'http://localhost:11434')
                - model: str (default: 'llama3.2')
                - connect_timeout: float | None (default: 10.0)

    Returns:
        Initialized chat provider instance

    Raises:
        ValueError: If provider type is not supported

    Examples:
        >>> provider = create_chat_provider(
        ...     "ollama",
        ...     host="http://localhost:11434",
        ...     model="llama3.2"
        ... )
    """
    provider_lower = provider.lower()

    if provider_lower == "ollama":
        return OllamaProvider(**config)

    raise ValueError(
        f"Unsupported provider: {provider}. "
        f"Supported providers: 'ollama'"
    )
