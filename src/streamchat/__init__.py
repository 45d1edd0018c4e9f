"""
Streamchat: a terminal chat client for a local model server.

Replies stream in token by token while the interface stays responsive.
This package follows Parnas's information hiding principles,
where each module hides a specific design decision.
"""

__version__ = "0.1.0"

from .chat import Fragment, Message, Role, StreamingClient, Transcript, TurnEnded, UpdateChannel
from .llm import ChatProvider, OllamaProvider, create_chat_provider

__all__ = [
    "ChatProvider",
    "Fragment",
    "Message",
    "OllamaProvider",
    "Role",
    "StreamingClient",
    "Transcript",
    "TurnEnded",
    "UpdateChannel",
    "create_chat_provider",
]
