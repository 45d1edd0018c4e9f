from .channel import UpdateChannel
from .client import StreamingClient
from .models import Fragment, Message, PendingTurn, Role, TurnEnded, Update
from .transcript import Transcript

__all__ = [
    "Fragment",
    "Message",
    "PendingTurn",
    "Role",
    "StreamingClient",
    "Transcript",
    "TurnEnded",
    "Update",
    "UpdateChannel",
]
