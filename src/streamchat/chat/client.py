"""Streaming client: turns one submitted turn into channel updates.

Hides how a provider stream is consumed and how its outcome is reported
back to the render loop. The client never touches the transcript.
"""

import asyncio
from collections.abc import AsyncIterator, Callable, Sequence

from ..llm.base import ChatProvider, ChatProviderError
from ..llm.models import ChatMessage
from .channel import UpdateChannel
from .models import Fragment, PendingTurn, TurnEnded

DebugCallback = Callable[[str, str, str], None]


class StreamingClient:
    """Runs chat turns against a provider and forwards fragments.

    Example:
        client = StreamingClient(provider, channel)
        await client.run_turn(turn)  # fragments, then TurnEnded, on channel
    """

    COMPONENT = "STREAM"

    def __init__(
        self,
        provider: ChatProvider,
        channel: UpdateChannel,
        debug_callback: DebugCallback | None = None,
    ) -> None:
        self._provider = provider
        self._channel = channel
        self._debug_callback = debug_callback

    def set_debug_callback(self, callback: DebugCallback | None) -> None:
        """Route debug messages (level, component, message) to the UI."""
        self._debug_callback = callback

    def _debug(self, level: str, message: str) -> None:
        if self._debug_callback is not None:
            self._debug_callback(level, self.COMPONENT, message)

    async def stream_chat(
        self,
        snapshot: Sequence[ChatMessage],
        model: str,
        turn_id: int,
        on_usage: Callable[[dict[str, int]], None] | None = None,
    ) -> AsyncIterator[Fragment]:
        """Open one request and lazily yield its reply as fragments.

        Not restartable: every call sends a new request.
        """
        stream = await self._provider.stream_chat(snapshot, model=model)
        try:
            async for text in stream:
                yield Fragment(turn_id=turn_id, text=text)
        finally:
            await stream.aclose()
        if on_usage is not None and stream.usage is not None:
            on_usage(stream.usage)

    async def run_turn(self, turn: PendingTurn) -> bool:
        """Stream one turn onto the channel, ending with a TurnEnded marker.

        Provider failures end the turn with an error marker instead of
        raising. If the consumer has closed the channel the turn is
        abandoned silently.

        Returns:
            True if the reply streamed to completion
        """
        self._debug(
            "info",
            f"Turn {turn.turn_id}: {turn.model} with {len(turn.snapshot)} message(s)",
        )
        usage: dict[str, int] = {}
        fragments = self.stream_chat(
            turn.snapshot, turn.model, turn.turn_id, on_usage=usage.update
        )
        count = 0
        try:
            async for fragment in fragments:
                if not self._channel.send(fragment):
                    self._debug("debug", f"Turn {turn.turn_id}: channel closed, abandoning")
                    return False
                count += 1
        except ChatProviderError as e:
            self._debug("error", f"Turn {turn.turn_id} failed: {e}")
            self._channel.send(TurnEnded(turn_id=turn.turn_id, error=str(e)))
            return False
        except asyncio.CancelledError:
            self._debug("warning", f"Turn {turn.turn_id} cancelled")
            self._channel.send(TurnEnded(turn_id=turn.turn_id, error="cancelled"))
            raise
        finally:
            await fragments.aclose()

        self._debug("debug", f"Turn {turn.turn_id}: {count} fragment(s) received")
        self._channel.send(TurnEnded(turn_id=turn.turn_id, usage=usage or None))
        return True
