"""One-way update channel from stream tasks to the render loop."""

import queue

from .models import Update


class UpdateChannel:
    """Unbounded FIFO of transcript updates.

    Any number of producers (one stream task per turn, possibly running on
    other threads) send; the render loop is the single consumer and drains.
    Neither side ever blocks.
    """

    def __init__(self) -> None:
        self._queue: queue.SimpleQueue[Update] = queue.SimpleQueue()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def send(self, update: Update) -> bool:
        """Queue an update.

        Returns:
            False if the consumer has gone away (channel closed)
        """
        if self._closed:
            return False
        self._queue.put_nowait(update)
        return True

    def drain(self, limit: int | None = None) -> list[Update]:
        """Take every queued update (or at most ``limit``) in send order."""
        updates: list[Update] = []
        while limit is None or len(updates) < limit:
            try:
                updates.append(self._queue.get_nowait())
            except queue.Empty:
                break
        return updates

    def close(self) -> None:
        self._closed = True

    def __len__(self) -> int:
        return self._queue.qsize()
