"""
Externally pumped frame scheduler.

The host (the desktop window, or a test) calls ``pump(timestamp_ms)`` once
per frame with a monotonic timestamp. Subscribers get the timestamp the way
an animation-frame callback would, and deferred actions fire once their due
time has been reached. Nothing here spawns threads or sleeps.
"""

from dataclasses import dataclass, field
from typing import Callable, Optional
import itertools
import logging

logger = logging.getLogger(__name__)

FrameCallback = Callable[[float], None]


@dataclass
class DeferredHandle:
    """Handle for a pending deferred action."""

    due_ms: float
    callback: Callable[[], None]
    seq: int = 0
    _cancelled: bool = field(default=False, repr=False)
    _fired: bool = field(default=False, repr=False)

    @property
    def pending(self) -> bool:
        return not (self._cancelled or self._fired)

    def cancel(self) -> bool:
        """Cancel the action. Returns True if it was still pending."""
        if not self.pending:
            return False
        self._cancelled = True
        return True


class FrameScheduler:
    """Frame subscriptions plus one-shot deferred actions, both pumped by the host."""

    def __init__(self) -> None:
        self._subscribers: list[FrameCallback] = []
        self._deferred: list[DeferredHandle] = []
        self._seq = itertools.count()
        self._now: Optional[float] = None
        self._frame = 0

    @property
    def now(self) -> float:
        """Timestamp of the most recent pump (0.0 before the first one)."""
        return self._now if self._now is not None else 0.0

    @property
    def frame(self) -> int:
        return self._frame

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def subscribe(self, callback: FrameCallback) -> Callable[[], None]:
        """
        Call ``callback(timestamp)`` on every pump.

        Returns:
            Unsubscribe function
        """
        self._subscribers.append(callback)
        logger.debug(f"Frame subscriber added ({len(self._subscribers)} total)")

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)
                logger.debug(f"Frame subscriber removed ({len(self._subscribers)} total)")

        return unsubscribe

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> DeferredHandle:
        """Run ``callback`` on the first pump at or after now + delay_ms."""
        handle = DeferredHandle(
            due_ms=self.now + max(0.0, delay_ms),
            callback=callback,
            seq=next(self._seq),
        )
        self._deferred.append(handle)
        return handle

    def pump(self, timestamp_ms: float) -> None:
        """Advance to ``timestamp_ms``: fire due deferred actions, then frame subscribers."""
        self._now = timestamp_ms
        self._frame += 1

        self._run_deferred(timestamp_ms)

        # Callbacks that subscribe during this pump start on the next one
        for callback in list(self._subscribers):
            if callback not in self._subscribers:
                continue
            callback(timestamp_ms)

    def _run_deferred(self, timestamp_ms: float) -> None:
        due = [h for h in self._deferred if h.pending and h.due_ms <= timestamp_ms]
        self._deferred = [
            h for h in self._deferred if h.pending and h.due_ms > timestamp_ms
        ]

        for handle in sorted(due, key=lambda h: (h.due_ms, h.seq)):
            if not handle.pending:
                continue
            handle._fired = True
            try:
                handle.callback()
            except Exception as e:
                logger.error(f"Error in deferred action: {e}")
