"""Suppress change notifications caused by this client's own writes.

A scoring device records when it last wrote scores for a round; a change
notification for that round arriving within the echo window is its own
write coming back and can be skipped. Missing a refresh is harmless since
the next one recomputes everything.
"""

import logging
import time
from typing import Callable, Dict, Optional

from .config import get_echo_window_seconds

logger = logging.getLogger('golftrip.echo_guard')


class LocalWriteGuard:
    """Per-round record of local write times."""

    def __init__(self, window_seconds: Optional[float] = None, clock: Callable[[], float] = time.monotonic):
        self.window_seconds = get_echo_window_seconds() if window_seconds is None else window_seconds
        self._clock = clock
        self._last_write: Dict[str, float] = {}

    def record_write(self, round_id: str, at: Optional[float] = None) -> None:
        self._last_write[round_id] = self._clock() if at is None else at

    def should_ignore(self, round_id: str, now: Optional[float] = None) -> bool:
        """True if a notification for round_id is within the window of a local write."""
        last = self._last_write.get(round_id)
        if last is None:
            return False
        now = self._clock() if now is None else now
        ignore = 0 <= now - last < self.window_seconds
        if ignore:
            logger.debug(f'Ignoring self-echo for round {round_id}')
        return ignore

    def clear(self, round_id: Optional[str] = None) -> None:
        if round_id is None:
            self._last_write.clear()
        else:
            self._last_write.pop(round_id, None)
