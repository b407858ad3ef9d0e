"""Cursor blinking driven by the cursor's blinkwait, blinkon and blinkoff times."""

from __future__ import annotations

import copy
import time
from enum import Enum
from typing import Any, Callable, Optional

Clock = Callable[[], float]
Scheduler = Callable[[float], None]


class BlinkState(Enum):
    WAITING = "waiting"
    ON = "on"
    OFF = "off"


_NEXT_STATE = {
    BlinkState.WAITING: BlinkState.ON,
    BlinkState.ON: BlinkState.OFF,
    BlinkState.OFF: BlinkState.ON,
}


class BlinkStatus:
    """Tracks the blink phase of a cursor.

    The cursor is any object with ``blinkwait``, ``blinkon`` and ``blinkoff``
    attributes (milliseconds or ``None``) that supports equality.  Times come
    from ``clock`` in seconds; the moment of the next phase change is kept in
    ``scheduled_frame`` and passed to ``schedule`` when one is given.
    """

    def __init__(
        self,
        clock: Clock = time.monotonic,
        schedule: Optional[Scheduler] = None,
    ) -> None:
        self._clock = clock
        self._schedule = schedule
        self.state = BlinkState.WAITING
        self.last_transition = clock()
        self.previous_cursor: Any = None
        self.scheduled_frame: Optional[float] = None

    def _delay_for_state(self, cursor: Any) -> Optional[int]:
        if self.state is BlinkState.WAITING:
            return cursor.blinkwait
        if self.state is BlinkState.OFF:
            return cursor.blinkoff
        return cursor.blinkon

    def update_status(self, cursor: Any) -> bool:
        """Advance the blink phase for ``cursor``; return whether it should be drawn."""
        if self.previous_cursor is None or cursor != self.previous_cursor:
            self.previous_cursor = copy.deepcopy(cursor)
            self.last_transition = self._clock()
            if cursor.blinkwait is not None and cursor.blinkwait != 0:
                self.state = BlinkState.WAITING
            else:
                self.state = BlinkState.ON

        if 0 in (cursor.blinkwait, cursor.blinkoff, cursor.blinkon):
            return True

        delay = self._delay_for_state(cursor)
        if delay is not None and delay > 0:
            if self.last_transition + delay / 1000.0 < self._clock():
                self.state = _NEXT_STATE[self.state]
                self.last_transition = self._clock()

        delay = self._delay_for_state(cursor)
        if delay is not None:
            self.scheduled_frame = self.last_transition + delay / 1000.0
            if self._schedule is not None:
                self._schedule(self.scheduled_frame)
        else:
            self.scheduled_frame = None

        return self.state is not BlinkState.OFF