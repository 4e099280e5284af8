"""Single-question countdown driven by the Qt event loop."""

from __future__ import annotations

import logging
import math
import time
from typing import Callable

from PySide6.QtCore import QObject, QTimer, Signal

from learn_quiz.constants.quiz_constants import TIMER_INTERVAL_MS

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


class CountdownTimer(QObject):
    """Counts down whole seconds for one question at a time.

    ``tick`` carries the remaining seconds once per elapsed second and
    ``expired`` fires exactly once when the countdown reaches zero. Starting a
    new countdown implicitly cancels the previous one. Polling is deadline
    based, so a late Qt interval still produces one tick per elapsed second.
    """

    tick = Signal(int)
    expired = Signal()

    def __init__(
        self,
        clock: Clock = time.monotonic,
        poll_interval_ms: int = TIMER_INTERVAL_MS // 10,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._clock = clock
        self._timer = QTimer(self)
        self._timer.setInterval(poll_interval_ms)
        self._timer.timeout.connect(self._check_deadline)

        self._active: bool = False
        self._generation: int = 0
        self._limit_seconds: int | None = None
        self._started_at: float | None = None
        self._remaining_seconds: int | None = None

    def start(self, limit_seconds: int) -> None:
        if limit_seconds <= 0:
            raise ValueError("Countdown limit must be a positive number of seconds.")
        if self._active:
            self.cancel()
        self._limit_seconds = limit_seconds
        self._started_at = self._clock()
        self._remaining_seconds = limit_seconds
        self._active = True
        self._timer.start()
        logger.debug("Countdown started for %ss", limit_seconds)

    def cancel(self) -> None:
        self._generation += 1
        if self._timer.isActive():
            self._timer.stop()
        if self._active:
            logger.debug("Countdown cancelled with %ss left", self._remaining_seconds)
        self._active = False

    def is_active(self) -> bool:
        return self._active

    @property
    def remaining_seconds(self) -> int | None:
        return self._remaining_seconds

    def _check_deadline(self) -> None:
        if not self._active or self._started_at is None or self._limit_seconds is None:
            return
        elapsed = self._clock() - self._started_at
        if elapsed < 0:
            logger.warning("Clock moved backwards during countdown; stopping ticks.")
            self._halt()
            return

        target = max(0, math.ceil(self._limit_seconds - elapsed))
        generation = self._generation
        while self._remaining_seconds is not None and self._remaining_seconds > target:
            self._remaining_seconds -= 1
            if self._remaining_seconds == 0:
                self._halt()
            self.tick.emit(self._remaining_seconds)
            if generation != self._generation:
                # A tick handler cancelled or restarted the countdown.
                return

        if self._remaining_seconds == 0:
            self._generation += 1
            self.expired.emit()

    def _halt(self) -> None:
        self._active = False
        if self._timer.isActive():
            self._timer.stop()
