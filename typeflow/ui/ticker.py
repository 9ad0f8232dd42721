"""Periodic WPM refresh for the active session."""

from __future__ import annotations

import time
from typing import Callable, Optional

from PySide6.QtCore import QObject, QTimer, Signal

from typeflow.core.session import SessionState, SessionTracker

TICK_INTERVAL_MS = 100


class SessionTicker(QObject):
    """Drives ``SessionTracker.tick`` from a QTimer while the session is active.

    The window owns the ticker; :meth:`cancel` must be called when the session
    finishes or a new one starts.  A timeout that arrives after the session
    left the active state cancels the timer instead of ticking.
    """

    ticked = Signal(object)

    def __init__(
        self,
        tracker: SessionTracker,
        interval_ms: int = TICK_INTERVAL_MS,
        clock: Callable[[], float] = time.monotonic,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._tracker = tracker
        self._clock = clock
        self._timer = QTimer(self)
        self._timer.setInterval(interval_ms)
        self._timer.timeout.connect(self._on_timeout)

    @property
    def interval_ms(self) -> int:
        return self._timer.interval()

    def is_running(self) -> bool:
        return self._timer.isActive()

    def start(self) -> None:
        if not self._tracker.is_active():
            return
        self._timer.start()

    def cancel(self) -> None:
        self._timer.stop()

    def _on_timeout(self) -> None:
        session = self._tracker.session
        if session is None or session.state is not SessionState.ACTIVE or session.started_at is None:
            self.cancel()
            return
        elapsed_ms = (self._clock() - session.started_at) * 1000.0
        self.ticked.emit(self._tracker.tick(elapsed_ms))
