from __future__ import annotations

import enum
import logging
import math
import re
import time
from dataclasses import dataclass, replace
from typing import Optional

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")


class SessionState(enum.Enum):
    IDLE = "idle"
    ACTIVE = "active"
    FINISHED = "finished"


@dataclass(frozen=True)
class SessionResult:
    """Final metrics of a completed session."""

    wpm: int
    accuracy: int
    error_count: int
    elapsed_seconds: float
    text_length: int


@dataclass(frozen=True)
class Session:
    """Snapshot of one attempt at typing ``text``.

    Sessions are immutable; :func:`start`, :func:`on_input` and :func:`tick`
    each return a new snapshot.  Live metrics follow the TypeFlow
    rules:

      * **errors** – positions where the typed character differs from the
        target, plus every character typed past the end of the target.
      * **accuracy** – ``round(100 * (typed - errors) / typed)``, 100 while
        nothing has been typed.
      * **WPM** – whitespace-delimited words in the typed buffer divided by
        elapsed minutes, refreshed only by :func:`tick`.
    """

    text: str
    typed: str = ""
    state: SessionState = SessionState.IDLE
    started_at: Optional[float] = None
    elapsed_ms: float = 0.0
    wpm: int = 0
    accuracy: int = 100
    error_count: int = 0
    result: Optional[SessionResult] = None


def word_count(text: str) -> int:
    """Number of non-empty whitespace-separated tokens in *text*."""
    return sum(1 for token in _WHITESPACE.split(text) if token)


def count_errors(typed: str, target: str) -> int:
    """Mismatched positions, with anything typed past *target* counted as wrong."""
    mismatched = sum(1 for a, b in zip(typed, target) if a != b)
    overtyped = max(0, len(typed) - len(target))
    return mismatched + overtyped


def round_half_up(value: float) -> int:
    """Round .5 away from zero for non-negative values (2.5 -> 3, unlike round())."""
    return math.floor(value + 0.5)


def accuracy_for(typed_length: int, error_count: int) -> int:
    if typed_length == 0:
        return 100
    return round_half_up(100 * (typed_length - error_count) / typed_length)


def start(text: str) -> Session:
    """Begin a fresh session against *text*."""
    if not text:
        raise ValueError("target text must be non-empty")
    return Session(text=text)


def on_input(session: Session, value: str, now: Optional[float] = None) -> Session:
    """Apply the full contents of the input field after a keystroke.

    ``now`` is a monotonic timestamp in seconds (defaults to
    ``time.monotonic()``).  Input reaching the length of the target finishes
    the session; a finished session ignores further input.
    """
    if session.state is SessionState.FINISHED:
        return session
    if now is None:
        now = time.monotonic()

    state = session.state
    started_at = session.started_at
    if state is SessionState.IDLE and value:
        state = SessionState.ACTIVE
        started_at = now

    errors = count_errors(value, session.text)
    accuracy = accuracy_for(len(value), errors)
    updated = replace(
        session,
        typed=value,
        state=state,
        started_at=started_at,
        accuracy=accuracy,
        error_count=errors,
    )
    if len(value) >= len(session.text):
        return finish(updated, now)
    return updated


def tick(session: Session, elapsed_ms: float) -> Session:
    """Refresh elapsed time and WPM while the session is active."""
    if session.state is not SessionState.ACTIVE:
        return session
    if elapsed_ms <= 0:
        return session
    minutes = elapsed_ms / 60000.0
    return replace(
        session,
        elapsed_ms=elapsed_ms,
        wpm=round_half_up(word_count(session.typed) / minutes),
    )


def finish(session: Session, now: float) -> Session:
    """Freeze the session and attach its :class:`SessionResult`."""
    elapsed_seconds = 0.0
    if session.started_at is not None:
        elapsed_seconds = max(0.0, now - session.started_at)
    result = SessionResult(
        wpm=session.wpm,
        accuracy=session.accuracy,
        error_count=session.error_count,
        elapsed_seconds=elapsed_seconds,
        text_length=len(session.text),
    )
    return replace(session, state=SessionState.FINISHED, result=result)


class SessionTracker:
    """Owns the current :class:`Session` and feeds input events into it."""

    def __init__(self) -> None:
        self._session: Optional[Session] = None

    @property
    def session(self) -> Optional[Session]:
        """The latest snapshot, or None before the first :meth:`start`."""
        return self._session

    @property
    def result(self) -> Optional[SessionResult]:
        return self._session.result if self._session is not None else None

    def is_active(self) -> bool:
        return self._session is not None and self._session.state is SessionState.ACTIVE

    def is_finished(self) -> bool:
        return self._session is not None and self._session.state is SessionState.FINISHED

    def start(self, text: str) -> Session:
        """Replace any current session with a new idle one."""
        self._session = start(text)
        logger.debug("Session started (%d chars)", len(text))
        return self._session

    def on_input(self, value: str, now: Optional[float] = None) -> Optional[SessionResult]:
        """Apply new input; returns the result when this input completes the session."""
        if self._session is None:
            raise RuntimeError("on_input called before start")
        was_finished = self._session.state is SessionState.FINISHED
        self._session = on_input(self._session, value, now)
        if not was_finished and self._session.result is not None:
            result = self._session.result
            logger.info(
                "Session finished: %d WPM, %d%% accuracy, %d errors",
                result.wpm,
                result.accuracy,
                result.error_count,
            )
            return result
        return None

    def tick(self, elapsed_ms: float) -> Session:
        if self._session is None:
            raise RuntimeError("tick called before start")
        self._session = tick(self._session, elapsed_ms)
        return self._session
