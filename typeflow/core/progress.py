from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import FrozenSet, Optional, Tuple

from typeflow.core import achievements, challenges
from typeflow.core.achievements import CumulativeStats
from typeflow.core.challenges import ChallengeCounters
from typeflow.core.progression import add_xp, next_rank_for, rank_for, session_xp_reward
from typeflow.core.ranks import RankEntry
from typeflow.core.session import SessionResult, round_half_up

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HistoryEntry:
    index: int
    wpm: int
    accuracy: int


@dataclass(frozen=True)
class UserProgress:
    """Everything the player has earned so far. Replaced, never mutated."""

    xp: int = 0
    level: int = 1
    total_tests: int = 0
    best_wpm: int = 0
    unlocked: FrozenSet[str] = frozenset()
    history: Tuple[HistoryEntry, ...] = ()
    challenges: ChallengeCounters = field(default_factory=ChallengeCounters)


@dataclass(frozen=True)
class CompletionReport:
    """Outcome of folding one session into :class:`UserProgress`."""

    progress: UserProgress
    xp_gained: int
    achievement_xp: int
    newly_unlocked: Tuple[str, ...]
    old_level: int

    @property
    def leveled_up(self) -> bool:
        return self.progress.level > self.old_level


@dataclass(frozen=True)
class ProgressSnapshot:
    xp: int
    level: int
    rank: RankEntry
    next_rank: Optional[RankEntry]
    unlocked: FrozenSet[str]
    history: Tuple[HistoryEntry, ...]


def complete_session(progress: UserProgress, result: SessionResult) -> CompletionReport:
    """Apply a finished session: counters, history, session XP, achievements, challenges.

    Achievements see the level reached after the session's own XP, and their
    XP is added on top of that.
    """
    total_tests = progress.total_tests + 1
    history = progress.history + (
        HistoryEntry(index=len(progress.history) + 1, wpm=result.wpm, accuracy=result.accuracy),
    )

    xp_gained = session_xp_reward(result.wpm, result.accuracy)
    xp, level = add_xp(progress.xp, progress.level, xp_gained)

    outcome = achievements.evaluate(
        result,
        CumulativeStats(total_tests=total_tests, level=level),
        progress.unlocked,
    )
    if outcome.xp:
        xp, level = add_xp(xp, level, outcome.xp)

    updated = replace(
        progress,
        xp=xp,
        level=level,
        total_tests=total_tests,
        best_wpm=max(progress.best_wpm, result.wpm),
        unlocked=outcome.unlocked,
        history=history,
        challenges=challenges.record_session(progress.challenges, result),
    )
    logger.info(
        "Test #%d recorded: +%d XP (+%d from achievements), level %d",
        total_tests,
        xp_gained,
        outcome.xp,
        level,
    )
    return CompletionReport(
        progress=updated,
        xp_gained=xp_gained,
        achievement_xp=outcome.xp,
        newly_unlocked=outcome.newly_unlocked,
        old_level=progress.level,
    )


def snapshot(progress: UserProgress) -> ProgressSnapshot:
    return ProgressSnapshot(
        xp=progress.xp,
        level=progress.level,
        rank=rank_for(progress.level),
        next_rank=next_rank_for(progress.level),
        unlocked=progress.unlocked,
        history=progress.history,
    )


def average_wpm(progress: UserProgress) -> int:
    """Rounded mean WPM over the recorded history (0 with no history)."""
    if not progress.history:
        return 0
    return round_half_up(sum(entry.wpm for entry in progress.history) / len(progress.history))
