"""One-time achievements unlocked by finished sessions."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, FrozenSet, Tuple

from typeflow.core.session import SessionResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CumulativeStats:
    """Player totals after the session has been counted and its XP applied."""

    total_tests: int
    level: int


Predicate = Callable[[SessionResult, CumulativeStats], bool]


@dataclass(frozen=True)
class Achievement:
    id: str
    name: str
    description: str
    icon: str
    xp_reward: int
    predicate: Predicate


@dataclass(frozen=True)
class AchievementOutcome:
    """What :func:`evaluate` decided: the full unlocked set and what changed."""

    unlocked: FrozenSet[str]
    newly_unlocked: Tuple[str, ...]
    xp: int


ACHIEVEMENTS: Tuple[Achievement, ...] = (
    Achievement(
        id="first_test",
        name="First Steps",
        description="Complete your first typing test",
        icon="🎯",
        xp_reward=50,
        predicate=lambda result, stats: stats.total_tests >= 1,
    ),
    Achievement(
        id="speed_demon",
        name="Speed Demon",
        description="Reach 60 WPM",
        icon="⚡",
        xp_reward=100,
        predicate=lambda result, stats: result.wpm >= 60,
    ),
    Achievement(
        id="perfectionist",
        name="Perfectionist",
        description="Achieve 100% accuracy",
        icon="💎",
        xp_reward=150,
        predicate=lambda result, stats: result.accuracy == 100,
    ),
    Achievement(
        id="wpm_80",
        name="Lightning",
        description="Reach 80 WPM",
        icon="⚡",
        xp_reward=300,
        predicate=lambda result, stats: result.wpm >= 80,
    ),
    Achievement(
        id="wpm_100",
        name="Supersonic",
        description="Reach 100 WPM",
        icon="🏆",
        xp_reward=500,
        predicate=lambda result, stats: result.wpm >= 100,
    ),
    Achievement(
        id="level_10",
        name="Rising Star",
        description="Reach level 10",
        icon="🚀",
        xp_reward=100,
        predicate=lambda result, stats: stats.level >= 10,
    ),
    Achievement(
        id="tests_50",
        name="Practitioner",
        description="Complete 50 tests",
        icon="📚",
        xp_reward=250,
        predicate=lambda result, stats: stats.total_tests >= 50,
    ),
)


def _index(achievements: Tuple[Achievement, ...]) -> Dict[str, Achievement]:
    by_id: Dict[str, Achievement] = {}
    for achievement in achievements:
        if achievement.id in by_id:
            raise ValueError(f"duplicate achievement id: {achievement.id}")
        by_id[achievement.id] = achievement
    return by_id


_BY_ID = _index(ACHIEVEMENTS)


def get_achievement(achievement_id: str) -> Achievement:
    return _BY_ID[achievement_id]


def evaluate(
    result: SessionResult,
    stats: CumulativeStats,
    unlocked: FrozenSet[str],
    achievements: Tuple[Achievement, ...] = ACHIEVEMENTS,
) -> AchievementOutcome:
    """Check every achievement not yet in *unlocked* against the session.

    Already-unlocked ids are never re-evaluated, so running this twice with
    the same inputs awards nothing the second time.  The returned XP is not
    applied here; callers add it after the session's own XP.
    """
    newly = []
    xp = 0
    for achievement in achievements:
        if achievement.id in unlocked:
            continue
        if achievement.predicate(result, stats):
            newly.append(achievement.id)
            xp += achievement.xp_reward
            logger.info("Achievement unlocked: %s (+%d XP)", achievement.name, achievement.xp_reward)
    return AchievementOutcome(
        unlocked=frozenset(unlocked) | frozenset(newly),
        newly_unlocked=tuple(newly),
        xp=xp,
    )
