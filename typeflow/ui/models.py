"""Data models used by the UI."""

from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, List

from typeflow.core.achievements import ACHIEVEMENTS, Achievement
from typeflow.core.challenges import DAILY_CHALLENGES, ChallengeCounters, ChallengeStatus, DailyChallenge, challenge_status


@dataclass
class AchievementRow:
    """One line of the achievements list."""

    achievement: Achievement
    unlocked: bool


@dataclass
class ChallengeRow:
    challenge: DailyChallenge
    status: ChallengeStatus


def build_achievement_rows(unlocked: FrozenSet[str]) -> List[AchievementRow]:
    return [AchievementRow(achievement=a, unlocked=a.id in unlocked) for a in ACHIEVEMENTS]


def build_challenge_rows(counters: ChallengeCounters) -> List[ChallengeRow]:
    return [ChallengeRow(challenge=c, status=challenge_status(c, counters)) for c in DAILY_CHALLENGES]
