"""Leaderboard schemas"""

from typing import Optional

from quizapp.schemas.common import CamelModel


class LeaderboardEntry(CamelModel):
    id: int
    name: str
    avatar: Optional[str] = None
    xp: int
    daily_streak: int
    total_score: int
