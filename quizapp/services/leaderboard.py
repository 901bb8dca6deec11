"""Leaderboard service"""

from typing import List

from sqlalchemy.orm import Session

from quizapp.models import User
from quizapp.schemas.leaderboard import LeaderboardEntry

LEADERBOARD_SIZE = 10


class LeaderboardService:
    @staticmethod
    def rank(users: List[User], limit: int = LEADERBOARD_SIZE) -> List[LeaderboardEntry]:
        """
        Rank users by xp + daily streak, highest first

        The sort is stable, so tied users keep their incoming order.
        """
        entries = [
            LeaderboardEntry(
                id=user.id,
                name=user.fullname,
                avatar=user.avatar_url,
                xp=user.xp,
                daily_streak=user.daily_streak,
                total_score=user.xp + user.daily_streak,
            )
            for user in users
        ]
        entries.sort(key=lambda entry: entry.total_score, reverse=True)
        return entries[:limit]

    @staticmethod
    def get_global_leaderboard(db: Session, limit: int = LEADERBOARD_SIZE) -> List[LeaderboardEntry]:
        """Top users over the whole user table"""
        users = db.query(User).order_by(User.id).all()
        return LeaderboardService.rank(users, limit)
