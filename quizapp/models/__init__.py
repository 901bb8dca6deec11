"""
QuizApp Models Package
"""

from quizapp.models.quiz import Quiz, QuizResult
from quizapp.models.session import UserSession
from quizapp.models.user import FriendRequest, Friendship, User

__all__ = [
    "User", "Friendship", "FriendRequest",
    "Quiz", "QuizResult",
    "UserSession",
]
