"""
QuizApp Backend
Quizzes, XP progression, leaderboard and a friends graph over FastAPI
"""

__version__ = "1.0.0"
