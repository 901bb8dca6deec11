"""
User schemas for QuizApp
"""

from datetime import datetime
from typing import List, Optional

from pydantic import EmailStr, Field

from quizapp.schemas.common import CamelModel
from quizapp.schemas.quiz import QuizResponse


class UserCreate(CamelModel):
    """Signup payload; ``name`` is the unique handle"""
    name: str = Field(..., min_length=1, max_length=50)
    fullname: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=1)


class UserLogin(CamelModel):
    username: str
    password: str


class AuthResult(CamelModel):
    success: str
    user_id: int


class UserSummary(CamelModel):
    """User as shown inside friend lists, suggestions and requests"""
    id: int
    username: str
    fullname: str
    avatar_url: Optional[str] = None
    xp: int
    level: int
    daily_streak: int
    average_score: float
    last_activity: str


class UserResponse(UserSummary):
    """User response schema"""
    email: str
    xp_to_next_level: int
    last_signed_in: datetime
    created_at: datetime


class UserDetails(UserResponse):
    """User with owned quizzes, friends and pending requests populated"""
    quizzes: List[QuizResponse] = []
    friends: List[UserSummary] = []
    friend_requests: List[UserSummary] = []


class CurrentUser(CamelModel):
    user: UserResponse
    messages: List[dict] = []
