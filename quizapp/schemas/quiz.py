"""
Quiz schemas for QuizApp
"""

from datetime import datetime
from typing import Any, List, Optional, Union

from pydantic import Field

from quizapp.schemas.common import CamelModel


class OptionSchema(CamelModel):
    id: Optional[str] = None
    text: Optional[str] = None


class QuestionSchema(CamelModel):
    """A question as stored inside the quiz document"""
    id: Optional[str] = None
    question: Optional[str] = None
    options: List[OptionSchema] = []
    correct_option_id: Optional[str] = None
    explanation: Optional[str] = None


class QuizCreate(CamelModel):
    """Quiz creation payload, stored as sent"""
    title: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    difficulty: Optional[str] = None
    duration: Optional[int] = None
    tags: List[str] = []
    is_public: Optional[bool] = None
    questions: List[QuestionSchema] = []


class QuizResponse(QuizCreate):
    """Quiz response schema"""
    id: int
    created_by: Optional[int] = None
    created_at: datetime


class QuizSubmission(CamelModel):
    """Quiz submission; the ids are checked by the service so a missing one is a 400"""
    quiz_id: Optional[int] = None
    user_id: Optional[int] = None
    answers: Any = None
    score: float = Field(0, ge=0, le=100, allow_inf_nan=False)  # percentage
    time_spent: Optional[int] = None


class QuizResultResponse(CamelModel):
    id: int
    quiz_id: int
    user_id: int
    answers: Any = None
    score: float
    time_spent: Optional[int] = None
    created_at: datetime
    quiz: Optional[QuizResponse] = None


class QuizCreated(CamelModel):
    success: str
    quiz_id: Union[int, str]


class QuizSubmitted(CamelModel):
    success: str
    result_id: int


class QuizzesTaken(CamelModel):
    quizzes_taken: int
