"""
Quiz models for QuizApp
"""

from sqlalchemy import JSON, Boolean, Column, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from quizapp.core.database import Base
from quizapp.utils.dates import utcnow


class Quiz(Base):
    """Quiz model; questions are kept as the submitted documents"""

    __tablename__ = "quizzes"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=True, index=True)
    description = Column(Text, nullable=True)
    category = Column(String, nullable=True, index=True)
    difficulty = Column(String, nullable=True)
    duration = Column(Integer, nullable=True)  # in minutes
    tags = Column(JSON, nullable=False, default=list)
    is_public = Column(Boolean, nullable=True)
    questions = Column(JSON, nullable=False, default=list)

    created_by = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    # Relationships
    creator = relationship("User", back_populates="quizzes")
    results = relationship("QuizResult", back_populates="quiz")


class QuizResult(Base):
    """One submission of a quiz by a user"""

    __tablename__ = "quiz_results"

    id = Column(Integer, primary_key=True, index=True)
    quiz_id = Column(Integer, ForeignKey("quizzes.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    answers = Column(JSON, nullable=True)  # Store user answers as sent
    score = Column(Float, nullable=False, default=0.0)
    time_spent = Column(Integer, nullable=True)  # seconds

    created_at = Column(DateTime, nullable=False, default=utcnow, index=True)

    # Relationships
    quiz = relationship("Quiz", back_populates="results")
    user = relationship("User", back_populates="results")
