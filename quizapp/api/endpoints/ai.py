"""
AI integration endpoints
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from quizapp.core.database import get_db
from quizapp.core.exceptions import handle_route_errors
from quizapp.schemas.ai import QuizGenerationRequest
from quizapp.schemas.quiz import QuizCreated
from quizapp.services.ai import AIService

router = APIRouter()


@router.post("/generateQuiz", response_model=QuizCreated, status_code=status.HTTP_201_CREATED)
@handle_route_errors("An error occurred while generating the quiz")
def generate_quiz(request: QuizGenerationRequest, db: Session = Depends(get_db)):
    """
    Generate a quiz using AI

    - **topic**: Topic for the quiz
    - **numberOfQuestions**: Number of questions to generate
    - **difficulty**: Difficulty level
    - **userId**: Owner of the generated quiz
    """
    quiz_id = AIService.generate_quiz(db, request)
    return QuizCreated(success="Quiz generated successfully", quiz_id=quiz_id)
