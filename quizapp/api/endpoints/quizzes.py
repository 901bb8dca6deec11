"""
Quiz endpoints
"""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from quizapp.core.database import get_db
from quizapp.core.exceptions import handle_route_errors
from quizapp.schemas.quiz import (
    QuizCreate,
    QuizCreated,
    QuizResponse,
    QuizResultResponse,
    QuizSubmission,
    QuizSubmitted,
    QuizzesTaken,
)
from quizapp.services.quizzes import QuizService

router = APIRouter()


@router.post(
    "/createQuiz/{user_id}", response_model=QuizCreated, status_code=status.HTTP_201_CREATED
)
@handle_route_errors("An error occurred while creating the quiz")
def create_quiz(user_id: int, quiz_create: QuizCreate, db: Session = Depends(get_db)):
    """Create a quiz owned by ``user_id``"""
    quiz = QuizService.create_quiz(db, user_id, quiz_create)
    return QuizCreated(success="Quiz created successfully", quiz_id=quiz.id)


@router.get("/getQuizzesTaken/{user_id}", response_model=QuizzesTaken)
@handle_route_errors("An error occurred while fetching the quizzes taken count")
def get_quizzes_taken(user_id: int, db: Session = Depends(get_db)):
    return QuizzesTaken(quizzes_taken=QuizService.count_results_for_user(db, user_id))


@router.get("/getQuizzes/{user_id}", response_model=List[QuizResponse])
@handle_route_errors("An error occurred while fetching quizzes")
def get_quizzes(user_id: int, db: Session = Depends(get_db)):
    """Quizzes created by ``user_id``"""
    return [QuizResponse.model_validate(q) for q in QuizService.get_quizzes_by_creator(db, user_id)]


@router.get("/getQuiz/{quiz_id}", response_model=QuizResponse)
@handle_route_errors("An error occurred while fetching the quiz")
def get_quiz(quiz_id: int, db: Session = Depends(get_db)):
    return QuizResponse.model_validate(QuizService.get_quiz(db, quiz_id))


@router.post("/submitQuiz", response_model=QuizSubmitted, status_code=status.HTTP_201_CREATED)
@handle_route_errors("An error occurred while submitting the quiz")
def submit_quiz(submission: QuizSubmission, db: Session = Depends(get_db)):
    result = QuizService.submit_quiz(db, submission)
    return QuizSubmitted(success="Quiz result submitted successfully", result_id=result.id)


@router.get("/getQuizResults/{user_id}", response_model=List[QuizResultResponse])
@handle_route_errors("An error occurred while fetching quiz results")
def get_quiz_results(user_id: int, db: Session = Depends(get_db)):
    """Every result of ``user_id`` with its quiz"""
    return [
        QuizResultResponse.model_validate(r) for r in QuizService.get_results_for_user(db, user_id)
    ]


@router.get("/getQuizResult/{result_id}", response_model=QuizResultResponse)
@handle_route_errors("An error occurred while fetching the quiz result")
def get_quiz_result(result_id: int, db: Session = Depends(get_db)):
    return QuizResultResponse.model_validate(QuizService.get_result(db, result_id))
