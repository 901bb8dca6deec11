"""
Quiz service
Creating and submitting quizzes, and the read-only quiz/result lookups
"""

import logging
from typing import List

from sqlalchemy.orm import Session, selectinload

from quizapp.core.exceptions import NotFoundException, ValidationException
from quizapp.models import Quiz, QuizResult
from quizapp.schemas.quiz import QuizCreate, QuizSubmission
from quizapp.services import progression
from quizapp.services.users import UserService

logger = logging.getLogger(__name__)


def _format_score(score: float) -> str:
    return f"{score:g}"


class QuizService:
    @staticmethod
    def create_quiz(db: Session, creator_id: int, quiz_data: QuizCreate) -> Quiz:
        """
        Store a quiz as submitted and credit its creator

        The creator earns QUIZ_CREATION_XP, has the daily streak advanced and
        the last activity set to the quiz title.

        Raises:
            NotFoundException: Unknown creator
        """
        UserService.get_user_or_404(db, creator_id)

        payload = quiz_data.model_dump(by_alias=True)
        quiz = Quiz(
            title=quiz_data.title,
            description=quiz_data.description,
            category=quiz_data.category,
            difficulty=quiz_data.difficulty,
            duration=quiz_data.duration,
            tags=payload["tags"],
            is_public=quiz_data.is_public,
            questions=payload["questions"],
            created_by=creator_id,
        )
        db.add(quiz)
        db.commit()

        progression.update_xp_and_level(db, creator_id, progression.QUIZ_CREATION_XP)
        progression.update_daily_streak(db, creator_id)
        progression.record_activity(db, creator_id, f'Created a new quiz on "{quiz.title}"')

        logger.info("Quiz created", extra={"quiz_id": quiz.id, "user_id": creator_id})
        return quiz

    @staticmethod
    def submit_quiz(db: Session, submission: QuizSubmission) -> QuizResult:
        """
        Record a quiz result and credit the user floor(score / 10) XP

        Raises:
            ValidationException: quizId or userId missing
            NotFoundException: Unknown quiz or user
        """
        if not submission.quiz_id or not submission.user_id:
            raise ValidationException("Quiz ID and User ID are required.")

        quiz = QuizService.get_quiz(db, submission.quiz_id)
        UserService.get_user_or_404(db, submission.user_id)
        xp_delta = progression.xp_for_score(submission.score)

        result = QuizResult(
            quiz_id=submission.quiz_id,
            user_id=submission.user_id,
            answers=submission.answers,
            score=submission.score,
            time_spent=submission.time_spent,
        )
        db.add(result)
        db.commit()

        progression.update_xp_and_level(db, submission.user_id, xp_delta)
        progression.record_activity(
            db,
            submission.user_id,
            f'Took a quiz on "{quiz.title}" and scored {_format_score(submission.score)}%',
        )
        progression.update_average_score(db, submission.user_id)

        logger.info(
            "Quiz submitted",
            extra={"result_id": result.id, "quiz_id": quiz.id, "user_id": submission.user_id},
        )
        return result

    @staticmethod
    def get_quiz(db: Session, quiz_id: int) -> Quiz:
        """Get quiz by ID"""
        quiz = db.query(Quiz).filter(Quiz.id == quiz_id).first()
        if not quiz:
            raise NotFoundException("Quiz")
        return quiz

    @staticmethod
    def get_quizzes_by_creator(db: Session, user_id: int) -> List[Quiz]:
        return db.query(Quiz).filter(Quiz.created_by == user_id).order_by(Quiz.id).all()

    @staticmethod
    def get_results_for_user(db: Session, user_id: int) -> List[QuizResult]:
        return (
            db.query(QuizResult)
            .options(selectinload(QuizResult.quiz))
            .filter(QuizResult.user_id == user_id)
            .order_by(QuizResult.id)
            .all()
        )

    @staticmethod
    def get_result(db: Session, result_id: int) -> QuizResult:
        result = (
            db.query(QuizResult)
            .options(selectinload(QuizResult.quiz))
            .filter(QuizResult.id == result_id)
            .first()
        )
        if not result:
            raise NotFoundException("Quiz result")
        return result

    @staticmethod
    def count_results_for_user(db: Session, user_id: int) -> int:
        return db.query(QuizResult).filter(QuizResult.user_id == user_id).count()
