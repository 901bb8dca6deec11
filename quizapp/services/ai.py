"""
AI quiz generation
Prompts Gemini for a quiz and, when enabled, stores the generated quiz
"""

import json
import logging
import re
from typing import Optional, Union

import google.generativeai as genai
from pydantic import ValidationError
from sqlalchemy.orm import Session

from quizapp.core.config import settings
from quizapp.core.exceptions import AIServiceException, ValidationException
from quizapp.schemas.ai import QuizGenerationRequest
from quizapp.schemas.quiz import QuizCreate
from quizapp.services.quizzes import QuizService
from quizapp.services.users import UserService

logger = logging.getLogger(__name__)

# Returned while generated quizzes are not stored
PLACEHOLDER_QUIZ_ID = "8322058215"

_FENCE_RE = re.compile(r"```(?:json)?\s*(.*?)```", re.DOTALL)


def build_quiz_prompt(topic: str, number_of_questions: int, difficulty: str, user_id) -> str:
    return f"""Generate a quiz with the following details:
    Topic: {topic}
    Number of Questions: {number_of_questions}
    Difficulty: {difficulty}
    Format: Each question should have an id, question text, options (with ids and text), and a correct option id. The quiz should also have a title, description, category, difficulty, duration, tags, isPublic, and createdBy fields.
    Example:
    {{
      "title": "Sample Quiz",
      "description": "This is a sample quiz",
      "category": "{topic}",
      "difficulty": "{difficulty}",
      "duration": 10,
      "tags": ["sample", "quiz"],
      "isPublic": true,
      "questions": [
        {{
          "id": "1",
          "question": "Sample question?",
          "options": [
            {{ "id": "a", "text": "Option A" }},
            {{ "id": "b", "text": "Option B" }},
            {{ "id": "c", "text": "Option C" }},
            {{ "id": "d", "text": "Option D" }}
          ],
          "correctOptionId": "a"
        }}
      ],
      "createdBy": "{user_id}"
    }}"""


def parse_generated_quiz(text: str) -> QuizCreate:
    """
    Extract the quiz JSON object from model output

    Raises:
        AIServiceException: No usable quiz in the text
    """
    fenced = _FENCE_RE.search(text)
    candidate = fenced.group(1) if fenced else text

    start, end = candidate.find("{"), candidate.rfind("}")
    if start == -1 or end <= start:
        raise AIServiceException("Generated quiz could not be parsed", status_code=502)

    try:
        data = json.loads(candidate[start:end + 1])
        return QuizCreate.model_validate(data)
    except (json.JSONDecodeError, ValidationError) as e:
        logger.warning(f"Unusable quiz from model: {e}")
        raise AIServiceException("Generated quiz could not be parsed", status_code=502) from e


class QuizGenerator:
    """Thin wrapper around the Gemini text model"""

    def __init__(self, api_key: Optional[str] = None, model_name: Optional[str] = None):
        api_key = api_key or settings.GEMINI_API_KEY
        if not api_key:
            raise AIServiceException("Quiz generation is not configured")

        genai.configure(api_key=api_key)
        self.model = genai.GenerativeModel(model_name or settings.GEMINI_MODEL)

    def generate(self, prompt: str) -> str:
        response = self.model.generate_content(prompt)
        return response.text


class AIService:
    @staticmethod
    def generate_quiz(
        db: Session, request: QuizGenerationRequest, generator: Optional[QuizGenerator] = None
    ) -> Union[int, str]:
        """
        Ask the model for a quiz and return the id to report to the client

        With AI_PERSIST_GENERATED_QUIZZES off the model output is only logged
        and the fixed placeholder id is returned.
        """
        if settings.AI_PERSIST_GENERATED_QUIZZES:
            if not request.user_id:
                raise ValidationException("User ID is required to save a generated quiz.")
            UserService.get_user_or_404(db, request.user_id)

        generator = generator or QuizGenerator()
        prompt = build_quiz_prompt(
            request.topic, request.number_of_questions, request.difficulty, request.user_id
        )
        text = generator.generate(prompt)
        logger.info("Quiz generated", extra={"topic": request.topic, "chars": len(text)})

        if not settings.AI_PERSIST_GENERATED_QUIZZES:
            logger.debug(text)
            return PLACEHOLDER_QUIZ_ID

        quiz_data = parse_generated_quiz(text)
        quiz = QuizService.create_quiz(db, request.user_id, quiz_data)
        return quiz.id
