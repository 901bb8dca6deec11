"""AI schemas"""

from typing import Optional

from pydantic import Field

from quizapp.schemas.common import CamelModel


class QuizGenerationRequest(CamelModel):
    topic: str
    number_of_questions: int = Field(10, ge=1, le=50)
    difficulty: str = "medium"
    user_id: Optional[int] = None
