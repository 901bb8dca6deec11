"""Tests for AI quiz generation with Gemini mocked out."""

import json
from unittest.mock import MagicMock, patch

import pytest

from quizapp.core.config import settings
from quizapp.core.exceptions import AIServiceException
from quizapp.models import Quiz
from quizapp.services.ai import PLACEHOLDER_QUIZ_ID, build_quiz_prompt, parse_generated_quiz

GENERATED = {
    "title": "Photosynthesis Basics",
    "description": "Light reactions and the Calvin cycle",
    "category": "Biology",
    "difficulty": "hard",
    "duration": 10,
    "tags": ["biology"],
    "isPublic": True,
    "questions": [
        {
            "id": "1",
            "question": "Where do the light reactions happen?",
            "options": [
                {"id": "a", "text": "Thylakoid membrane"},
                {"id": "b", "text": "Stroma"},
            ],
            "correctOptionId": "a",
        }
    ],
    "createdBy": "1",
}


@pytest.fixture
def mock_genai(monkeypatch):
    """Patch the Gemini client and configure an API key."""
    monkeypatch.setattr(settings, "GEMINI_API_KEY", "test-key")
    with patch("quizapp.services.ai.genai") as genai:
        model = MagicMock()
        model.generate_content.return_value = MagicMock(
            text="```json\n" + json.dumps(GENERATED) + "\n```"
        )
        genai.GenerativeModel.return_value = model
        yield genai


class TestPrompt:
    def test_prompt_mentions_request(self):
        prompt = build_quiz_prompt("Photosynthesis", 5, "hard", 7)

        assert "Topic: Photosynthesis" in prompt
        assert "Number of Questions: 5" in prompt
        assert "Difficulty: hard" in prompt
        assert '"createdBy": "7"' in prompt


class TestParse:
    def test_fenced_json(self):
        quiz = parse_generated_quiz("Here you go:\n```json\n" + json.dumps(GENERATED) + "\n```")
        assert quiz.title == "Photosynthesis Basics"
        assert quiz.questions[0].correct_option_id == "a"

    def test_bare_json(self):
        assert parse_generated_quiz(json.dumps(GENERATED)).category == "Biology"

    def test_unparseable(self):
        with pytest.raises(AIServiceException) as exc_info:
            parse_generated_quiz("Sorry, I can't help with that.")
        assert exc_info.value.status_code == 502


class TestGenerateQuiz:
    def test_generated_quiz_is_saved(self, client, db, make_user, mock_genai, monkeypatch):
        monkeypatch.setattr(settings, "AI_PERSIST_GENERATED_QUIZZES", True)
        user = make_user()

        resp = client.post(
            "/generateQuiz",
            json={"topic": "Photosynthesis", "numberOfQuestions": 5, "difficulty": "hard", "userId": user.id},
        )

        assert resp.status_code == 201
        quiz = db.get(Quiz, resp.json()["quizId"])
        assert quiz.title == "Photosynthesis Basics"
        assert quiz.created_by == user.id
        mock_genai.configure.assert_called_once_with(api_key="test-key")
        prompt = mock_genai.GenerativeModel.return_value.generate_content.call_args[0][0]
        assert "Topic: Photosynthesis" in prompt

        db.expire_all()
        assert user.xp == 2

    def test_placeholder_when_not_saving(self, client, db, mock_genai, monkeypatch):
        monkeypatch.setattr(settings, "AI_PERSIST_GENERATED_QUIZZES", False)

        resp = client.post("/generateQuiz", json={"topic": "Photosynthesis"})

        assert resp.status_code == 201
        assert resp.json() == {"success": "Quiz generated successfully", "quizId": PLACEHOLDER_QUIZ_ID}
        assert db.query(Quiz).count() == 0

    def test_saving_requires_user(self, client, db, mock_genai, monkeypatch):
        monkeypatch.setattr(settings, "AI_PERSIST_GENERATED_QUIZZES", True)

        resp = client.post("/generateQuiz", json={"topic": "Photosynthesis"})

        assert resp.status_code == 400
        mock_genai.GenerativeModel.return_value.generate_content.assert_not_called()

    def test_unknown_owner_skips_model_call(self, client, db, mock_genai, monkeypatch):
        monkeypatch.setattr(settings, "AI_PERSIST_GENERATED_QUIZZES", True)

        resp = client.post("/generateQuiz", json={"topic": "Photosynthesis", "userId": 999})

        assert resp.status_code == 404
        assert resp.json() == {"error": "User not found"}
        mock_genai.GenerativeModel.return_value.generate_content.assert_not_called()

    def test_unparseable_output(self, client, db, make_user, mock_genai, monkeypatch):
        monkeypatch.setattr(settings, "AI_PERSIST_GENERATED_QUIZZES", True)
        mock_genai.GenerativeModel.return_value.generate_content.return_value = MagicMock(
            text="no quiz today"
        )
        user = make_user()

        resp = client.post("/generateQuiz", json={"topic": "Photosynthesis", "userId": user.id})

        assert resp.status_code == 502
        assert db.query(Quiz).count() == 0

    def test_missing_api_key(self, client, db, make_user, monkeypatch):
        monkeypatch.setattr(settings, "GEMINI_API_KEY", None)
        user = make_user()

        resp = client.post("/generateQuiz", json={"topic": "Photosynthesis", "userId": user.id})

        assert resp.status_code == 503
        assert resp.json() == {"error": "Quiz generation is not configured"}

    def test_model_failure_is_generic_500(self, client, db, make_user, mock_genai, monkeypatch):
        monkeypatch.setattr(settings, "AI_PERSIST_GENERATED_QUIZZES", True)
        mock_genai.GenerativeModel.return_value.generate_content.side_effect = RuntimeError("boom")
        user = make_user()

        resp = client.post("/generateQuiz", json={"topic": "Photosynthesis", "userId": user.id})

        assert resp.status_code == 500
        assert resp.json() == {"error": "An error occurred while generating the quiz"}
