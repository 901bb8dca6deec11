"""Tests for creating, submitting and reading quizzes."""

from quizapp.models import Quiz, QuizResult


class TestCreateQuiz:
    def test_create_quiz_credits_creator(self, client, db, make_user, sample_quiz_payload):
        user = make_user()
        resp = client.post(f"/createQuiz/{user.id}", json=sample_quiz_payload)

        assert resp.status_code == 201
        data = resp.json()
        assert data["success"] == "Quiz created successfully"

        quiz = db.get(Quiz, data["quizId"])
        assert quiz.title == "Capitals"
        assert quiz.created_by == user.id
        assert quiz.questions[0]["correctOptionId"] == "a"

        db.expire_all()
        assert user.xp == 2
        assert user.last_activity == 'Created a new quiz on "Capitals"'
        assert [q.id for q in user.quizzes] == [quiz.id]

    def test_create_quiz_unknown_creator(self, client, db, sample_quiz_payload):
        resp = client.post("/createQuiz/999", json=sample_quiz_payload)

        assert resp.status_code == 404
        assert resp.json() == {"error": "User not found"}
        assert db.query(Quiz).count() == 0

    def test_get_quiz_and_list(self, client, make_user, sample_quiz_payload):
        user = make_user()
        quiz_id = client.post(f"/createQuiz/{user.id}", json=sample_quiz_payload).json()["quizId"]

        resp = client.get(f"/getQuiz/{quiz_id}")
        assert resp.status_code == 200
        assert resp.json()["title"] == "Capitals"
        assert resp.json()["isPublic"] is True

        resp = client.get(f"/getQuizzes/{user.id}")
        assert [q["id"] for q in resp.json()] == [quiz_id]

    def test_get_unknown_quiz(self, client, db):
        resp = client.get("/getQuiz/12345")
        assert resp.status_code == 404
        assert resp.json() == {"error": "Quiz not found"}


class TestSubmitQuiz:
    def _quiz(self, db, user):
        quiz = Quiz(title="Capitals", created_by=user.id, questions=[], tags=[])
        db.add(quiz)
        db.commit()
        return quiz

    def test_submit_credits_xp_and_activity(self, client, db, make_user):
        user = make_user()
        quiz = self._quiz(db, user)

        resp = client.post(
            "/submitQuiz",
            json={"quizId": quiz.id, "userId": user.id, "answers": {"1": "a"}, "score": 95},
        )

        assert resp.status_code == 201
        result = db.get(QuizResult, resp.json()["resultId"])
        assert result.score == 95
        assert result.answers == {"1": "a"}

        db.expire_all()
        assert user.xp == 9
        assert user.last_activity == 'Took a quiz on "Capitals" and scored 95%'
        assert user.average_score == 95.0

    def test_average_over_several_submissions(self, client, db, make_user):
        user = make_user()
        quiz = self._quiz(db, user)
        for score in (40, 80):
            client.post("/submitQuiz", json={"quizId": quiz.id, "userId": user.id, "score": score})

        db.expire_all()
        assert user.average_score == 60.0
        assert user.xp == 12

    def test_missing_ids(self, client, db):
        resp = client.post("/submitQuiz", json={"score": 50})

        assert resp.status_code == 400
        assert resp.json() == {"error": "Quiz ID and User ID are required."}
        assert db.query(QuizResult).count() == 0

    def test_unknown_quiz(self, client, db, make_user):
        user = make_user()
        resp = client.post("/submitQuiz", json={"quizId": 77, "userId": user.id, "score": 50})

        assert resp.status_code == 404
        assert db.query(QuizResult).count() == 0

    def test_out_of_range_score_saves_nothing(self, client, db, make_user):
        user = make_user()
        quiz = self._quiz(db, user)

        for score in (1e20, 100.5):
            resp = client.post(
                "/submitQuiz", json={"quizId": quiz.id, "userId": user.id, "score": score}
            )
            assert resp.status_code == 400

        assert db.query(QuizResult).count() == 0
        db.expire_all()
        assert user.xp == 0
        assert user.last_activity == ""

    def test_infinite_score_saves_nothing(self, client, db, make_user):
        user = make_user()
        quiz = self._quiz(db, user)

        resp = client.post(
            "/submitQuiz",
            content=f'{{"quizId": {quiz.id}, "userId": {user.id}, "score": Infinity}}',
            headers={"Content-Type": "application/json"},
        )

        assert resp.status_code == 400
        assert db.query(QuizResult).count() == 0

    def test_perfect_score_accepted(self, client, db, make_user):
        user = make_user()
        quiz = self._quiz(db, user)

        resp = client.post("/submitQuiz", json={"quizId": quiz.id, "userId": user.id, "score": 100})

        assert resp.status_code == 201
        db.expire_all()
        assert user.xp == 10

    def test_negative_score_rejected(self, client, db, make_user):
        user = make_user()
        quiz = self._quiz(db, user)
        resp = client.post("/submitQuiz", json={"quizId": quiz.id, "userId": user.id, "score": -1})

        assert resp.status_code == 400
        assert "error" in resp.json()


class TestResults:
    def test_results_and_count(self, client, db, make_user):
        user = make_user()
        quiz = Quiz(title="Capitals", created_by=user.id)
        db.add(quiz)
        db.commit()
        result_id = client.post(
            "/submitQuiz", json={"quizId": quiz.id, "userId": user.id, "score": 70}
        ).json()["resultId"]

        resp = client.get(f"/getQuizResults/{user.id}")
        assert resp.status_code == 200
        results = resp.json()
        assert [r["id"] for r in results] == [result_id]
        assert results[0]["quiz"]["title"] == "Capitals"

        resp = client.get(f"/getQuizResult/{result_id}")
        assert resp.json()["score"] == 70

        assert client.get(f"/getQuizzesTaken/{user.id}").json() == {"quizzesTaken": 1}

    def test_unknown_result(self, client, db):
        resp = client.get("/getQuizResult/5")
        assert resp.status_code == 404
        assert resp.json() == {"error": "Quiz result not found"}

    def test_user_without_results(self, client, db, make_user):
        user = make_user()
        assert client.get(f"/getQuizResults/{user.id}").json() == []
        assert client.get(f"/getQuizzesTaken/{user.id}").json() == {"quizzesTaken": 0}
