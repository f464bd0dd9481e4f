"""
learnquest/tests/test_quizzes_api.py
Quiz authoring, answer-free retrieval and grading
"""
import pytest

from learnquest.services import gamification

from learnquest.tests.conftest import INTRO_ID

QUIZ = {
    "questions": [
        {"question": "2 + 2?", "options": ["3", "4", "5"], "correctAnswer": 1},
        {"question": "Python is...", "options": ["a snake", "a language"], "correctAnswer": 1,
         "explanation": "Both, but here a language"},
        {"question": "HTTP 206?", "options": ["OK", "Partial Content"], "correctAnswer": 1},
        {"question": "len('abc')?", "options": ["2", "3"], "correctAnswer": 1},
        {"question": "True or False?", "options": ["True", "False"], "correctAnswer": 0},
    ]
}


@pytest.fixture
def quiz_client(client):
    response = client.put(f"/api/quizzes/{INTRO_ID}", json=QUIZ)
    assert response.status_code == 200
    return client


class TestQuizAuthoring:

    def test_missing_quiz_is_404(self, client):
        response = client.get(f"/api/quizzes/{INTRO_ID}")
        assert response.status_code == 404
        assert response.json()["code"] == "QUIZ_NOT_FOUND"

    def test_answers_are_hidden(self, quiz_client):
        data = quiz_client.get(f"/api/quizzes/{INTRO_ID}").json()
        assert len(data["questions"]) == 5
        assert "correctAnswer" not in data["questions"][0]
        assert "explanation" not in data["questions"][1]
        assert data["attemptCount"] == 0

    def test_answer_index_must_exist(self, client):
        bad = {"questions": [{"question": "q", "options": ["a", "b"], "correctAnswer": 2}]}
        assert client.put(f"/api/quizzes/{INTRO_ID}", json=bad).status_code == 422

    def test_needs_two_options(self, client):
        bad = {"questions": [{"question": "q", "options": ["a"], "correctAnswer": 0}]}
        assert client.put(f"/api/quizzes/{INTRO_ID}", json=bad).status_code == 422

    def test_needs_a_question(self, client):
        assert client.put(f"/api/quizzes/{INTRO_ID}", json={"questions": []}).status_code == 422

    def test_replace_keeps_attempts(self, quiz_client):
        quiz_client.post(f"/api/quizzes/{INTRO_ID}/submit", json={"answers": [0]})
        quiz_client.put(f"/api/quizzes/{INTRO_ID}", json={"questions": QUIZ["questions"][:2]})
        data = quiz_client.get(f"/api/quizzes/{INTRO_ID}").json()
        assert len(data["questions"]) == 2
        assert data["attemptCount"] == 1

    def test_delete(self, quiz_client):
        assert quiz_client.delete(f"/api/quizzes/{INTRO_ID}").status_code == 200
        assert quiz_client.get(f"/api/quizzes/{INTRO_ID}").status_code == 404
        assert quiz_client.delete(f"/api/quizzes/{INTRO_ID}").status_code == 404


class TestQuizSubmission:

    def test_perfect_score(self, quiz_client):
        data = quiz_client.post(f"/api/quizzes/{INTRO_ID}/submit", json={"answers": [1, 1, 1, 1, 0]}).json()
        assert data["score"] == 5
        assert data["percent"] == 100.0
        assert data["passed"] is True
        assert all(r["isCorrect"] for r in data["results"])

    def test_sixty_percent_passes(self, quiz_client):
        data = quiz_client.post(f"/api/quizzes/{INTRO_ID}/submit", json={"answers": [1, 1, 1, 0, 1]}).json()
        assert data["score"] == 3
        assert data["passed"] is True

    def test_below_sixty_percent_fails(self, quiz_client):
        data = quiz_client.post(f"/api/quizzes/{INTRO_ID}/submit", json={"answers": [1, 1]}).json()
        assert data["score"] == 2
        assert data["passed"] is False
        assert data["xpAwarded"] == 0
        assert data["results"][4]["selected"] is None
        assert data["results"][4]["correctAnswer"] == 0

    def test_results_include_explanation(self, quiz_client):
        data = quiz_client.post(f"/api/quizzes/{INTRO_ID}/submit", json={"answers": [0, 0]}).json()
        assert data["results"][1]["explanation"] == "Both, but here a language"

    def test_first_pass_awards_xp_once(self, quiz_client, indexed_store):
        first = quiz_client.post(f"/api/quizzes/{INTRO_ID}/submit", json={"answers": [1, 1, 1, 1, 0]}).json()
        assert first["firstPass"] is True
        assert first["xpAwarded"] == gamification.XP_QUIZ_PASSED

        second = quiz_client.post(f"/api/quizzes/{INTRO_ID}/submit", json={"answers": [1, 1, 1, 1, 0]}).json()
        assert second["firstPass"] is False
        assert second["xpAwarded"] == 0
        assert gamification.load_state(indexed_store).stats.total_xp == gamification.XP_QUIZ_PASSED

    def test_best_score_tracked(self, quiz_client):
        quiz_client.post(f"/api/quizzes/{INTRO_ID}/submit", json={"answers": [1, 1, 1, 1, 0]})
        quiz_client.post(f"/api/quizzes/{INTRO_ID}/submit", json={"answers": []})
        data = quiz_client.get(f"/api/quizzes/{INTRO_ID}").json()
        assert data["bestScore"] == 100.0
        assert data["passed"] is True
        assert data["attemptCount"] == 2

    def test_submit_without_quiz(self, client):
        response = client.post(f"/api/quizzes/{INTRO_ID}/submit", json={"answers": [0]})
        assert response.status_code == 404
