"""
learnquest/tests/test_gamification_api.py
Stats, achievements, summary, manual awards and reset over HTTP
"""
from datetime import datetime, timedelta

from learnquest.services import gamification


class TestStatsEndpoints:

    def test_default_stats(self, client):
        stats = client.get("/api/gamification/stats").json()
        assert stats["totalXP"] == 0
        assert stats["level"] == 1
        assert stats["currentStreak"] == 0

    def test_overwrite_recomputes_level(self, client):
        response = client.post("/api/gamification/stats", json={"totalXP": 450, "level": 1})
        assert response.status_code == 200
        assert response.json()["stats"]["level"] == 5
        assert client.get("/api/gamification/stats").json()["totalXP"] == 450

    def test_stale_streak_decays_on_read(self, client, indexed_store):
        state = gamification.load_state(indexed_store)
        state.stats.current_streak = 6
        state.stats.longest_streak = 6
        state.stats.last_activity_date = (datetime.now() - timedelta(days=3)).isoformat()
        gamification.save_state(indexed_store, state)

        stats = client.get("/api/gamification/stats").json()
        assert stats["currentStreak"] == 0
        assert stats["longestStreak"] == 6
        assert gamification.load_state(indexed_store).stats.current_streak == 0

    def test_yesterdays_streak_survives(self, client, indexed_store):
        state = gamification.load_state(indexed_store)
        state.stats.current_streak = 2
        state.stats.last_activity_date = (datetime.now() - timedelta(days=1)).isoformat()
        gamification.save_state(indexed_store, state)
        assert client.get("/api/gamification/stats").json()["currentStreak"] == 2


class TestAchievementEndpoints:

    def test_catalogue(self, client):
        achievements = client.get("/api/gamification/achievements").json()
        assert len(achievements) == 10
        assert achievements[0]["id"] == "first-video"

    def test_overwrite(self, client):
        achievements = client.get("/api/gamification/achievements").json()
        achievements[0]["unlocked"] = True
        achievements[0]["unlockedAt"] = "2024-05-01T12:00:00"
        response = client.post("/api/gamification/achievements", json=achievements[:3])
        assert response.status_code == 200
        saved = response.json()["achievements"]
        assert len(saved) == 10
        assert saved[0]["unlocked"] is True


class TestAwardAndSummary:

    def test_award_levels_up(self, client):
        data = client.post("/api/gamification/award", json={"amount": 120, "reason": "bonus"}).json()
        assert data["stats"]["totalXP"] == 120
        assert data["stats"]["level"] == 2
        assert data["events"]["leveledUp"] is True
        assert data["events"]["xpAwarded"] == 120

    def test_award_unlocks_level_achievement(self, client):
        data = client.post("/api/gamification/award", json={"amount": 400}).json()
        assert "level-5" in {a["id"] for a in data["events"]["unlockedAchievements"]}
        assert data["stats"]["totalXP"] == 450

    def test_award_must_be_positive(self, client):
        assert client.post("/api/gamification/award", json={"amount": 0}).status_code == 422

    def test_summary(self, client):
        client.post("/api/gamification/award", json={"amount": 130})
        summary = client.get("/api/gamification/summary").json()
        assert summary["levelProgress"]["xpIntoLevel"] == 30
        assert summary["levelProgress"]["xpToNextLevel"] == 70
        assert summary["unlockedAchievements"] == 0
        assert summary["totalAchievements"] == 10

    def test_reset(self, client):
        client.post("/api/gamification/award", json={"amount": 500})
        response = client.post("/api/gamification/reset")
        assert response.json()["success"] is True
        assert client.get("/api/gamification/stats").json()["totalXP"] == 0
        achievements = client.get("/api/gamification/achievements").json()
        assert not any(a["unlocked"] for a in achievements)
