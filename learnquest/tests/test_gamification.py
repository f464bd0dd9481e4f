"""
learnquest/tests/test_gamification.py
XP, level, streak and achievement rules (no HTTP)
"""
from datetime import date, datetime

import pytest

from learnquest.schemas.gamification import CompletionEvents, UserStats
from learnquest.services import gamification


# ============================================================================
# Fixtures
# ============================================================================

@pytest.fixture
def state():
    return gamification.default_state()


@pytest.fixture
def events():
    return CompletionEvents()


def _unlocked(state):
    return {a.id for a in state.achievements if a.unlocked}


class TestLevels:

    @pytest.mark.parametrize("xp,level", [(0, 1), (99, 1), (100, 2), (250, 3), (1000, 11)])
    def test_level_for_xp(self, xp, level):
        assert gamification.level_for_xp(xp) == level

    def test_level_progress(self):
        progress = gamification.level_progress(250)
        assert progress.level == 3
        assert progress.xp_into_level == 50
        assert progress.xp_to_next_level == 50
        assert progress.percent == 50.0

    def test_award_xp_reports_level_up(self):
        stats = UserStats(total_xp=90)
        assert gamification.award_xp(stats, 5) is False
        assert gamification.award_xp(stats, 5) is True
        assert stats.total_xp == 100
        assert stats.level == 2

    def test_grant_xp_records_events(self, state, events):
        gamification.grant_xp(state, 120, "test", events)
        assert events.xp_awarded == 120
        assert events.leveled_up is True
        assert events.level == 2
        assert events.reasons == ["+120 XP: test"]


class TestStreaks:

    def test_first_activity_starts_streak(self):
        stats = UserStats()
        gamification.register_activity(stats, datetime(2024, 5, 1, 12))
        assert stats.current_streak == 1
        assert stats.longest_streak == 1
        assert stats.last_activity_date.startswith("2024-05-01")

    def test_same_day_keeps_streak(self):
        stats = UserStats(current_streak=2, longest_streak=2, last_activity_date="2024-05-01T08:00:00")
        gamification.register_activity(stats, datetime(2024, 5, 1, 23))
        assert stats.current_streak == 2

    def test_next_day_increments(self):
        stats = UserStats(current_streak=2, longest_streak=2, last_activity_date="2024-05-01T23:59:00")
        gamification.register_activity(stats, datetime(2024, 5, 2, 0, 1))
        assert stats.current_streak == 3
        assert stats.longest_streak == 3

    def test_gap_restarts_at_one(self):
        stats = UserStats(current_streak=5, longest_streak=5, last_activity_date="2024-05-01T10:00:00")
        gamification.register_activity(stats, datetime(2024, 5, 4, 10))
        assert stats.current_streak == 1
        assert stats.longest_streak == 5

    def test_decay_after_missed_day(self):
        stats = UserStats(current_streak=4, longest_streak=4, last_activity_date="2024-05-01T10:00:00")
        assert gamification.decay_streak(stats, date(2024, 5, 3)) is True
        assert stats.current_streak == 0
        assert stats.longest_streak == 4

    def test_no_decay_from_yesterday(self):
        stats = UserStats(current_streak=4, last_activity_date="2024-05-01T10:00:00")
        assert gamification.decay_streak(stats, date(2024, 5, 2)) is False
        assert stats.current_streak == 4

    def test_no_decay_without_activity(self):
        assert gamification.decay_streak(UserStats(), date(2024, 5, 2)) is False


class TestAchievements:

    def test_catalogue_has_ten_locked_entries(self, state):
        assert len(state.achievements) == 10
        assert not _unlocked(state)

    def test_first_video_unlock_pays_bonus(self, state, events):
        state.stats.total_videos_completed = 1
        unlocked = gamification.evaluate_achievements(state, datetime(2024, 5, 1, 12), None, events)
        assert [a.id for a in unlocked] == ["first-video"]
        assert state.stats.total_xp == gamification.XP_ACHIEVEMENT
        assert unlocked[0].unlocked_at == "2024-05-01T12:00:00"

    def test_unlock_is_not_repeated(self, state, events):
        state.stats.total_videos_completed = 1
        gamification.evaluate_achievements(state, datetime(2024, 5, 1, 12), None, events)
        again = gamification.evaluate_achievements(state, datetime(2024, 5, 1, 13), None, CompletionEvents())
        assert again == []
        assert state.stats.total_xp == gamification.XP_ACHIEVEMENT

    def test_bonus_xp_can_unlock_level_achievement(self, state, events):
        # 380 XP is level 4; the first-video bonus pushes it to 430 (level 5)
        state.stats.total_xp = 380
        state.stats.level = 4
        state.stats.total_videos_completed = 1
        gamification.evaluate_achievements(state, datetime(2024, 5, 1, 12), None, events)
        assert {"first-video", "level-5"} <= _unlocked(state)
        assert state.stats.total_xp == 480

    @pytest.mark.parametrize("hour,expected", [
        (22, {"night-owl"}),
        (2, {"night-owl"}),
        (5, {"night-owl", "early-bird"}),
        (6, {"early-bird"}),
        (7, set()),
        (21, set()),
    ])
    def test_time_of_day_achievements(self, state, events, hour, expected):
        gamification.evaluate_achievements(
            state, datetime(2024, 5, 1, hour), gamification.REASON_VIDEO_COMPLETE, events
        )
        assert _unlocked(state) & {"night-owl", "early-bird"} == expected

    def test_time_of_day_needs_video_completion(self, state, events):
        gamification.evaluate_achievements(state, datetime(2024, 5, 1, 23), "manual", events)
        assert "night-owl" not in _unlocked(state)

    def test_streak_achievements(self, state, events):
        state.stats.current_streak = 7
        gamification.evaluate_achievements(state, datetime(2024, 5, 1, 12), None, events)
        assert {"3-day-streak", "7-day-streak"} <= _unlocked(state)


class TestPersistence:

    def test_load_state_defaults(self, store):
        state = gamification.load_state(store)
        assert state.stats.total_xp == 0
        assert len(state.achievements) == 10

    def test_stored_keys_are_camel_case(self, store, state):
        gamification.save_state(store, state)
        raw = store.read("gamification")
        assert "totalXP" in raw["stats"]
        assert "currentStreak" in raw["stats"]

    def test_missing_catalogue_entries_are_restored(self, store):
        store.write("gamification", {
            "stats": {"totalXP": 10, "level": 1},
            "achievements": [{"id": "first-video", "title": "First Steps", "description": "x",
                              "icon": "🎬", "unlocked": True}],
        })
        state = gamification.load_state(store)
        assert len(state.achievements) == 10
        assert _unlocked(state) == {"first-video"}

    def test_apply_reward(self, store):
        state, events = gamification.apply_reward(store, 40, "quest", now=datetime(2024, 5, 1, 12))
        assert events.xp_awarded == 40
        assert gamification.load_state(store).stats.total_xp == 40
