"""
learnquest/services/gamification.py
XP, levels, streaks and achievements

RULES:
- level = totalXP // 100 + 1
- streak counts consecutive local calendar days with at least one completion
- every achievement unlock is worth 50 XP; unlocks are re-evaluated until
  nothing new unlocks, since the bonus XP can itself cross a level threshold

Functions here mutate the models they are given and never touch the store,
except load_state, save_state and apply_reward.
"""
import logging
from datetime import date, datetime, timedelta
from typing import List, Optional, Tuple

from learnquest.schemas.gamification import (
    Achievement,
    CompletionEvents,
    GamificationState,
    LevelProgress,
    UserStats,
)
from learnquest.store import GAMIFICATION, JsonStore

logger = logging.getLogger(__name__)

XP_PER_LEVEL = 100
XP_VIDEO_COMPLETED = 25
XP_COURSE_COMPLETED = 100
XP_ACHIEVEMENT = 50
XP_QUIZ_PASSED = 30

REASON_VIDEO_COMPLETE = "video-complete"

ACHIEVEMENT_CATALOG = [
    {"id": "first-video", "title": "First Steps", "description": "Complete your first video", "icon": "🎬"},
    {"id": "5-videos", "title": "Getting Started", "description": "Complete 5 videos", "icon": "🌟"},
    {"id": "10-videos", "title": "Dedicated Learner", "description": "Complete 10 videos", "icon": "📚"},
    {"id": "first-course", "title": "Course Conqueror", "description": "Complete your first course", "icon": "🏆"},
    {"id": "3-day-streak", "title": "Consistent", "description": "Maintain a 3-day streak", "icon": "🔥"},
    {"id": "7-day-streak", "title": "Week Warrior", "description": "Maintain a 7-day streak", "icon": "⚡"},
    {"id": "level-5", "title": "Rising Star", "description": "Reach level 5", "icon": "⭐"},
    {"id": "level-10", "title": "Expert", "description": "Reach level 10", "icon": "💎"},
    {"id": "night-owl", "title": "Night Owl", "description": "Complete a video after 10 PM", "icon": "🦉"},
    {"id": "early-bird", "title": "Early Bird", "description": "Complete a video before 7 AM", "icon": "🐦"},
]


# ================= STATE =================

def default_achievements() -> List[Achievement]:
    return [Achievement(**entry) for entry in ACHIEVEMENT_CATALOG]


def default_state() -> GamificationState:
    return GamificationState(stats=UserStats(), achievements=default_achievements())


def load_state(store: JsonStore) -> GamificationState:
    """
    Load gamification.json, falling back to defaults.

    Catalogue entries missing from an older file are appended locked, so a
    file written before an achievement existed still gets it.
    """
    raw = store.read(GAMIFICATION)
    if raw is None:
        return default_state()
    state = GamificationState.model_validate(raw)
    known = {a.id for a in state.achievements}
    for entry in ACHIEVEMENT_CATALOG:
        if entry["id"] not in known:
            state.achievements.append(Achievement(**entry))
    return state


def save_state(store: JsonStore, state: GamificationState) -> None:
    store.write(GAMIFICATION, state.to_store())


# ================= LEVELS =================

def level_for_xp(xp: int) -> int:
    return max(xp, 0) // XP_PER_LEVEL + 1


def level_progress(xp: int) -> LevelProgress:
    into_level = max(xp, 0) % XP_PER_LEVEL
    return LevelProgress(
        level=level_for_xp(xp),
        xp_into_level=into_level,
        xp_for_next_level=XP_PER_LEVEL,
        xp_to_next_level=XP_PER_LEVEL - into_level,
        percent=round(into_level / XP_PER_LEVEL * 100, 1),
    )


def award_xp(stats: UserStats, amount: int) -> bool:
    """Add XP and recompute the level. Returns True when the level went up."""
    previous_level = stats.level
    stats.total_xp = max(stats.total_xp + amount, 0)
    stats.level = level_for_xp(stats.total_xp)
    return stats.level > previous_level


def grant_xp(state: GamificationState, amount: int, reason: str, events: CompletionEvents) -> None:
    """award_xp plus bookkeeping on the events object returned to the client."""
    if amount <= 0:
        return
    leveled_up = award_xp(state.stats, amount)
    events.xp_awarded += amount
    events.leveled_up = events.leveled_up or leveled_up
    events.level = state.stats.level
    events.reasons.append(f"+{amount} XP: {reason}")
    logger.info(f"⭐ +{amount} XP ({reason}) -> {state.stats.total_xp} XP, level {state.stats.level}")


# ================= STREAKS =================

def _activity_day(stats: UserStats) -> Optional[date]:
    if not stats.last_activity_date:
        return None
    try:
        parsed = datetime.fromisoformat(stats.last_activity_date.replace("Z", "+00:00"))
    except ValueError:
        logger.warning(f"Unparseable lastActivityDate: {stats.last_activity_date!r}")
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed.date()


def register_activity(stats: UserStats, now: datetime) -> None:
    """
    Record a completion at `now`.

    Same day as the last activity: streak unchanged.
    The day after (or no activity yet): streak + 1.
    Otherwise: streak restarts at 1.
    """
    today = now.date()
    last_day = _activity_day(stats)

    if last_day != today:
        if last_day is None or last_day == today - timedelta(days=1):
            stats.current_streak += 1
        else:
            stats.current_streak = 1

    stats.longest_streak = max(stats.longest_streak, stats.current_streak)
    stats.last_activity_date = now.isoformat()


def decay_streak(stats: UserStats, today: date) -> bool:
    """Zero the current streak when the last activity is older than yesterday."""
    last_day = _activity_day(stats)
    if last_day is None or stats.current_streak == 0:
        return False
    if last_day in (today, today - timedelta(days=1)):
        return False
    logger.info(f"🔥 Streak of {stats.current_streak} lost (last activity {last_day})")
    stats.current_streak = 0
    return True


# ================= ACHIEVEMENTS =================

def _should_unlock(achievement_id: str, stats: UserStats, reason: Optional[str], hour: int) -> bool:
    if achievement_id == "first-video":
        return stats.total_videos_completed >= 1
    if achievement_id == "5-videos":
        return stats.total_videos_completed >= 5
    if achievement_id == "10-videos":
        return stats.total_videos_completed >= 10
    if achievement_id == "first-course":
        return stats.total_courses_completed >= 1
    if achievement_id == "3-day-streak":
        return stats.current_streak >= 3
    if achievement_id == "7-day-streak":
        return stats.current_streak >= 7
    if achievement_id == "level-5":
        return stats.level >= 5
    if achievement_id == "level-10":
        return stats.level >= 10
    if achievement_id == "night-owl":
        return reason == REASON_VIDEO_COMPLETE and (hour >= 22 or hour < 6)
    if achievement_id == "early-bird":
        return reason == REASON_VIDEO_COMPLETE and 5 <= hour < 7
    return False


def evaluate_achievements(
    state: GamificationState,
    now: datetime,
    reason: Optional[str],
    events: CompletionEvents
) -> List[Achievement]:
    """
    Unlock every achievement whose condition now holds.

    Each unlock grants XP_ACHIEVEMENT, which can satisfy a level achievement,
    so passes repeat until one unlocks nothing.
    """
    unlocked: List[Achievement] = []
    while True:
        newly = []
        for achievement in state.achievements:
            if achievement.unlocked:
                continue
            if _should_unlock(achievement.id, state.stats, reason, now.hour):
                achievement.unlocked = True
                achievement.unlocked_at = now.isoformat()
                newly.append(achievement)

        if not newly:
            break

        for achievement in newly:
            logger.info(f"🏆 Achievement unlocked: {achievement.title}")
            grant_xp(state, XP_ACHIEVEMENT, f"Achievement: {achievement.title}", events)
        unlocked.extend(newly)

    events.unlocked_achievements.extend(unlocked)
    return unlocked


def apply_reward(
    store: JsonStore,
    amount: int,
    reason: str,
    now: Optional[datetime] = None,
    achievement_reason: Optional[str] = None
) -> Tuple[GamificationState, CompletionEvents]:
    """Load, grant XP, settle achievements, save. Used by quests, quizzes and manual awards."""
    now = now or datetime.now()
    state = load_state(store)
    events = CompletionEvents(level=state.stats.level)
    grant_xp(state, amount, reason, events)
    evaluate_achievements(state, now, achievement_reason, events)
    save_state(store, state)
    events.level = state.stats.level
    return state, events
