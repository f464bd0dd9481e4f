"""
learnquest/services/analytics_service.py
Watch-time and completion analytics

All durations are seconds. Day keys are local dates (YYYY-MM-DD); course
keys are course ids as strings.
"""
import logging
from datetime import date, timedelta
from typing import Optional, Union

from learnquest.schemas.analytics import Analytics, DayStats, WeeklyDay, WeeklySummary
from learnquest.store import ANALYTICS, JsonStore

logger = logging.getLogger(__name__)


def load_analytics(store: JsonStore) -> Analytics:
    raw = store.read(ANALYTICS)
    return Analytics.model_validate(raw) if raw is not None else Analytics()


def save_analytics(store: JsonStore, analytics: Analytics) -> None:
    store.write(ANALYTICS, analytics.to_store())


def _bucket(buckets: dict, key: str) -> DayStats:
    if key not in buckets:
        buckets[key] = DayStats()
    return buckets[key]


def add_watch_time(
    analytics: Analytics,
    seconds: float,
    day: date,
    course_id: Optional[Union[int, str]] = None
) -> int:
    """
    Add watched seconds to the total, the day and the course.

    Returns the number of whole minutes today's total crossed, which is what
    the study-time quest advances by.
    """
    today = _bucket(analytics.daily_stats, day.isoformat())
    minutes_before = int(today.watch_time // 60)

    analytics.total_watch_time += seconds
    today.watch_time += seconds
    if course_id is not None:
        _bucket(analytics.course_stats, str(course_id)).watch_time += seconds

    return int(today.watch_time // 60) - minutes_before


def record_completion(analytics: Analytics, day: date, course_id: Optional[Union[int, str]] = None) -> None:
    _bucket(analytics.daily_stats, day.isoformat()).videos_completed += 1
    if course_id is not None:
        _bucket(analytics.course_stats, str(course_id)).videos_completed += 1


def weekly_summary(analytics: Analytics, today: date) -> WeeklySummary:
    """The last seven days, oldest first, in minutes."""
    days = []
    for offset in range(6, -1, -1):
        current = today - timedelta(days=offset)
        stats = analytics.daily_stats.get(current.isoformat(), DayStats())
        days.append(WeeklyDay(
            date=current.isoformat(),
            day=current.strftime("%a"),
            minutes=round(stats.watch_time / 60),
            videos=stats.videos_completed,
        ))

    total_minutes = sum(d.minutes for d in days)
    return WeeklySummary(
        days=days,
        total_minutes=total_minutes,
        average_minutes=round(total_minutes / 7, 1),
    )
