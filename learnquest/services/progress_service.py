"""
learnquest/services/progress_service.py
Playback progress and the video completion flow

A video counts as watched once more than 90% of it has been played, or when
the client flags it completed. Completion is sticky: seeking back to the
start later does not un-complete it, so the rewards below are paid once.

COMPLETION FLOW (first save that completes a video):
1. stats: totalVideosCompleted + 1, streak, lastActivityDate
2. +25 XP
3. owning course now fully watched -> totalCoursesCompleted + 1, +100 XP
4. quests watch-1 / watch-3 advance; quests completed here pay their reward
5. analytics: videosCompleted for today and for the course
6. achievements evaluated (night-owl / early-bird use the completion hour)
"""
import logging
from datetime import datetime
from typing import Dict, Optional, Tuple

from learnquest.schemas.course import ContentItem, Course, CourseProgressSummary
from learnquest.schemas.gamification import CompletionEvents
from learnquest.schemas.progress import ProgressUpdateRequest, VideoProgress
from learnquest.services import analytics_service, gamification, quest_service
from learnquest.services.course_scanner import find_course_for_video, load_courses
from learnquest.store import PROGRESS, JsonStore

logger = logging.getLogger(__name__)

COMPLETION_THRESHOLD = 0.9


def load_progress(store: JsonStore) -> Dict[str, VideoProgress]:
    raw = store.read(PROGRESS, {})
    return {video_id: VideoProgress.model_validate(entry) for video_id, entry in raw.items()}


def save_progress(store: JsonStore, progress: Dict[str, VideoProgress]) -> None:
    store.write(PROGRESS, {video_id: entry.to_store() for video_id, entry in progress.items()})


def is_watched(current_time: float, duration: float) -> bool:
    return duration > 0 and current_time / duration > COMPLETION_THRESHOLD


def is_completed(progress: Dict[str, VideoProgress], video_id: int) -> bool:
    entry = progress.get(str(video_id))
    return bool(entry and entry.completed)


def course_progress(course: Course, progress: Dict[str, VideoProgress]) -> CourseProgressSummary:
    total = len(course.videos)
    done = sum(1 for v in course.videos if is_completed(progress, v.id))
    return CourseProgressSummary(
        course_id=course.id,
        total_videos=total,
        completed_videos=done,
        percent=round(done / total * 100, 1) if total else 0.0,
        completed=total > 0 and done == total,
    )


def resume_video(course: Course, progress: Dict[str, VideoProgress]) -> Optional[ContentItem]:
    """
    The video to open when a course is selected.

    Most recently touched unfinished video first, then the first unfinished
    one, then the first video.
    """
    if not course.videos:
        return None

    most_recent = None
    most_recent_time = None
    for video in course.videos:
        entry = progress.get(str(video.id))
        if entry is None or entry.completed or not entry.last_updated:
            continue
        try:
            updated = datetime.fromisoformat(entry.last_updated.replace("Z", "+00:00"))
        except ValueError:
            continue
        if updated.tzinfo is not None:
            updated = updated.astimezone().replace(tzinfo=None)
        if most_recent_time is None or updated > most_recent_time:
            most_recent, most_recent_time = video, updated

    if most_recent is not None:
        return most_recent

    first_incomplete = next((v for v in course.videos if not is_completed(progress, v.id)), None)
    return first_incomplete or course.videos[0]


def save_video_progress(
    store: JsonStore,
    video_id: int,
    update: ProgressUpdateRequest,
    now: Optional[datetime] = None
) -> Tuple[VideoProgress, Optional[CompletionEvents]]:
    """
    Persist a playback position; run the completion flow on first completion.

    Returns the stored entry and the completion events (None when this save
    did not complete the video).
    """
    now = now or datetime.now()
    progress = load_progress(store)
    key = str(video_id)
    was_completed = is_completed(progress, video_id)

    completed = was_completed or bool(update.completed) or is_watched(update.current_time, update.duration)
    entry = VideoProgress(
        current_time=update.current_time,
        duration=update.duration,
        completed=completed,
        last_updated=update.last_updated or now.isoformat(),
    )
    progress[key] = entry
    save_progress(store, progress)

    if completed and not was_completed:
        logger.info(f"✅ Video {video_id} completed")
        events = complete_video(store, video_id, progress, now)
        return entry, events
    return entry, None


def complete_video(
    store: JsonStore,
    video_id: int,
    progress: Dict[str, VideoProgress],
    now: datetime
) -> CompletionEvents:
    """Apply the completion flow. `progress` must already mark the video completed."""
    state = gamification.load_state(store)
    events = CompletionEvents(level=state.stats.level)
    today = now.date()

    stats = state.stats
    stats.total_videos_completed += 1
    gamification.register_activity(stats, now)
    gamification.grant_xp(state, gamification.XP_VIDEO_COMPLETED, "Video completed", events)

    course = find_course_for_video(load_courses(store), video_id)
    if course is not None and course_progress(course, progress).completed:
        logger.info(f"🏁 Course completed: {course.title}")
        stats.total_courses_completed += 1
        events.course_completed = True
        gamification.grant_xp(state, gamification.XP_COURSE_COMPLETED, "Course completed!", events)

    board = quest_service.load_board(store, today)
    for quest in quest_service.advance_quests(
        board, [quest_service.QUEST_WATCH_ONE, quest_service.QUEST_WATCH_THREE]
    ):
        events.completed_quests.append(quest.id)
        gamification.grant_xp(state, quest.reward, f"Quest completed: {quest.title}", events)
    quest_service.save_board(store, board)

    analytics = analytics_service.load_analytics(store)
    analytics_service.record_completion(analytics, today, course.id if course else None)
    analytics_service.save_analytics(store, analytics)

    gamification.evaluate_achievements(state, now, gamification.REASON_VIDEO_COMPLETE, events)
    gamification.save_state(store, state)

    events.level = state.stats.level
    return events
