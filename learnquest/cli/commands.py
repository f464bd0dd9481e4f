"""
learnquest/cli/commands.py
CLI command handlers: serve, scan, stats, reset
"""
import os
from datetime import datetime
from pathlib import Path
from typing import Optional

from learnquest.config import settings
from learnquest.services import gamification, quest_service
from learnquest.services.course_scanner import generate_course_data, scan_course_paths
from learnquest.store import GAMIFICATION, JsonStore


class BaseCommand:
    """Shared state for command handlers."""

    def __init__(self, data_dir: Optional[str] = None, dry_run: bool = False):
        self.data_dir = Path(data_dir).resolve() if data_dir else settings.data_dir
        self.dry_run = dry_run

    @property
    def store(self) -> JsonStore:
        return JsonStore(self.data_dir)

    def execute(self, args) -> int:
        raise NotImplementedError


class ServeCommand(BaseCommand):
    """Run the API with uvicorn."""

    def execute(self, args) -> int:
        import uvicorn

        # The app builds its store from settings, so point both at the chosen directory
        os.environ["LEARNQUEST_DATA_DIR"] = str(self.data_dir)
        settings.data_dir = self.data_dir

        print(f"LearnQuest on http://{args.host}:{args.port} (data: {self.data_dir})")
        if self.dry_run:
            print("[DRY RUN] Server not started")
            return 0

        uvicorn.run("learnquest.main:app", host=args.host, port=args.port, reload=args.reload)
        return 0


class ScanCommand(BaseCommand):
    """Rescan course roots and print what was found."""

    def execute(self, args) -> int:
        paths = args.paths or settings.course_paths
        if not paths:
            print("Error: no course roots. Set COURSE_PATH or pass --path")
            return 1

        if self.dry_run:
            index = scan_course_paths(paths, settings.video_extensions)
        else:
            index = generate_course_data(self.store, paths, settings.video_extensions)

        print("=== Courses ===")
        for course in index.courses:
            print(f"[{course.id:>3}] {course.title}: {len(course.videos)} videos, {len(course.pdfs)} PDFs")
        print(f"\nTotal: {len(index.courses)} courses")
        if self.dry_run:
            print("[DRY RUN] data.json not written")
        return 0


class StatsCommand(BaseCommand):
    """Print the gamification summary."""

    def execute(self, args) -> int:
        state = gamification.load_state(self.store)
        stats = state.stats
        gamification.decay_streak(stats, datetime.now().date())
        progress = gamification.level_progress(stats.total_xp)

        print("=== LearnQuest Stats ===")
        print(f"Level {stats.level} - {stats.total_xp} XP ({progress.xp_to_next_level} XP to next level)")
        print(f"Streak: {stats.current_streak} days (longest {stats.longest_streak})")
        print(f"Videos completed: {stats.total_videos_completed}")
        print(f"Courses completed: {stats.total_courses_completed}")

        done, total = quest_service.quest_summary(quest_service.load_board(self.store, datetime.now().date()))
        print(f"Daily quests: {done}/{total}")

        unlocked = [a for a in state.achievements if a.unlocked]
        print(f"\n--- Achievements ({len(unlocked)}/{len(state.achievements)}) ---")
        for achievement in state.achievements:
            mark = achievement.icon if achievement.unlocked else "  "
            print(f"{mark} {achievement.title}: {achievement.description}")
        return 0


class ResetCommand(BaseCommand):
    """Remove gamification.json so the next load starts from defaults."""

    def execute(self, args) -> int:
        if not args.yes and not self.dry_run:
            answer = input("Reset XP, streaks and achievements? [y/N] ")
            if answer.strip().lower() not in ("y", "yes"):
                print("Aborted")
                return 1

        if self.dry_run:
            print(f"[DRY RUN] Would reset {self.store.path_for(GAMIFICATION)}")
            return 0

        if self.store.delete(GAMIFICATION):
            print("Gamification data reset")
        else:
            print("Nothing to reset")
        return 0
