"""LearnQuest: a local course dashboard with progress tracking and gamification."""

__version__ = "1.0.0"
