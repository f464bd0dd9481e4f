"""
learnquest/store.py
Flat JSON document store

One file per document in the data directory (data.json, progress.json, ...).
Reads rehydrate from disk every time; writes replace the whole file.
Last write wins: there is no locking and no cross-file transaction.
"""
import copy
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Optional

from learnquest.config import settings

logger = logging.getLogger(__name__)

COURSES = "data"
PROGRESS = "progress"
GAMIFICATION = "gamification"
NOTES = "notes"
QUIZZES = "quizzes"
ANALYTICS = "analytics"
QUESTS = "quests"

DOCUMENTS = (COURSES, PROGRESS, GAMIFICATION, NOTES, QUIZZES, ANALYTICS, QUESTS)


class StoreError(Exception):
    """A document exists on disk but cannot be decoded."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read {path}: {reason}")


class JsonStore:
    def __init__(self, data_dir: Path):
        self.data_dir = Path(data_dir)

    def path_for(self, name: str) -> Path:
        return self.data_dir / f"{name}.json"

    def exists(self, name: str) -> bool:
        return self.path_for(name).exists()

    def read(self, name: str, default: Any = None) -> Any:
        """
        Load a document.

        Args:
            name: Document name without extension
            default: Returned (deep-copied) when the file does not exist

        Raises:
            StoreError: the file exists but is not valid JSON
        """
        path = self.path_for(name)
        if not path.exists():
            return copy.deepcopy(default)
        try:
            with open(path, "r", encoding="utf-8") as fh:
                return json.load(fh)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.error(f"❌ Corrupt store file {path}: {e}")
            raise StoreError(path, str(e))

    def write(self, name: str, data: Any) -> None:
        path = self.path_for(name)
        self.data_dir.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(prefix=f".{name}.", suffix=".tmp", dir=self.data_dir)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(data, fh, indent=2, ensure_ascii=False)
            os.replace(tmp_path, path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise

    def delete(self, name: str) -> bool:
        path = self.path_for(name)
        if path.exists():
            path.unlink()
            return True
        return False


_store: Optional[JsonStore] = None


def get_store() -> JsonStore:
    """Dependency for getting the process-wide JSON store"""
    global _store
    if _store is None:
        _store = JsonStore(settings.data_dir)
        logger.info(f"✓ JSON store at {settings.data_dir}")
    return _store
