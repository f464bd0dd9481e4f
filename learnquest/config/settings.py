"""
learnquest/config/settings.py
Runtime settings loaded from the environment.

.env is loaded from the project root before anything reads os.environ, so a
local COURSE_PATH=... line is enough to point the dashboard at a course tree.
"""
import os
import re
import logging
from pathlib import Path
from typing import List

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
ENV_FILE = PROJECT_ROOT / ".env"

load_dotenv(dotenv_path=ENV_FILE)

logger = logging.getLogger(__name__)

DEFAULT_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:4000",
    "http://localhost:5173",
    "http://127.0.0.1:3000",
    "http://127.0.0.1:4000",
    "http://127.0.0.1:5173",
]


def split_course_paths(raw: str) -> List[str]:
    """Split a COURSE_PATH value on ',' or ';' and drop blanks."""
    if not raw:
        return []
    return [p.strip() for p in re.split(r"[,;]", raw) if p.strip()]


def split_extensions(raw: str) -> List[str]:
    extensions = []
    for ext in raw.split(","):
        ext = ext.strip().lower()
        if not ext:
            continue
        extensions.append(ext if ext.startswith(".") else f".{ext}")
    return extensions


class Settings:
    """Snapshot of the environment taken at construction time."""

    def __init__(self):
        self.course_paths: List[str] = split_course_paths(os.getenv("COURSE_PATH", ""))
        self.data_dir: Path = Path(os.getenv("LEARNQUEST_DATA_DIR", ".")).resolve()
        self.host: str = os.getenv("HOST", "0.0.0.0")
        self.port: int = int(os.getenv("PORT", "4000"))
        self.environment: str = os.getenv("ENVIRONMENT", "development")
        self.log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()
        self.video_extensions: List[str] = split_extensions(os.getenv("VIDEO_EXTENSIONS", ".mp4"))
        self.refresh_rate_limit: str = os.getenv("REFRESH_RATE_LIMIT", "10/minute")

        self.allowed_origins: List[str] = list(DEFAULT_ORIGINS)
        extra_origins = os.getenv("ALLOWED_ORIGINS", "").split(",")
        self.allowed_origins.extend(o.strip() for o in extra_origins if o.strip())

    @property
    def is_development(self) -> bool:
        return self.environment == "development"


settings = Settings()
