"""
learnquest/tests/conftest.py
Shared fixtures: a throwaway course tree, a JSON store in tmp_path and a
TestClient wired to that store.

Tree built by `course_root`:

    courses/
      Python Basics/        -> course 1
        1 - Intro.mp4       -> video 1001 (matches 1 - Intro.pdf)
        2 - Variables.mp4   -> video 1002
        10 - Wrap Up.mp4    -> video 1003
        1 - Intro.pdf       -> pdf 1004
        readme.txt          (ignored)
      Zz Empty/             -> course 2, no files
      .cache/               (hidden, skipped)
"""
import pytest
from fastapi.testclient import TestClient

from learnquest.main import app
from learnquest.rate_limit import limiter
from learnquest.services.course_scanner import generate_course_data
from learnquest.store import JsonStore, get_store

VIDEO_BYTES = bytes(range(256)) * 4  # 1024 bytes

COURSE_ID = 1
EMPTY_COURSE_ID = 2
INTRO_ID = 1001
VARIABLES_ID = 1002
WRAP_UP_ID = 1003
INTRO_PDF_ID = 1004


@pytest.fixture
def course_root(tmp_path):
    root = tmp_path / "courses"
    course = root / "Python Basics"
    course.mkdir(parents=True)
    for name in ("1 - Intro.mp4", "2 - Variables.mp4", "10 - Wrap Up.mp4"):
        (course / name).write_bytes(VIDEO_BYTES)
    (course / "1 - Intro.pdf").write_bytes(b"%PDF-1.4\n%fake\n")
    (course / "readme.txt").write_text("not course content")
    (root / "Zz Empty").mkdir()
    (root / ".cache").mkdir()
    return root


@pytest.fixture
def store(tmp_path):
    return JsonStore(tmp_path / "data")


@pytest.fixture
def indexed_store(store, course_root):
    generate_course_data(store, [str(course_root)], [".mp4"])
    return store


@pytest.fixture
def client(indexed_store):
    """TestClient whose routes read and write the tmp_path store."""
    app.dependency_overrides[get_store] = lambda: indexed_store
    limiter.reset()
    yield TestClient(app)
    app.dependency_overrides.clear()


def watch(client, video_id, current_time=95.0, duration=100.0, **extra):
    """POST a playback position; 95/100 is past the completion threshold."""
    body = {"currentTime": current_time, "duration": duration}
    body.update(extra)
    return client.post(f"/api/progress/{video_id}", json=body)
