"""
learnquest/tests/test_media.py
Video streaming and PDF delivery
"""
from learnquest.config import feature_flags

from learnquest.tests.conftest import VIDEO_BYTES

STREAM_URL = "/api/stream/Python Basics/1 - Intro.mp4"
PDF_URL = "/api/pdf/Python Basics/1 - Intro.pdf"
SIZE = len(VIDEO_BYTES)


class TestStreamEndpoint:

    def test_partial_content(self, client):
        response = client.get(STREAM_URL, headers={"Range": "bytes=0-99"})
        assert response.status_code == 206
        assert response.headers["content-range"] == f"bytes 0-99/{SIZE}"
        assert response.headers["accept-ranges"] == "bytes"
        assert response.headers["content-length"] == "100"
        assert response.headers["content-type"] == "video/mp4"
        assert response.content == VIDEO_BYTES[:100]

    def test_open_ended_range(self, client):
        response = client.get(STREAM_URL, headers={"Range": "bytes=1000-"})
        assert response.status_code == 206
        assert response.content == VIDEO_BYTES[1000:]

    def test_end_is_clamped_to_file_size(self, client):
        response = client.get(STREAM_URL, headers={"Range": "bytes=1000-5000"})
        assert response.status_code == 206
        assert response.headers["content-range"] == f"bytes 1000-{SIZE - 1}/{SIZE}"
        assert response.content == VIDEO_BYTES[1000:]

    def test_suffix_range(self, client):
        response = client.get(STREAM_URL, headers={"Range": "bytes=-10"})
        assert response.status_code == 206
        assert response.content == VIDEO_BYTES[-10:]

    def test_range_past_end(self, client):
        response = client.get(STREAM_URL, headers={"Range": "bytes=5000-"})
        assert response.status_code == 416
        assert response.headers["content-range"].endswith(f"*/{SIZE}")

    def test_stale_if_range_sends_whole_file(self, client):
        response = client.get(STREAM_URL, headers={"Range": "bytes=0-99", "If-Range": '"stale-etag"'})
        assert response.status_code == 200
        assert response.content == VIDEO_BYTES

    def test_matching_if_range_keeps_range(self, client):
        etag = client.get(STREAM_URL).headers["etag"]
        response = client.get(STREAM_URL, headers={"Range": "bytes=0-99", "If-Range": etag})
        assert response.status_code == 206
        assert response.content == VIDEO_BYTES[:100]

    def test_head_sends_headers_only(self, client):
        response = client.head(STREAM_URL)
        assert response.status_code == 200
        assert response.headers["content-length"] == str(SIZE)
        assert response.content == b""

    def test_no_range_sends_whole_file(self, client):
        response = client.get(STREAM_URL)
        assert response.status_code == 200
        assert response.headers["accept-ranges"] == "bytes"
        assert response.content == VIDEO_BYTES

    def test_no_range_rejected_when_strict(self, client, monkeypatch):
        monkeypatch.setattr(feature_flags, "FEATURE_STRICT_RANGE", True)
        response = client.get(STREAM_URL)
        assert response.status_code == 416
        assert response.headers["content-range"] == f"bytes */{SIZE}"
        assert response.json()["code"] == "RANGE_REQUIRED"

    def test_range_allowed_when_strict(self, client, monkeypatch):
        monkeypatch.setattr(feature_flags, "FEATURE_STRICT_RANGE", True)
        response = client.get(STREAM_URL, headers={"Range": "bytes=0-9"})
        assert response.status_code == 206

    def test_unknown_course(self, client):
        response = client.get("/api/stream/Nope/1 - Intro.mp4", headers={"Range": "bytes=0-1"})
        assert response.status_code == 404
        assert response.json()["code"] == "COURSE_NOT_FOUND"

    def test_missing_file(self, client):
        response = client.get("/api/stream/Python Basics/99 - Ghost.mp4", headers={"Range": "bytes=0-1"})
        assert response.status_code == 404
        assert response.json()["code"] == "FILE_NOT_FOUND"

    def test_traversal_is_rejected(self, client, course_root):
        (course_root / "secret.mp4").write_bytes(b"top secret")
        response = client.get("/api/stream/Python Basics/..%2Fsecret.mp4", headers={"Range": "bytes=0-1"})
        assert response.status_code == 404


class TestPdfEndpoint:

    def test_pdf_is_inline(self, client):
        response = client.get(PDF_URL)
        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert response.headers["content-disposition"] == "inline"
        assert response.content.startswith(b"%PDF")

    def test_pdf_range(self, client):
        response = client.get(PDF_URL, headers={"Range": "bytes=0-3"})
        assert response.status_code == 206
        assert response.content == b"%PDF"

    def test_missing_pdf(self, client):
        response = client.get("/api/pdf/Python Basics/nothing.pdf")
        assert response.status_code == 404
