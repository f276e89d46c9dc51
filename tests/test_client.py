import pytest

from frontend import client
from tutor.config import Settings


class _FakeResponse:
    def __init__(self, status_code, payload=None, text=""):
        self.status_code = status_code
        self._payload = payload
        self.text = text

    def json(self):
        if self._payload is None:
            raise ValueError("no json")
        return self._payload


@pytest.fixture
def posted(monkeypatch):
    """Capture requests.post calls and answer with a queued response."""
    calls = []
    replies = []

    def _post(url, json=None, timeout=None):
        calls.append({"url": url, "json": json, "timeout": timeout})
        return replies.pop(0)

    monkeypatch.setattr(client.requests, "post", _post)
    return calls, replies


class TestDevConsoleClient:
    """Test the requests client used by the Streamlit console."""

    def test_build_plan_spec(self, posted):
        """Test URL, payload and the (status, payload) result."""
        calls, replies = posted
        replies.append(_FakeResponse(200, {"title": "Python"}))

        status, data = client.build_plan_spec("Python", base_url="http://api.test/")

        assert (status, data) == (200, {"title": "Python"})
        assert calls[0]["url"] == "http://api.test/build-plan-spec"
        assert calls[0]["json"] == {"topic": "Python"}

    def test_lesson_chat_error_passthrough(self, posted, sample_lesson):
        """Test that 400 replies are returned, not raised."""
        calls, replies = posted
        replies.append(_FakeResponse(400, {"error": "QUESTION_REQUIRED"}))

        status, data = client.lesson_chat("", sample_lesson, base_url="http://api.test")

        assert status == 400
        assert data == {"error": "QUESTION_REQUIRED"}
        assert calls[0]["url"] == "http://api.test/lesson-chat"
        assert calls[0]["json"] == {"question": "", "lesson": sample_lesson}

    def test_non_json_reply(self, posted):
        """Test that a non-JSON body is wrapped as an error payload."""
        _, replies = posted
        replies.append(_FakeResponse(502, None, text="Bad Gateway"))
        assert client.build_plan_spec("x", base_url="http://api.test") == (502, {"error": "Bad Gateway"})

    def test_base_url_from_settings(self, posted, monkeypatch):
        """Test that API_BASE_URL from settings is used when no base_url is given."""
        calls, replies = posted
        replies.append(_FakeResponse(200, {"title": "Python"}))
        monkeypatch.setattr(client, "get_settings", lambda: Settings(api_base_url="http://cfg.test/"))

        client.build_plan_spec("Python")

        assert calls[0]["url"] == "http://cfg.test/build-plan-spec"
