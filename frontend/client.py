"""
Thin requests client for the backend, used by the Streamlit dev console.

Both calls return (status_code, payload). 400/500 replies are returned as-is
(payload is {"error": ...}); connection problems raise requests exceptions.
"""

import requests

from tutor.config import get_settings

TIMEOUT = 60


def api_url() -> str:
    return get_settings().api_base_url.rstrip("/")


def _post(path: str, payload: dict, base_url: str | None = None) -> tuple[int, dict]:
    url = f"{(base_url or api_url()).rstrip('/')}{path}"
    resp = requests.post(url, json=payload, timeout=TIMEOUT)
    try:
        data = resp.json()
    except ValueError:
        data = {"error": resp.text or "ERROR"}
    return resp.status_code, data


def build_plan_spec(topic: str, base_url: str | None = None) -> tuple[int, dict]:
    return _post("/build-plan-spec", {"topic": topic}, base_url)


def lesson_chat(question: str, lesson: dict, base_url: str | None = None) -> tuple[int, dict]:
    return _post("/lesson-chat", {"question": question, "lesson": lesson}, base_url)
