"""
Event handlers for the two entry points.

Each handler decodes the event, runs its pipeline and always returns an
envelope: 200 on success, the error's own status for a TutorError, and a
generic "ERROR" / 500 for anything else. Failures from the provider or the
interpreter produce exactly one log record tagged with the pipeline name.
"""

import json
import logging
from collections.abc import Callable
from typing import Any

from app.envelope import err, ok, parse
from tutor import pipeline
from tutor.config import get_settings
from tutor.errors import TutorError
from tutor.provider import ModelProvider, OpenAICompatibleProvider

log = logging.getLogger("api")

BUILD_PLAN_SPEC = "BUILD_PLAN_SPEC"
LESSON_CHAT = "LESSON_CHAT"


def _body(event: dict | None) -> Any:
    # A malformed body is treated as empty so validation reports the missing field.
    try:
        return parse(event)
    except (json.JSONDecodeError, UnicodeDecodeError):
        return {}


def _run(name: str, fn: Callable[[], dict[str, Any]]) -> dict[str, Any]:
    try:
        return ok(fn())
    except TutorError as e:
        if e.status_code >= 500:
            log.exception("[%s][ERROR] %s", name, e.code)
        else:
            log.info("[%s] rejected: %s (%s)", name, e.code, e.message)
        return err(e.message, e.status_code)
    except Exception:
        log.exception("[%s][ERROR] unexpected failure", name)
        return err("ERROR", 500)


def build_plan_spec(event: dict | None, provider: ModelProvider) -> dict[str, Any]:
    body = _body(event)
    return _run(BUILD_PLAN_SPEC, lambda: pipeline.build_course_plan_spec(body, provider))


def lesson_chat(
    event: dict | None,
    provider: ModelProvider,
    response_format: str | None = None,
    delimited_fallback: bool | None = None,
) -> dict[str, Any]:
    body = _body(event)

    def _chat() -> dict[str, Any]:
        # Settings are read inside the guard so a bad LESSON_CHAT_FORMAT still yields an envelope.
        settings = get_settings()
        fmt = response_format or settings.lesson_chat_format
        fallback = settings.delimited_fallback if delimited_fallback is None else delimited_fallback
        return pipeline.lesson_chat(body, provider, fmt, fallback)

    return _run(LESSON_CHAT, _chat)


# ---------------------------------------------------------------------------
# Serverless entry points (provider built from process settings)
# ---------------------------------------------------------------------------

def build_plan_spec_handler(event: dict | None, context: Any = None) -> dict[str, Any]:
    return build_plan_spec(event, OpenAICompatibleProvider(get_settings()))


def lesson_chat_handler(event: dict | None, context: Any = None) -> dict[str, Any]:
    return lesson_chat(event, OpenAICompatibleProvider(get_settings()))
