"""
The two request pipelines: validate → build prompt → call model → interpret.

Both functions take the decoded request body and a ModelProvider and return
the JSON-ready success payload. Failures are raised as TutorError subclasses
(or whatever the provider raised) and converted to envelopes by app.handlers.
"""

import logging
import time
from typing import Any

from tutor.errors import TopicNotAllowedError
from tutor.interpreter import interpret_course_plan, interpret_lesson_chat
from tutor.prompts import FREEFORM, build_course_plan_prompt, build_lesson_chat_prompt
from tutor.provider import ModelProvider
from tutor.validator import validate_lesson_chat_request, validate_topic_request

log = logging.getLogger(__name__)


def build_course_plan_spec(body: Any, provider: ModelProvider) -> dict[str, Any]:
    req = validate_topic_request(body)
    t0 = time.perf_counter()

    prompt = build_course_plan_prompt(req.topic)
    text = provider.generate(
        prompt.system,
        prompt.user,
        max_output_tokens=prompt.max_output_tokens,
        response_format=prompt.response_format,
    )
    result = interpret_course_plan(text)

    elapsed = time.perf_counter() - t0
    log.info("topic=%r  allowed=%s  %.2fs", req.topic, result.allowed, elapsed)

    if not result.allowed:
        raise TopicNotAllowedError(result.reason)

    return {
        **result.spec.model_dump(),
        "topic": req.topic,
        "suggestions": [s.model_dump() for s in result.suggestions],
    }


def lesson_chat(
    body: Any,
    provider: ModelProvider,
    response_format: str = FREEFORM,
    delimited_fallback: bool = True,
) -> dict[str, Any]:
    req = validate_lesson_chat_request(body)
    t0 = time.perf_counter()

    prompt = build_lesson_chat_prompt(req.lesson, req.question, response_format)
    text = provider.generate(
        prompt.system,
        prompt.user,
        max_output_tokens=prompt.max_output_tokens,
        response_format=prompt.response_format,
    )
    result = interpret_lesson_chat(text, req.lesson, response_format, delimited_fallback)

    elapsed = time.perf_counter() - t0
    log.info(
        "question=%r  format=%s  lesson_changed=%s  %.2fs",
        req.question, response_format, result.updated_lesson != req.lesson, elapsed,
    )
    return result.to_payload()
