"""
Response interpreters: raw model text → validated results.

Course plan is strict: anything that is not the agreed JSON shape raises
UnparseableModelResponseError. Lesson chat is lenient in delimited mode (it
never fails on missing markers) and merges whatever came back with the
input lesson so the returned lesson is always complete.

Public API:
    interpret_course_plan(text)                                   → CoursePlanResult
    interpret_lesson_chat(text, lesson, fmt, delimited_fallback)  → LessonChatResult
    extract_section(text, start, end)                             → str | None
    merge_lesson(original, updated)                               → Lesson
"""

import json
import logging
import re
from typing import Any

from pydantic import ValidationError

from tutor.errors import UnparseableModelResponseError
from tutor.prompts import (
    ANSWER_END,
    ANSWER_START,
    FREEFORM,
    LESSON_MD_END,
    LESSON_MD_START,
    STRUCTURED,
)
from tutor.schemas import CoursePlanResult, Lesson, LessonChatResult

log = logging.getLogger(__name__)

_FENCE = re.compile(r"^```[a-zA-Z]*\s*\n?(.*?)\n?```$", re.DOTALL)


def strip_code_fence(raw: str) -> str:
    """Remove a single markdown fence wrapping the whole reply, if any."""
    s = (raw or "").strip()
    m = _FENCE.match(s)
    return m.group(1).strip() if m else s


def _load_json(raw: str) -> Any:
    return json.loads(strip_code_fence(raw))


# ---------------------------------------------------------------------------
# Course plan
# ---------------------------------------------------------------------------

def interpret_course_plan(text: str) -> CoursePlanResult:
    try:
        data = _load_json(text)
    except json.JSONDecodeError as exc:
        raise UnparseableModelResponseError() from exc

    if not isinstance(data, dict):
        raise UnparseableModelResponseError()

    try:
        return CoursePlanResult.model_validate(data)
    except ValidationError as exc:
        raise UnparseableModelResponseError() from exc


# ---------------------------------------------------------------------------
# Lesson chat
# ---------------------------------------------------------------------------

def extract_section(text: str, start: str, end: str) -> str | None:
    """Return the trimmed text between the first start marker and the next end marker."""
    m = re.search(re.escape(start) + r"(.*?)" + re.escape(end), text or "", re.DOTALL)
    return m.group(1).strip() if m else None


def _non_empty_text(value: Any) -> str | None:
    if isinstance(value, str) and value.strip():
        return value
    return None


def merge_lesson(original: Lesson, updated: Any) -> Lesson:
    """
    Fill every field of the outgoing lesson.

    A field from the model wins only if it is present, non-empty and of the
    expected type; otherwise the original lesson's field is kept.
    """
    updated = updated if isinstance(updated, dict) else {}
    tips = updated.get("tips")
    return Lesson(
        title=_non_empty_text(updated.get("title")) or original.title,
        summary=_non_empty_text(updated.get("summary")) or original.summary,
        content_md=_non_empty_text(updated.get("contentMD")) or original.content_md,
        tips=tips if isinstance(tips, list) else original.tips,
        mini_challenge=_non_empty_text(updated.get("miniChallenge")) or original.mini_challenge,
    )


def _interpret_delimited(text: str, lesson: Lesson) -> LessonChatResult:
    raw = text or ""
    answer = extract_section(raw, ANSWER_START, ANSWER_END) or raw.strip()
    content_md = extract_section(raw, LESSON_MD_START, LESSON_MD_END) or ""
    return LessonChatResult(
        answer=answer,
        updated_lesson=merge_lesson(lesson, {"contentMD": content_md}),
    )


def _interpret_structured(text: str, lesson: Lesson) -> LessonChatResult:
    data = _load_json(text)
    if not isinstance(data, dict):
        raise ValueError("Lesson chat reply is not a JSON object")

    answer = _non_empty_text(data.get("answer"))
    if answer is None:
        raise ValueError("Lesson chat reply has no answer")

    return LessonChatResult(
        answer=answer.strip(),
        updated_lesson=merge_lesson(lesson, data.get("updatedLesson")),
    )


def interpret_lesson_chat(
    text: str,
    lesson: Lesson,
    response_format: str = FREEFORM,
    delimited_fallback: bool = True,
) -> LessonChatResult:
    if response_format == FREEFORM:
        return _interpret_delimited(text, lesson)
    if response_format != STRUCTURED:
        raise ValueError(f"Unknown response format: {response_format!r}")

    try:
        return _interpret_structured(text, lesson)
    except ValueError:
        # json.JSONDecodeError is a ValueError subclass.
        if not delimited_fallback:
            raise
        log.info("Structured lesson reply malformed, falling back to delimited extraction.")
        return _interpret_delimited(text, lesson)
