"""
Request validation for both pipelines.

Pure functions: they read the decoded JSON body, trim the required fields and
raise a RequestValidationError subclass before anything reaches the model.
"""

from typing import Any

from tutor.errors import LessonRequiredError, QuestionRequiredError, TopicRequiredError
from tutor.schemas import CoursePlanRequest, Lesson, LessonChatRequest


def _text(value: Any) -> str:
    return "" if value is None else str(value).strip()


def validate_topic_request(body: Any) -> CoursePlanRequest:
    """Accept {"topic": ...} or the legacy alias {"title": ...}."""
    body = body if isinstance(body, dict) else {}
    topic = _text(body.get("topic")) or _text(body.get("title"))
    if not topic:
        raise TopicRequiredError()
    return CoursePlanRequest(topic=topic)


def validate_lesson_chat_request(body: Any) -> LessonChatRequest:
    body = body if isinstance(body, dict) else {}

    question = _text(body.get("question"))
    if not question:
        raise QuestionRequiredError()

    raw_lesson = body.get("lesson")
    if not isinstance(raw_lesson, dict) or not _text(raw_lesson.get("contentMD")):
        raise LessonRequiredError()

    return LessonChatRequest(question=question, lesson=Lesson.model_validate(raw_lesson))
