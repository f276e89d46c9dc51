"""
Request and result models for the course-plan and lesson-chat pipelines.

Field names on the wire are camelCase (contentMD, miniChallenge,
updatedLesson); the models use snake_case attributes with aliases and dump
by alias.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, StrictBool, field_validator, model_validator

Level = Literal["beginner", "intermediate", "advanced"]


# ---------------------------------------------------------------------------
# Course plan
# ---------------------------------------------------------------------------

class CoursePlanRequest(BaseModel):
    topic: str


class CourseSpec(BaseModel):
    """One generated course description. Title length and tag count are not enforced."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(min_length=1)
    prompt: str = Field(min_length=1)
    level: Level
    tags: list[str]

    @field_validator("level", mode="before")
    @classmethod
    def _lower_level(cls, v: Any) -> Any:
        return v.strip().lower() if isinstance(v, str) else v

    @field_validator("tags", mode="before")
    @classmethod
    def _lower_tags(cls, v: Any) -> Any:
        if not isinstance(v, list):
            return v
        return [str(t).strip().lower() for t in v if str(t).strip()]


class CoursePlanResult(BaseModel):
    allowed: StrictBool
    spec: CourseSpec | None = None
    suggestions: list[CourseSpec] = Field(default_factory=list)
    reason: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _drop_spec_when_disallowed(cls, data: Any) -> Any:
        # A refusal only carries its reason, whatever else the model emitted.
        if isinstance(data, dict) and data.get("allowed") is False:
            return {"allowed": False, "reason": data.get("reason")}
        if isinstance(data, dict) and data.get("suggestions") is None:
            return {**data, "suggestions": []}
        return data

    @field_validator("reason", mode="before")
    @classmethod
    def _clean_reason(cls, v: Any) -> Any:
        if v is None:
            return None
        return str(v).strip() or None

    @model_validator(mode="after")
    def _check_shape(self) -> "CoursePlanResult":
        if self.allowed:
            if self.spec is None:
                raise ValueError("allowed=true requires a spec")
            self.reason = None
        return self


# ---------------------------------------------------------------------------
# Lesson chat
# ---------------------------------------------------------------------------

class Lesson(BaseModel):
    """
    Caller-owned lesson, echoed back as received.

    Only contentMD is normalised to text; other fields keep the caller's
    values, with absent ones defaulted ("" / [] / None).
    """

    model_config = ConfigDict(populate_by_name=True)

    title: Any = ""
    summary: Any = ""
    content_md: str = Field(default="", alias="contentMD")
    tips: list[Any] = Field(default_factory=list)
    mini_challenge: Any = Field(default=None, alias="miniChallenge")

    @field_validator("title", "summary", mode="before")
    @classmethod
    def _default_text(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("content_md", mode="before")
    @classmethod
    def _coerce_body(cls, v: Any) -> str:
        return "" if v is None else str(v)

    @field_validator("tips", mode="before")
    @classmethod
    def _default_tips(cls, v: Any) -> list[Any]:
        return v if isinstance(v, list) else []

    @field_validator("mini_challenge", mode="before")
    @classmethod
    def _blank_challenge(cls, v: Any) -> Any:
        if v is None or (isinstance(v, str) and not v.strip()):
            return None
        return v

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class LessonChatRequest(BaseModel):
    question: str
    lesson: Lesson


class LessonChatResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    answer: str
    updated_lesson: Lesson = Field(alias="updatedLesson")

    def to_payload(self) -> dict[str, Any]:
        return {"answer": self.answer, "updatedLesson": self.updated_lesson.to_payload()}
