"""
Error taxonomy shared by both pipelines.

Every error carries a short machine-readable code and the HTTP status the
adapter layer should answer with. Anything that is not a TutorError is
reported as a generic "ERROR" / 500.
"""


class TutorError(Exception):
    """Base class for errors with a stable code and HTTP status."""

    code = "ERROR"
    status_code = 500

    def __init__(self, message: str | None = None):
        super().__init__(message or self.code)

    @property
    def message(self) -> str:
        return str(self.args[0]) if self.args else self.code


class RequestValidationError(TutorError):
    """Raised before the model is called when a required field is missing."""

    status_code = 400


class TopicRequiredError(RequestValidationError):
    code = "TOPIC_REQUIRED"


class QuestionRequiredError(RequestValidationError):
    code = "QUESTION_REQUIRED"


class LessonRequiredError(RequestValidationError):
    code = "LESSON_REQUIRED"


class MissingCredentialError(TutorError):
    """Raised by the provider when no API key is configured."""

    code = "MISSING_CREDENTIAL"


class UnparseableModelResponseError(TutorError):
    """Raised when the course-plan model output violates its JSON contract."""

    code = "UNPARSEABLE_MODEL_RESPONSE"


class TopicNotAllowedError(TutorError):
    """The model classified the topic as outside programming; carries its reason."""

    code = "TOPIC_NOT_ALLOWED"
    status_code = 400

    def __init__(self, reason: str | None = None):
        self.reason = (reason or "").strip() or None
        super().__init__(self.reason)
