"""
Process configuration.

Values come from the environment (a local .env file is loaded first) and are
frozen into a Settings object that is handed to the provider at startup.
"""

import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()

DEFAULT_MODEL_ID = "gemini-2.5-flash-lite"
DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai/"

LESSON_CHAT_FORMATS = ("freeform", "structured")


def _first_env(*names: str, default: str | None = None) -> str | None:
    for name in names:
        value = (os.getenv(name) or "").strip()
        if value:
            return value
    return default


def _flag(name: str, default: str) -> bool:
    return (os.getenv(name) or default).strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    stage: str = "dev"
    api_key: str | None = None
    model_id: str = DEFAULT_MODEL_ID
    base_url: str | None = DEFAULT_BASE_URL
    temperature: float = 0.4
    lesson_chat_format: str = "freeform"
    delimited_fallback: bool = True
    api_base_url: str = "http://localhost:8000"

    @classmethod
    def from_env(cls) -> "Settings":
        fmt = _first_env("LESSON_CHAT_FORMAT", default="freeform").lower()
        if fmt not in LESSON_CHAT_FORMATS:
            raise RuntimeError(
                f"LESSON_CHAT_FORMAT must be one of {LESSON_CHAT_FORMATS}. Got: {fmt}"
            )
        return cls(
            stage=_first_env("STAGE", "ENV", default="dev"),
            api_key=_first_env("LLM_API_KEY", "GOOGLE_API_KEY", "OPENAI_API_KEY"),
            model_id=_first_env("LLM_MODEL_ID", "GEMINI_MODEL_ID", default=DEFAULT_MODEL_ID),
            base_url=_first_env("LLM_BASE_URL", default=DEFAULT_BASE_URL),
            temperature=float(_first_env("LLM_TEMPERATURE", default="0.4")),
            lesson_chat_format=fmt,
            delimited_fallback=_flag("LESSON_CHAT_DELIMITED_FALLBACK", "1"),
            api_base_url=_first_env("API_BASE_URL", default="http://localhost:8000"),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()
