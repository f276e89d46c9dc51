import pytest


class FakeProvider:
    """Stands in for the model: returns canned text and records every call."""

    def __init__(self, reply: str = "", error: Exception | None = None):
        self.reply = reply
        self.error = error
        self.calls: list[dict] = []

    def generate(self, system_instruction, user_instruction, *, max_output_tokens, response_format):
        self.calls.append(
            {
                "system": system_instruction,
                "user": user_instruction,
                "max_output_tokens": max_output_tokens,
                "response_format": response_format,
            }
        )
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def fake_provider():
    return FakeProvider


@pytest.fixture
def sample_lesson():
    """A lesson as the platform sends it."""
    return {
        "title": "Variables en Python",
        "summary": "Qué es una variable y cómo se asigna un valor.",
        "contentMD": "# Variables\n\nEn Python `x = 1` asigna el valor 1 a `x`.",
        "tips": ["Usa nombres descriptivos", "Evita nombres de una letra"],
        "miniChallenge": "Crea una variable `edad` y muéstrala con print().",
    }


@pytest.fixture
def allowed_plan_reply():
    return """{
      "allowed": true,
      "spec": {
        "title": "Python desde cero",
        "prompt": "Crea un curso práctico de Python para principiantes con ejercicios.",
        "level": "beginner",
        "tags": ["python", "basics", "beginners"]
      },
      "suggestions": [
        {
          "title": "Python para automatizar tareas",
          "prompt": "Curso de scripts en Python para automatizar tareas cotidianas.",
          "level": "intermediate",
          "tags": ["python", "automation"]
        }
      ]
    }"""
