"""
Model provider capability.

Everything above this module sees a single call:

    generate(system_instruction, user_instruction, *, max_output_tokens, response_format) → str

OpenAICompatibleProvider implements it with the openai SDK against any
OpenAI-compatible chat-completions endpoint (Gemini's, by default). Tests
substitute a fake that returns canned text.
"""

import logging
import time
from typing import Protocol

from openai import OpenAI

from tutor.config import Settings
from tutor.errors import MissingCredentialError
from tutor.prompts import STRUCTURED

log = logging.getLogger(__name__)


class ModelProvider(Protocol):
    def generate(
        self,
        system_instruction: str | None,
        user_instruction: str,
        *,
        max_output_tokens: int,
        response_format: str,
    ) -> str: ...


class OpenAICompatibleProvider:
    def __init__(self, settings: Settings):
        self.settings = settings
        self._client: OpenAI | None = None

    def _get_client(self) -> OpenAI:
        if not self.settings.api_key:
            raise MissingCredentialError()
        if self._client is None:
            self._client = OpenAI(api_key=self.settings.api_key, base_url=self.settings.base_url)
        return self._client

    def generate(
        self,
        system_instruction: str | None,
        user_instruction: str,
        *,
        max_output_tokens: int,
        response_format: str,
    ) -> str:
        client = self._get_client()

        messages = []
        if system_instruction:
            messages.append({"role": "system", "content": system_instruction})
        messages.append({"role": "user", "content": user_instruction or ""})

        extra = {}
        if response_format == STRUCTURED:
            extra["response_format"] = {"type": "json_object"}

        t0 = time.perf_counter()
        completion = client.chat.completions.create(
            model=self.settings.model_id,
            messages=messages,
            max_tokens=max_output_tokens,
            temperature=self.settings.temperature,
            **extra,
        )
        text = completion.choices[0].message.content or ""

        elapsed = time.perf_counter() - t0
        log.info(
            "model=%s  format=%s  chars=%d  %.2fs",
            self.settings.model_id, response_format, len(text), elapsed,
        )
        return text
