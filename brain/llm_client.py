# -*- coding: utf-8 -*-
"""
brain.llm_client

Common wrapper around the OpenAI Chat API.

- Settings come from core.config (.env): OPENAI_API_KEY, model, temperature
- CompletionClient.complete(prompt): send one prompt, get raw text back
- TextCompletion: the protocol the engine depends on, so any object with a
  complete(prompt) -> str method can stand in (tests use scripted fakes)

The incident engine only talks to the model through this module.
There is no retry and no backoff: a failed call raises
BackendUnavailableError and the turn fails.
"""

from typing import Optional, Protocol

from openai import OpenAI

from core import config
from core.logging import logger

from .errors import BackendUnavailableError


class TextCompletion(Protocol):
    def complete(self, prompt: str) -> str:
        ...


# -------------------- OpenAI Chat wrapper --------------------
class CompletionClient:
    """Send a single prompt as a user message and return the reply text."""

    def __init__(
        self,
        model: str = config.CHAT_MODEL,
        temperature: float = config.CHAT_TEMPERATURE,
        max_tokens: int = config.CHAT_MAX_TOKENS,
        api_key: Optional[str] = None,
    ):
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self._api_key = api_key
        self._client: Optional[OpenAI] = None

    def _get_client(self) -> OpenAI:
        if self._client is None:
            api_key = self._api_key or config.OPENAI_API_KEY
            if not api_key:
                raise BackendUnavailableError("OPENAI_API_KEY is not set in .env")
            self._client = OpenAI(api_key=api_key)
        return self._client

    def complete(self, prompt: str) -> str:
        logger.debug(f"Generating LLM response for prompt length: {len(prompt)}")
        client = self._get_client()

        try:
            resp = client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
        except Exception as e:
            logger.error(f"OpenAI API error: {e}")
            raise BackendUnavailableError("Failed to generate LLM response") from e

        content = resp.choices[0].message.content or ""
        logger.debug(f"LLM response received: {content[:100]}")
        return content.strip()
