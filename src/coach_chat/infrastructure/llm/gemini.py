"""Gemini-backed implementation of the TextGenerator port."""
from __future__ import annotations

import logging

from google import genai

from coach_chat.application.exceptions import UpstreamError

logger = logging.getLogger(__name__)


class GeminiTextGenerator:
    def __init__(self, api_key: str, model: str) -> None:
        self._client = genai.Client(api_key=api_key)
        self._model = model

    async def generate(self, prompt: str) -> str:
        response = await self._client.aio.models.generate_content(
            model=self._model,
            contents=prompt,
        )
        if not response.text:
            raise UpstreamError("Empty response from text model")
        logger.debug("Generated %d chars with %s", len(response.text), self._model)
        return response.text
