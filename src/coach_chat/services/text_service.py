from __future__ import annotations

import logging

from coach_chat.application.exceptions import UpstreamError, ValidationError
from coach_chat.application.ports.text_generator import TextGenerator

logger = logging.getLogger(__name__)


async def generate_text(prompt: str | None, generator: TextGenerator) -> str:
    if not prompt:
        raise ValidationError("Prompt is required")
    try:
        return await generator.generate(prompt)
    except UpstreamError:
        raise
    except Exception as exc:
        logger.exception("Text generation failed")
        raise UpstreamError(str(exc) or "Error generating text.") from exc
