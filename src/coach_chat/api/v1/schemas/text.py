from __future__ import annotations

from pydantic import BaseModel

from coach_chat.api.v1.schemas.common import CamelModel


class GenerateTextRequest(BaseModel):
    prompt: str | None = None


class GenerateTextResponse(CamelModel):
    generated_text: str
