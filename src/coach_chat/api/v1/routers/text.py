from __future__ import annotations

from fastapi import APIRouter

from coach_chat.api.deps import TextGeneratorDep
from coach_chat.api.v1.schemas.text import GenerateTextRequest, GenerateTextResponse
from coach_chat.services import text_service

router = APIRouter(tags=["text"])


@router.post("/generate-text", response_model=GenerateTextResponse)
async def generate_text(
    body: GenerateTextRequest,
    generator: TextGeneratorDep,
) -> GenerateTextResponse:
    text = await text_service.generate_text(body.prompt, generator)
    return GenerateTextResponse(generated_text=text)
