"""FastAPI dependency injection helpers."""
from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from starlette.requests import HTTPConnection

from coach_chat.application.ports.record_store import RecordStore
from coach_chat.application.ports.text_generator import TextGenerator
from coach_chat.config import settings
from coach_chat.infrastructure.llm.gemini import GeminiTextGenerator
from coach_chat.infrastructure.ws.manager import ConnectionManager


def get_store(conn: HTTPConnection) -> RecordStore:
    return conn.app.state.store


StoreDep = Annotated[RecordStore, Depends(get_store)]


def get_manager(conn: HTTPConnection) -> ConnectionManager:
    return conn.app.state.manager


ManagerDep = Annotated[ConnectionManager, Depends(get_manager)]


_generator: TextGenerator | None = None


def get_text_generator() -> TextGenerator:
    global _generator  # noqa: PLW0603
    if _generator is None:
        _generator = GeminiTextGenerator(settings.GEMINI_API_KEY, settings.GEMINI_MODEL)
    return _generator


TextGeneratorDep = Annotated[TextGenerator, Depends(get_text_generator)]
