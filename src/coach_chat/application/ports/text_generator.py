from __future__ import annotations

from typing import Protocol


class TextGenerator(Protocol):
    async def generate(self, prompt: str) -> str: ...
