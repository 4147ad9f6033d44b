from __future__ import annotations

from typing import Any

from coach_chat.api.v1.schemas.common import CamelModel


class ResumeUrlResponse(CamelModel):
    resume_url: str


class SearchUsersResponse(CamelModel):
    profiles: list[dict[str, Any]]
    has_more: bool
