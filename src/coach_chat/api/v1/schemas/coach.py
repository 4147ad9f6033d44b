from __future__ import annotations

from pydantic import BaseModel

from coach_chat.api.v1.schemas.common import CamelModel


class CoachFormRequest(CamelModel):
    user_id: str | None = None
    q1: str | None = None
    q2: str | None = None
    q3: str | None = None
    q4: str | None = None
    q5: str | None = None


class CoachSelectionRequest(CamelModel):
    user_id: str
    coach_id: str


class CoachBioRequest(CamelModel):
    coach_id: str


class CoachSummary(BaseModel):
    id: str
    name: str | None = None
