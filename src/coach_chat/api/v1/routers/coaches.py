from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Query

from coach_chat.api.deps import StoreDep
from coach_chat.api.v1.schemas.coach import (
    CoachBioRequest,
    CoachFormRequest,
    CoachSelectionRequest,
    CoachSummary,
)
from coach_chat.api.v1.schemas.common import MessageResponse, SuccessResponse
from coach_chat.application.exceptions import ValidationError
from coach_chat.services import coach_service

router = APIRouter(prefix="/api/v1", tags=["coaches"])


@router.post("/submit-coach-form", response_model=MessageResponse)
async def submit_coach_form(body: CoachFormRequest, store: StoreDep) -> MessageResponse:
    if not body.user_id:
        raise ValidationError("User ID is required")
    answers = body.model_dump(include={"q1", "q2", "q3", "q4", "q5"})
    await coach_service.submit_vetting_form(body.user_id, answers, store)
    return MessageResponse(message="Form submitted successfully")


@router.get("/fetch-coaches", response_model=list[CoachSummary])
async def fetch_coaches(store: StoreDep) -> list[dict[str, Any]]:
    return await coach_service.list_coaches(store)


@router.post("/create-coach-selection", response_model=SuccessResponse)
async def create_coach_selection(body: CoachSelectionRequest, store: StoreDep) -> SuccessResponse:
    await coach_service.select_coach(body.user_id, body.coach_id, store)
    return SuccessResponse()


@router.post("/fetch-coach-bio-and-image")
async def fetch_coach_bio_and_image(body: CoachBioRequest, store: StoreDep) -> dict[str, Any]:
    return await coach_service.get_coach_bio(body.coach_id, store)


async def _relationships(user_id: str | None, role: str | None, store: StoreDep) -> list[dict[str, Any]]:
    if not user_id or not role:
        raise ValidationError("UserId and UserRole are required")
    return await coach_service.corresponding_users(user_id, role, store)


@router.get("/fetch-corresponding-user")
async def fetch_corresponding_user(
    store: StoreDep,
    user_id: str | None = Query(None, alias="userId"),
    role: str | None = Query(None),
) -> list[dict[str, Any]]:
    return await _relationships(user_id, role, store)


@router.get("/coach-user-relationships")
async def coach_user_relationships(
    store: StoreDep,
    user_id: str | None = Query(None, alias="userId"),
    role: str | None = Query(None),
) -> list[dict[str, Any]]:
    return await _relationships(user_id, role, store)
