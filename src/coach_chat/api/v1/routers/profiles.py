from __future__ import annotations

from typing import Any, Literal

from fastapi import APIRouter, Query

from coach_chat.api.deps import StoreDep
from coach_chat.api.v1.schemas.profile import ResumeUrlResponse, SearchUsersResponse
from coach_chat.application.exceptions import ValidationError
from coach_chat.services import profile_service

router = APIRouter(prefix="/api/v1", tags=["profiles"])


@router.get("/fetch-user-bio-and-image/{user_id}")
async def fetch_user_bio_and_image(user_id: str, store: StoreDep) -> dict[str, Any]:
    return await profile_service.get_user_bio(user_id, store)


@router.get("/fetch-resume-url/{user_id}", response_model=ResumeUrlResponse)
async def fetch_resume_url(user_id: str, store: StoreDep) -> ResumeUrlResponse:
    url = await profile_service.get_resume_url(user_id, store)
    return ResumeUrlResponse(resume_url=url)


@router.get("/fetch-resume-url2/{user_id}", response_model=ResumeUrlResponse)
async def fetch_coach_resume_url(user_id: str, store: StoreDep) -> ResumeUrlResponse:
    url = await profile_service.get_resume_url(user_id, store, coach=True)
    return ResumeUrlResponse(resume_url=url)


@router.get("/fetch-user-by-name")
async def fetch_user_by_name(
    store: StoreDep,
    username: str | None = Query(None),
) -> dict[str, Any]:
    if not username:
        raise ValidationError("Username is required.")
    return await profile_service.get_profile_by_name(username, store, not_found="User not found.")


@router.get("/fetch-user-profile")
async def fetch_user_profile(
    store: StoreDep,
    username: str | None = Query(None),
) -> dict[str, Any]:
    if not username:
        raise ValidationError("Username is required")
    return await profile_service.get_profile_by_name(username, store, not_found="User not found")


@router.get("/search-users", response_model=SearchUsersResponse)
async def search_users(
    store: StoreDep,
    query: str | None = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    sort: str = Query("name"),
    order: Literal["asc", "desc"] = Query("asc"),
) -> SearchUsersResponse:
    if not query:
        raise ValidationError("Search query is required")
    result = await profile_service.search_users(
        query, store, page=page, limit=limit, sort=sort, ascending=order == "asc",
    )
    return SearchUsersResponse(profiles=result.profiles, has_more=result.has_more)


@router.get("/search-suggestions")
async def search_suggestions(
    store: StoreDep,
    query: str | None = Query(None),
) -> list[str]:
    if not query:
        raise ValidationError("Search query is required")
    return await profile_service.search_suggestions(query, store)
