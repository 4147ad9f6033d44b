from __future__ import annotations

from pydantic import BaseModel, Field

from coach_chat.api.v1.schemas.common import CamelModel


class NewChatResponse(CamelModel):
    new_chat_id: str


class CreateChatWithUserRequest(CamelModel):
    user_id: str = Field(min_length=1)
    other_user_id: str = Field(min_length=1)


class LinkUsersRequest(CamelModel):
    chat_id: str = Field(min_length=1)
    user_ids: list[str]


class SendMessageRequest(BaseModel):
    chat_id: str
    author_id: str
    content: str
