"""Realtime frame models.

Inbound frames are decoded once into one of three variants keyed on ``type``:
reactions, typing signals, and chat messages (the fallback for any other or
missing ``type``). Decoding checks only the tag and that required fields are
present; value types are left to the record store. Outbound frames are flat
JSON objects.
"""
from __future__ import annotations

from typing import Any, Literal, Union

from pydantic import BaseModel, ConfigDict, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from coach_chat.domain.entities.message import Reaction
from coach_chat.domain.value_objects.enums import FrameType

INVALID_FORMAT = "Invalid message format"
MISSING_MESSAGE_ID = "Message ID is required for reactions"
MISSING_TYPING_FIELDS = "Sender ID and Chat ID are required for typing events"
PERSIST_FAILED = "Failed to process message"

TYPING_TYPES = frozenset({FrameType.TYPING_STARTED.value, FrameType.TYPING_STOPPED.value})

_json_object = TypeAdapter(dict[str, Any])


class FrameError(Exception):
    """Inbound frame rejected before any side effect."""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(detail)


# ── Client → Server ──────────────────────────────────────────────────


class ReactionFrame(BaseModel):
    model_config = ConfigDict(extra="ignore")

    type: Literal["reaction"]
    messageId: Any = None  # noqa: N815
    reaction: Any = None
    senderId: Any = None  # noqa: N815


class TypingFrame(BaseModel):
    model_config = ConfigDict(extra="ignore")

    type: Literal["typing_started", "typing_stopped"]
    senderId: Any = None  # noqa: N815
    chat_id: Any = None


class ChatFrame(BaseModel):
    """Anything that is not a reaction or typing signal. Unknown fields are kept."""

    model_config = ConfigDict(extra="allow")

    type: Any = None
    chat_id: Any = None
    author_id: Any = None
    content: Any = None


Frame = Union[ReactionFrame, TypingFrame, ChatFrame]


def decode_frame(raw: str | bytes) -> Frame:
    """Parse and classify one inbound frame, raising FrameError on bad input."""
    try:
        data = _json_object.validate_json(raw)
    except PydanticValidationError:
        raise FrameError(INVALID_FORMAT) from None

    kind = data.get("type")
    try:
        if kind == FrameType.REACTION:
            frame: Frame = ReactionFrame.model_validate(data)
            if not frame.messageId:
                raise FrameError(MISSING_MESSAGE_ID)
        elif isinstance(kind, str) and kind in TYPING_TYPES:
            frame = TypingFrame.model_validate(data)
            if not frame.senderId or not frame.chat_id:
                raise FrameError(MISSING_TYPING_FIELDS)
        else:
            frame = ChatFrame.model_validate(data)
    except PydanticValidationError:
        raise FrameError(INVALID_FORMAT) from None
    return frame


# ── Server → Client ──────────────────────────────────────────────────


class ReactionUpdateFrame(BaseModel):
    type: Literal["reactionUpdate"] = "reactionUpdate"
    messageId: Any  # noqa: N815
    reactions: list[dict[str, Any]]

    @classmethod
    def build(cls, message_id: Any, reactions: list[Reaction]) -> ReactionUpdateFrame:
        return cls(messageId=message_id, reactions=[r.to_dict() for r in reactions])


class ErrorFrame(BaseModel):
    error: str
