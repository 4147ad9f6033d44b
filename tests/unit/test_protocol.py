from __future__ import annotations

import json

import pytest

from coach_chat.infrastructure.ws.protocol import (
    INVALID_FORMAT,
    MISSING_MESSAGE_ID,
    MISSING_TYPING_FIELDS,
    ChatFrame,
    FrameError,
    ReactionFrame,
    ReactionUpdateFrame,
    TypingFrame,
    decode_frame,
)
from coach_chat.domain.entities.message import Reaction


def test_reaction_frame():
    frame = decode_frame(json.dumps(
        {"type": "reaction", "messageId": "m1", "reaction": "👍", "senderId": "u1"}
    ))

    assert isinstance(frame, ReactionFrame)
    assert frame.messageId == "m1"
    assert frame.reaction == "👍"
    assert frame.senderId == "u1"


@pytest.mark.parametrize("kind", ["typing_started", "typing_stopped"])
def test_typing_frame(kind):
    frame = decode_frame(json.dumps({"type": kind, "senderId": "u1", "chat_id": "c1"}))

    assert isinstance(frame, TypingFrame)
    assert json.loads(frame.model_dump_json()) == {"type": kind, "senderId": "u1", "chat_id": "c1"}


def test_typing_relay_drops_extra_fields():
    frame = decode_frame(json.dumps(
        {"type": "typing_started", "senderId": "u1", "chat_id": "c1", "secret": "x"}
    ))

    assert "secret" not in json.loads(frame.model_dump_json())


@pytest.mark.parametrize(
    "payload",
    [
        {"chat_id": "c1", "author_id": "u1", "content": "hi"},
        {"type": "chat", "chat_id": "c1", "author_id": "u1", "content": "hi"},
        {"type": "something_new", "content": "hi"},
    ],
)
def test_unknown_or_missing_type_falls_back_to_chat(payload):
    assert isinstance(decode_frame(json.dumps(payload)), ChatFrame)


def test_chat_frame_keeps_extra_fields():
    frame = decode_frame(json.dumps({"content": "hi", "userName": "Ann"}))

    assert frame.model_extra == {"userName": "Ann"}


@pytest.mark.parametrize("raw", ["not json", "{", "[1, 2]", "42", '"text"', ""])
def test_unparseable_or_non_object_is_invalid_format(raw):
    with pytest.raises(FrameError) as exc_info:
        decode_frame(raw)

    assert exc_info.value.detail == INVALID_FORMAT


def test_field_value_types_are_not_checked():
    frame = decode_frame(json.dumps({"chat_id": "c1", "author_id": "u1", "content": 5}))

    assert isinstance(frame, ChatFrame)
    assert frame.content == 5


def test_reaction_accepts_non_string_emoji():
    frame = decode_frame(json.dumps({"type": "reaction", "messageId": 7, "reaction": {"id": "x"}}))

    assert isinstance(frame, ReactionFrame)
    assert frame.messageId == 7
    assert frame.reaction == {"id": "x"}


@pytest.mark.parametrize("payload", [{"type": "reaction"}, {"type": "reaction", "messageId": ""}])
def test_reaction_without_message_id(payload):
    with pytest.raises(FrameError) as exc_info:
        decode_frame(json.dumps(payload))

    assert exc_info.value.detail == MISSING_MESSAGE_ID


@pytest.mark.parametrize(
    "payload",
    [
        {"type": "typing_started", "chat_id": "c1"},
        {"type": "typing_stopped", "senderId": "u1"},
    ],
)
def test_typing_without_sender_or_chat(payload):
    with pytest.raises(FrameError) as exc_info:
        decode_frame(json.dumps(payload))

    assert exc_info.value.detail == MISSING_TYPING_FIELDS


def test_bytes_are_accepted():
    frame = decode_frame(b'{"type": "reaction", "messageId": "m1"}')

    assert isinstance(frame, ReactionFrame)


def test_reaction_update_frame_shape():
    frame = ReactionUpdateFrame.build("m1", [Reaction(emoji="👍", user_id="u1", count=1)])

    assert json.loads(frame.model_dump_json()) == {
        "type": "reactionUpdate",
        "messageId": "m1",
        "reactions": [{"emoji": "👍", "userId": "u1", "count": 1}],
    }
