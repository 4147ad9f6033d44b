from __future__ import annotations

from enum import StrEnum


class MessageStatus(StrEnum):
    SENT = "sent"
    WAITING_FOR_COACH = "waiting_for_coach"


class UserRole(StrEnum):
    COACH = "coach"
    USER = "user"


class FrameType(StrEnum):
    REACTION = "reaction"
    TYPING_STARTED = "typing_started"
    TYPING_STOPPED = "typing_stopped"
