"""Import all models so the record store can resolve collections via Base.metadata."""
from coach_chat.infrastructure.db.models.chat import ChatModel, ChatUserModel
from coach_chat.infrastructure.db.models.message import MessageModel
from coach_chat.infrastructure.db.models.profile import (
    CoachBioModel,
    CoachVetModel,
    ProfileModel,
    UserBioModel,
)
from coach_chat.infrastructure.db.models.relationship import UserCoachRelationshipModel

__all__ = [
    "ChatModel",
    "ChatUserModel",
    "CoachBioModel",
    "CoachVetModel",
    "MessageModel",
    "ProfileModel",
    "UserBioModel",
    "UserCoachRelationshipModel",
]
