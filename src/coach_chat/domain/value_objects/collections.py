"""Record store collection names."""
from __future__ import annotations

MESSAGES = "messages"
CHATS = "chats"
CHATS_USERS = "chats_users"
PROFILES = "profiles"
USER_BIO = "userbio"
COACH_BIO = "coachbio"
COACH_VET = "coachvet"
USER_COACH_RELATIONSHIPS = "user_coach_relationships"
