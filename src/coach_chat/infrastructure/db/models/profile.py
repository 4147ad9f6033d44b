"""User-facing profile tables.

Column names are camelCase where the frontend reads them verbatim.
"""
from __future__ import annotations

from datetime import datetime

from sqlalchemy import Index, String, Text, text
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID
from sqlalchemy.orm import Mapped, mapped_column

from coach_chat.infrastructure.db.base import Base


class ProfileModel(Base):
    __tablename__ = "profiles"

    id: Mapped[str] = mapped_column(UUID(as_uuid=False), primary_key=True)
    name: Mapped[str | None] = mapped_column(String(255))
    username: Mapped[str | None] = mapped_column(String(255), unique=True)
    email: Mapped[str | None] = mapped_column(String(255))
    phone: Mapped[str | None] = mapped_column(String(64))
    role: Mapped[str | None] = mapped_column(String(32))  # coach | user
    type: Mapped[str | None] = mapped_column(String(64))
    company: Mapped[str | None] = mapped_column(String(255))
    focusCareer: Mapped[str | None] = mapped_column(Text)  # noqa: N815
    focusLife: Mapped[str | None] = mapped_column(Text)  # noqa: N815

    __table_args__ = (
        Index("ix_profiles_role", "role"),
        Index("ix_profiles_name", "name"),
    )


class _BioColumns:
    id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        primary_key=True,
        server_default=text("gen_random_uuid()"),
    )
    userId: Mapped[str] = mapped_column(UUID(as_uuid=False), nullable=False, index=True)  # noqa: N815
    name: Mapped[str | None] = mapped_column(String(255))
    jobTitle: Mapped[str | None] = mapped_column(String(255))  # noqa: N815
    bio: Mapped[str | None] = mapped_column(Text)
    email: Mapped[str | None] = mapped_column(String(255))
    phone: Mapped[str | None] = mapped_column(String(64))
    location: Mapped[str | None] = mapped_column(String(255))
    imageUrl: Mapped[str | None] = mapped_column(Text)  # noqa: N815
    resumeUrl: Mapped[str | None] = mapped_column(Text)  # noqa: N815


class UserBioModel(_BioColumns, Base):
    __tablename__ = "userbio"


class CoachBioModel(_BioColumns, Base):
    __tablename__ = "coachbio"


class CoachVetModel(Base):
    """Answers to the coach vetting questionnaire."""

    __tablename__ = "coachvet"

    id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        primary_key=True,
        server_default=text("gen_random_uuid()"),
    )
    userId: Mapped[str] = mapped_column(UUID(as_uuid=False), nullable=False)  # noqa: N815
    q1: Mapped[str | None] = mapped_column(Text)
    q2: Mapped[str | None] = mapped_column(Text)
    q3: Mapped[str | None] = mapped_column(Text)
    q4: Mapped[str | None] = mapped_column(Text)
    q5: Mapped[str | None] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=text("now()"),
    )
