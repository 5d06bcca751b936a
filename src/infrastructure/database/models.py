"""SQLAlchemy ORM models."""

from datetime import date, datetime
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Date,
    DateTime,
    ForeignKey,
    Index,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class ProfileModel(Base):
    """Dating profile model (primary key is the Supabase auth user id)."""

    __tablename__ = "profiles"

    id: Mapped[UUID] = mapped_column(PG_UUID(as_uuid=True), primary_key=True)
    full_name: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    birthdate: Mapped[date | None] = mapped_column(Date)
    gender: Mapped[str | None] = mapped_column(String(50))
    bio: Mapped[str | None] = mapped_column(Text)
    interests: Mapped[list[str]] = mapped_column(JSONB, default=list)
    location: Mapped[str] = mapped_column(String(255), nullable=False, default="El Paso, TX")
    avatar_url: Mapped[str | None] = mapped_column(String(500))
    occupation: Mapped[str | None] = mapped_column(String(255))
    education: Mapped[str | None] = mapped_column(String(255))
    languages: Mapped[list[str]] = mapped_column(JSONB, default=list)
    verified: Mapped[bool] = mapped_column(Boolean, default=False)
    settings: Mapped[dict[str, Any]] = mapped_column(JSONB, default=dict)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )

    # Relationships
    swipes: Mapped[list["SwipeModel"]] = relationship(
        "SwipeModel",
        back_populates="swiper",
        foreign_keys="SwipeModel.swiper_id",
        cascade="all, delete-orphan",
    )


class SwipeModel(Base):
    """Append-only swipe decision."""

    __tablename__ = "swipes"
    __table_args__ = (
        UniqueConstraint("swiper_id", "swiped_id", name="uq_swipes_pair"),
        CheckConstraint("swiper_id != swiped_id", name="ck_swipes_no_self"),
        CheckConstraint("action IN ('like', 'dislike')", name="ck_swipes_action"),
    )

    id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )
    swiper_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    swiped_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    action: Mapped[str] = mapped_column(String(10), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    # Relationships
    swiper: Mapped["ProfileModel"] = relationship(
        "ProfileModel",
        back_populates="swipes",
        foreign_keys=[swiper_id],
    )
    swiped: Mapped["ProfileModel"] = relationship(
        "ProfileModel",
        foreign_keys=[swiped_id],
    )


class MatchModel(Base):
    """Directionally stored match between two profiles."""

    __tablename__ = "matches"
    __table_args__ = (
        CheckConstraint(
            "status IN ('pending', 'matched', 'unmatched')",
            name="ck_matches_status",
        ),
        Index("ix_matches_pair", "user_id", "matched_user_id"),
        UniqueConstraint("pair_key", name="uq_matches_pair"),
    )

    id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )
    user_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    matched_user_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    # Both ids in sorted order, so A->B and B->A share one key
    pair_key: Mapped[str] = mapped_column(String(73), nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="pending")
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )

    # Relationships
    user: Mapped["ProfileModel"] = relationship("ProfileModel", foreign_keys=[user_id])
    matched_user: Mapped["ProfileModel"] = relationship(
        "ProfileModel", foreign_keys=[matched_user_id]
    )
    messages: Mapped[list["MessageModel"]] = relationship(
        "MessageModel",
        back_populates="match",
        cascade="all, delete-orphan",
    )


class MessageModel(Base):
    """Chat message inside a match."""

    __tablename__ = "messages"

    id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )
    match_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("matches.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    sender_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    # Relationships
    match: Mapped["MatchModel"] = relationship("MatchModel", back_populates="messages")
    sender: Mapped["ProfileModel"] = relationship("ProfileModel")


class ReportedContentModel(Base):
    """User report awaiting moderation."""

    __tablename__ = "reported_content"
    __table_args__ = (
        CheckConstraint(
            "status IN ('pending', 'approved', 'rejected')",
            name="ck_reported_content_status",
        ),
        CheckConstraint(
            "content_type IN ('profile', 'message')",
            name="ck_reported_content_type",
        ),
    )

    id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )
    reporter_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
    )
    reported_user_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    reason: Mapped[str] = mapped_column(String(500), nullable=False)
    content_type: Mapped[str] = mapped_column(String(20), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="pending", index=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    # Relationships
    reporter: Mapped["ProfileModel"] = relationship("ProfileModel", foreign_keys=[reporter_id])
    reported_user: Mapped["ProfileModel"] = relationship(
        "ProfileModel", foreign_keys=[reported_user_id]
    )
