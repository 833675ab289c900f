"""Site ORM — a website a user automates content publishing for.

Invariants:
    - Always belongs to exactly one User (user_id FK, immutable)
    - (user_id, url) is unique: the database is the enforcement boundary for duplicates
    - wp_config is NULL whenever type is GENERIC
    - status is ACTIVE | INACTIVE

Design Decisions:
    - JSON column for wp_config: small credential bundle, read and written whole
    - passive_deletes on children: DB-level ON DELETE CASCADE does the work, so the
      owner-scoped bulk DELETE needs no ORM load
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    String, Text, DateTime, JSON, ForeignKey, UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from app.core.domain_types import SiteStatus, SiteType
from app.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Site(Base):
    """Site entity — owner-scoped resource."""
    __tablename__ = "sites"
    __table_args__ = (
        UniqueConstraint("user_id", "url", name="uq_sites_user_id_url"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    url: Mapped[str] = mapped_column(Text, nullable=False)
    type: Mapped[str] = mapped_column(
        String(20), nullable=False, default=SiteType.GENERIC.value,
    )
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=SiteStatus.ACTIVE.value,
    )
    wp_config: Mapped[dict | None] = mapped_column(
        JSON(none_as_null=True), nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
        default=_utcnow, onupdate=_utcnow,
    )

    user: Mapped["User"] = relationship("User", back_populates="sites")
    articles: Mapped[list["Article"]] = relationship(
        "Article", back_populates="site", passive_deletes=True,
    )
    automations: Mapped[list["Automation"]] = relationship(
        "Automation", back_populates="site", passive_deletes=True,
    )
    sources: Mapped[list["Source"]] = relationship(
        "Source", back_populates="site", passive_deletes=True,
    )
