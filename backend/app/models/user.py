"""User ORM — the credential store: identity, password hash, role and token balance.

Invariants:
    - email is unique (DB constraint) and stored lower-cased
    - password_hash is a bcrypt hash, never plaintext
    - tokens_balance starts at the welcome bonus (set by the registration service)
    - users are never deleted by the API

Design Decisions:
    - role stored as string matching UserRole values: readable in SQL, no enum migrations
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Integer, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from app.core.domain_types import UserRole
from app.db.base import Base


class User(Base):
    """Registered account — owns sites."""
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True, index=True,
    )
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(
        String(20), nullable=False, default=UserRole.USER.value,
    )
    tokens_balance: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    sites: Mapped[list["Site"]] = relationship(
        "Site", back_populates="user",
        cascade="all, delete-orphan", passive_deletes=True,
    )
