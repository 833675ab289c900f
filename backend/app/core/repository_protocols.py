"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection, one per request
    - Every SiteRepository read/update/delete takes the owner id and applies it in the
      same predicate as the site id (owner-scoped query)

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - *Like protocols describe ORM rows without coupling services to SQLAlchemy
"""

from datetime import datetime
from typing import Any, Protocol

from app.core.domain_types import SiteId, UserId


class UserLike(Protocol):
    """Structural contract for User rows passed to services and routes."""
    id: Any
    name: str
    email: str
    password_hash: str
    role: str
    tokens_balance: int
    created_at: datetime


class SiteLike(Protocol):
    """Structural contract for Site rows passed to services and routes."""
    id: Any
    name: str
    url: str
    type: str
    status: str
    wp_config: dict | None
    user_id: Any
    created_at: datetime
    updated_at: datetime


class UserRepository(Protocol):
    """Contract for credential store persistence — implemented by shell."""
    async def get_by_id(self, user_id: UserId) -> UserLike | None: ...
    async def get_by_email(self, email: str) -> UserLike | None: ...
    async def add(
        self, name: str, email: str, password_hash: str, tokens_balance: int,
    ) -> UserLike: ...


class SiteRepository(Protocol):
    """Contract for site persistence — implemented by shell."""
    async def list_for_owner(
        self, owner_id: UserId,
    ) -> list[tuple[SiteLike, dict[str, int]]]: ...
    async def get_owned(
        self, site_id: SiteId, owner_id: UserId,
    ) -> SiteLike | None: ...
    async def count_children(self, site_id: SiteId) -> dict[str, int]: ...
    async def url_taken(
        self, owner_id: UserId, url: str, exclude_id: SiteId | None = None,
    ) -> bool: ...
    async def add(self, owner_id: UserId, values: dict[str, Any]) -> SiteLike: ...
    async def update_owned(
        self, site_id: SiteId, owner_id: UserId, values: dict[str, Any],
    ) -> SiteLike | None: ...
    async def delete_owned(self, site_id: SiteId, owner_id: UserId) -> bool: ...
    async def totals_for_owner(self, owner_id: UserId) -> dict[str, int]: ...
