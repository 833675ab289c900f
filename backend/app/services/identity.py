"""Identity Resolver — turns request-scoped session data into the caller's identity.

Invariants:
    - Returns a populated Identity or None; never raises for bad session data
    - A missing, malformed or dangling user id resolves to None ("absent")
    - The identity is re-read from the credential store on every request, so a stale
      cookie cannot carry an outdated role or balance

Design Decisions:
    - Session storage is opaque here (any Mapping): issuance belongs to the framework's
      signed-cookie middleware
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any
from uuid import UUID

from app.core.domain_types import UserId
from app.core.repository_protocols import UserRepository

SESSION_USER_KEY = "user_id"


@dataclass(frozen=True)
class Identity:
    """Authenticated caller."""
    id: UserId
    name: str
    email: str
    role: str
    tokens_balance: int


def _parse_user_id(raw: Any) -> UserId | None:
    if not raw:
        return None
    try:
        return UserId(UUID(str(raw)))
    except ValueError:
        return None


async def resolve_identity(
    session_data: Mapping[str, Any], users: UserRepository,
) -> Identity | None:
    user_id = _parse_user_id(session_data.get(SESSION_USER_KEY))
    if user_id is None:
        return None
    user = await users.get_by_id(user_id)
    if user is None:
        return None
    return Identity(
        id=UserId(user.id),
        name=user.name,
        email=user.email,
        role=user.role,
        tokens_balance=user.tokens_balance,
    )
