"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId and SiteId wrap UUIDs — never use bare UUID in domain logic
    - All valid states encoded as Enums — no raw string matching
    - WELCOME_BONUS is granted exactly once, at registration

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders, values match the dashboard's
      upper-case literals
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", UUID)
SiteId = NewType("SiteId", UUID)


# ─── Constants ───────────────────────────────────────────────────

WELCOME_BONUS = 100


# ─── Enums ───────────────────────────────────────────────────────

class UserRole(str, Enum):
    """Account role — maps to DB `role` column."""
    USER = "USER"
    ADMIN = "ADMIN"


class SiteType(str, Enum):
    """Publishing platform of a site. Only WORDPRESS carries platform config."""
    WORDPRESS = "WORDPRESS"
    GENERIC = "GENERIC"


class SiteStatus(str, Enum):
    """Site lifecycle states — maps to DB `status` column."""
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
