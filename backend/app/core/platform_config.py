"""Platform Config — tagged variant for per-platform site settings and its transition rule.

Invariants:
    - A site's platform is exactly one of Generic | WordPress(config)
    - Generic never carries config (clearing rule: switching to GENERIC drops it)
    - WordPress config may be absent (a WORDPRESS site created without credentials)
    - Pure functions only: no IO, no ORM, no Pydantic

Design Decisions:
    - Frozen dataclasses over a dict column view: callers pattern-match on the variant
      instead of probing an untyped JSON blob
    - UNCHANGED sentinel separates "field omitted" from "explicit null" in partial updates
    - Type omitted + config supplied: applied only when the stored platform is WORDPRESS,
      ignored otherwise (a GENERIC site stays config-free)
"""

from dataclasses import dataclass, replace
from typing import Any

from app.core.domain_types import SiteType


@dataclass(frozen=True)
class WordPressConfig:
    """WordPress REST credentials and endpoint."""
    username: str | None = None
    password: str | None = None
    api_url: str | None = None

    def to_json(self) -> dict[str, Any]:
        return {
            "username": self.username,
            "password": self.password,
            "apiUrl": self.api_url,
        }

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "WordPressConfig":
        return cls(
            username=data.get("username"),
            password=data.get("password"),
            api_url=data.get("apiUrl", data.get("api_url")),
        )


@dataclass(frozen=True)
class Generic:
    """Site with no platform integration."""
    type: SiteType = SiteType.GENERIC


@dataclass(frozen=True)
class WordPress:
    """WordPress site, optionally with credentials."""
    config: WordPressConfig | None = None
    type: SiteType = SiteType.WORDPRESS


Platform = Generic | WordPress


class _Unchanged:
    """Marker for a partial-update field the caller did not send."""
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNCHANGED"


UNCHANGED = _Unchanged()


def build_platform(
    site_type: SiteType, config: WordPressConfig | None,
) -> Platform:
    """Build the variant for a new site. Config supplied for GENERIC is dropped."""
    if site_type == SiteType.WORDPRESS:
        return WordPress(config)
    return Generic()


def platform_from_record(
    site_type: str | SiteType, wp_config: dict[str, Any] | None,
) -> Platform:
    """Rehydrate the variant from persisted columns."""
    site_type = SiteType(site_type)
    if site_type == SiteType.WORDPRESS:
        return WordPress(WordPressConfig.from_json(wp_config) if wp_config else None)
    return Generic()


def platform_to_record(platform: Platform) -> tuple[SiteType, dict[str, Any] | None]:
    """Flatten the variant to (type, wp_config) column values."""
    if isinstance(platform, WordPress):
        return SiteType.WORDPRESS, (
            platform.config.to_json() if platform.config else None
        )
    return SiteType.GENERIC, None


def transition_platform(
    current: Platform,
    new_type: SiteType | None = None,
    new_config: "WordPressConfig | None | _Unchanged" = UNCHANGED,
) -> Platform:
    """Apply a partial update to a site's platform.

    - target type is new_type, or the current type when omitted
    - GENERIC target always yields Generic() regardless of supplied config
    - WORDPRESS target takes new_config when supplied (None clears it),
      otherwise keeps the current config when the site was already WordPress
    - a supplied config without a password keeps the stored password
    """
    target = new_type or current.type
    if target == SiteType.GENERIC:
        return Generic()
    if new_config is None:
        return WordPress(None)
    if new_config is not UNCHANGED:
        return WordPress(_keep_password(current, new_config))
    if isinstance(current, WordPress):
        return current
    return WordPress(None)


def _keep_password(current: Platform, new_config: WordPressConfig) -> WordPressConfig:
    if new_config.password:
        return new_config
    if isinstance(current, WordPress) and current.config and current.config.password:
        return replace(new_config, password=current.config.password)
    return replace(new_config, password=None)
