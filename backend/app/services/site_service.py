"""Site Service — ownership-scoped create/read/update/delete for sites.

Invariants:
    - owner_id always comes from the resolved identity, never from the request body
    - Get/Update/Delete of a site that does not exist or is not owned raise the same
      SiteNotFoundError (existence of other users' sites never leaks)
    - (owner, url) uniqueness: pre-checked for a friendly error, enforced by the DB
      constraint (repository maps the violation to SiteConflictError)
    - GENERIC sites never carry wp_config; switching to GENERIC clears it
    - Partial update: only fields the caller sent are written

Design Decisions:
    - Repository injected per request (no module-level handle)
    - Platform changes computed by core.platform_config.transition_platform (pure),
      the service only flattens the result to column values
"""

import logging
from typing import Any

from app.core.domain_types import SiteId, SiteStatus, UserId
from app.core.errors import SiteConflictError, SiteNotFoundError
from app.core.platform_config import (
    UNCHANGED,
    build_platform,
    platform_from_record,
    platform_to_record,
    transition_platform,
)
from app.core.repository_protocols import SiteLike, SiteRepository
from app.schemas.site import SiteCreate, SiteUpdate

logger = logging.getLogger(__name__)


class SiteService:
    """CRUD over sites, every call scoped to one owner."""

    def __init__(self, repository: SiteRepository):
        self.repository = repository

    async def list_sites(
        self, owner_id: UserId,
    ) -> list[tuple[SiteLike, dict[str, int]]]:
        """All of the owner's sites, newest first, with child counts."""
        return await self.repository.list_for_owner(owner_id)

    async def create_site(self, owner_id: UserId, data: SiteCreate) -> SiteLike:
        if await self.repository.url_taken(owner_id, data.url):
            raise SiteConflictError()

        platform = build_platform(
            data.type, data.wp_config.to_domain() if data.wp_config else None,
        )
        site_type, wp_config = platform_to_record(platform)
        site = await self.repository.add(owner_id, {
            "name": data.name,
            "url": data.url,
            "type": site_type.value,
            "status": SiteStatus.ACTIVE.value,
            "wp_config": wp_config,
        })
        logger.info(
            "Site created", extra={"user_id": owner_id, "site_id": site.id},
        )
        return site

    async def get_site(
        self, owner_id: UserId, site_id: SiteId,
    ) -> tuple[SiteLike, dict[str, int]]:
        site = await self._get_owned_or_404(owner_id, site_id)
        counts = await self.repository.count_children(site_id)
        return site, counts

    async def require_owned(self, owner_id: UserId, site_id: SiteId) -> SiteLike:
        """Owned site or SiteNotFoundError; no counts."""
        return await self._get_owned_or_404(owner_id, site_id)

    async def update_site(
        self, owner_id: UserId, site_id: SiteId, changes: SiteUpdate,
        existing: SiteLike | None = None,
    ) -> SiteLike:
        if existing is None:
            existing = await self._get_owned_or_404(owner_id, site_id)

        if changes.url is not None and changes.url != existing.url:
            if await self.repository.url_taken(owner_id, changes.url, exclude_id=site_id):
                raise SiteConflictError()

        values = self._scalar_changes(changes)
        if changes.type is not None or changes.wp_config_supplied:
            values.update(self._platform_changes(existing, changes))

        site = await self.repository.update_owned(site_id, owner_id, values)
        if site is None:
            # deleted between the ownership read and the write
            raise SiteNotFoundError()
        logger.info(
            "Site updated",
            extra={"user_id": owner_id, "site_id": site_id},
        )
        return site

    async def delete_site(self, owner_id: UserId, site_id: SiteId) -> None:
        if not await self.repository.delete_owned(site_id, owner_id):
            raise SiteNotFoundError()
        logger.info(
            "Site deleted", extra={"user_id": owner_id, "site_id": site_id},
        )

    async def summary(self, owner_id: UserId) -> dict[str, int]:
        """Dashboard totals: sites, articles, automations, sources."""
        return await self.repository.totals_for_owner(owner_id)

    async def _get_owned_or_404(
        self, owner_id: UserId, site_id: SiteId,
    ) -> SiteLike:
        site = await self.repository.get_owned(site_id, owner_id)
        if site is None:
            raise SiteNotFoundError()
        return site

    @staticmethod
    def _scalar_changes(changes: SiteUpdate) -> dict[str, Any]:
        values: dict[str, Any] = {}
        for name in ("name", "url", "status"):
            if name in changes.model_fields_set:
                value = getattr(changes, name)
                values[name] = getattr(value, "value", value)
        return values

    @staticmethod
    def _platform_changes(existing: SiteLike, changes: SiteUpdate) -> dict[str, Any]:
        if changes.wp_config_supplied:
            new_config = changes.wp_config.to_domain() if changes.wp_config else None
        else:
            new_config = UNCHANGED
        platform = transition_platform(
            platform_from_record(existing.type, existing.wp_config),
            new_type=changes.type,
            new_config=new_config,
        )
        site_type, wp_config = platform_to_record(platform)
        return {"type": site_type.value, "wp_config": wp_config}
