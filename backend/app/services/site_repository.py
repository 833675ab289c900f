"""Site Repository — SQLAlchemy implementation of the SiteRepository protocol.

Invariants:
    - Every read/update/delete filters on Site.id AND Site.user_id in one WHERE clause
    - A unique-constraint violation on (user_id, url) surfaces as SiteConflictError,
      never as a raw IntegrityError; other integrity errors (e.g. FK) propagate
    - Mutations commit before returning; failed commits roll back

Design Decisions:
    - Child counts as correlated scalar subqueries: one round-trip for the whole list
    - update_owned / delete_owned are single owner-scoped statements, not load-then-mutate,
      so the check and the write share the same predicate
"""

import logging
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.domain_types import SiteId, UserId
from app.core.errors import SiteConflictError
from app.models.article import Article
from app.models.automation import Automation
from app.models.site import Site
from app.models.source import Source

logger = logging.getLogger(__name__)

URL_CONSTRAINT = "uq_sites_user_id_url"

_CHILD_MODELS = {
    "articles": Article,
    "automations": Automation,
    "sources": Source,
}


def _child_count(model) -> Any:
    return (
        select(func.count(model.id))
        .where(model.site_id == Site.id)
        .correlate(Site)
        .scalar_subquery()
    )


def _count_columns() -> list:
    return [_child_count(model).label(name) for name, model in _CHILD_MODELS.items()]


def _counts_from_row(row) -> dict[str, int]:
    return {name: int(getattr(row, name) or 0) for name in _CHILD_MODELS}


def _is_url_conflict(exc: IntegrityError) -> bool:
    # PostgreSQL names the constraint; SQLite lists the columns
    message = str(exc.orig)
    return URL_CONSTRAINT in message or "sites.user_id, sites.url" in message


class SqlSiteRepository:
    """Owner-scoped site persistence over an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_for_owner(
        self, owner_id: UserId,
    ) -> list[tuple[Site, dict[str, int]]]:
        result = await self.db.execute(
            select(Site, *_count_columns())
            .where(Site.user_id == owner_id)
            .order_by(Site.created_at.desc()),
        )
        return [(row.Site, _counts_from_row(row)) for row in result]

    async def get_owned(
        self, site_id: SiteId, owner_id: UserId, refresh: bool = False,
    ) -> Site | None:
        query = select(Site).where(
            Site.id == site_id, Site.user_id == owner_id,
        )
        if refresh:
            query = query.execution_options(populate_existing=True)
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def count_children(self, site_id: SiteId) -> dict[str, int]:
        result = await self.db.execute(
            select(Site.id, *_count_columns()).where(Site.id == site_id),
        )
        row = result.one_or_none()
        if row is None:
            return {name: 0 for name in _CHILD_MODELS}
        return _counts_from_row(row)

    async def url_taken(
        self, owner_id: UserId, url: str, exclude_id: SiteId | None = None,
    ) -> bool:
        query = select(Site.id).where(
            Site.user_id == owner_id, Site.url == url,
        )
        if exclude_id is not None:
            query = query.where(Site.id != exclude_id)
        result = await self.db.execute(query.limit(1))
        return result.scalar_one_or_none() is not None

    async def add(self, owner_id: UserId, values: dict[str, Any]) -> Site:
        site = Site(user_id=owner_id, **values)
        self.db.add(site)
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self._raise_conflict(e, owner_id)
        await self.db.refresh(site)
        return site

    async def update_owned(
        self, site_id: SiteId, owner_id: UserId, values: dict[str, Any],
    ) -> Site | None:
        values = {**values, "updated_at": datetime.now(timezone.utc)}
        try:
            result = await self.db.execute(
                update(Site)
                .where(Site.id == site_id, Site.user_id == owner_id)
                .values(**values)
                .execution_options(synchronize_session=False),
            )
            await self.db.commit()
        except IntegrityError as e:
            await self._raise_conflict(e, owner_id)
        if result.rowcount == 0:
            return None
        return await self.get_owned(site_id, owner_id, refresh=True)

    async def delete_owned(self, site_id: SiteId, owner_id: UserId) -> bool:
        result = await self.db.execute(
            delete(Site)
            .where(Site.id == site_id, Site.user_id == owner_id)
            .execution_options(synchronize_session=False),
        )
        await self.db.commit()
        return result.rowcount > 0

    async def totals_for_owner(self, owner_id: UserId) -> dict[str, int]:
        owned = select(Site.id).where(Site.user_id == owner_id)
        columns = [
            select(func.count(Site.id))
            .where(Site.user_id == owner_id)
            .scalar_subquery()
            .label("sites"),
        ]
        for name, model in _CHILD_MODELS.items():
            columns.append(
                select(func.count(model.id))
                .where(model.site_id.in_(owned))
                .scalar_subquery()
                .label(name),
            )
        row = (await self.db.execute(select(*columns))).one()
        return {key: int(value or 0) for key, value in row._mapping.items()}

    async def _raise_conflict(self, exc: IntegrityError, owner_id: UserId):
        await self.db.rollback()
        if not _is_url_conflict(exc):
            raise exc
        logger.info(
            f"Site uniqueness violation: {exc.orig}",
            extra={"user_id": owner_id, "error_code": "SITE_URL_CONFLICT"},
        )
        raise SiteConflictError() from exc
