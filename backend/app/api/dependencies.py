"""API Dependencies — per-request wiring of repositories, services and the caller's identity.

Invariants:
    - Repositories and services are built per request around that request's DB session
    - get_current_user raises UnauthenticatedError when no identity resolves; no route
      treats "absent" as anything else
    - Route handlers receive the owner id only from CurrentUser
    - OwnedSite resolves before the request body is validated, so a site the caller
      does not own is 404 whatever the body holds

Design Decisions:
    - Annotated aliases (CurrentUser, SiteServiceDep, ...) keep route signatures short
"""

from typing import Annotated
from uuid import UUID

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings, get_settings
from app.core.domain_types import SiteId
from app.core.errors import UnauthenticatedError
from app.core.repository_protocols import SiteLike
from app.infrastructure.database import get_db
from app.services.identity import Identity, resolve_identity
from app.services.site_repository import SqlSiteRepository
from app.services.site_service import SiteService
from app.services.user_repository import SqlUserRepository
from app.services.user_service import UserService


def get_user_repository(db: AsyncSession = Depends(get_db)) -> SqlUserRepository:
    return SqlUserRepository(db)


def get_site_repository(db: AsyncSession = Depends(get_db)) -> SqlSiteRepository:
    return SqlSiteRepository(db)


def get_user_service(
    users: SqlUserRepository = Depends(get_user_repository),
    settings: Settings = Depends(get_settings),
) -> UserService:
    return UserService(users, bcrypt_rounds=settings.bcrypt_rounds)


def get_site_service(
    sites: SqlSiteRepository = Depends(get_site_repository),
) -> SiteService:
    return SiteService(sites)


async def get_current_user(
    request: Request,
    users: SqlUserRepository = Depends(get_user_repository),
) -> Identity:
    """Resolve the caller from the session cookie or fail with 401."""
    identity = await resolve_identity(request.session, users)
    if identity is None:
        raise UnauthenticatedError()
    return identity


CurrentUser = Annotated[Identity, Depends(get_current_user)]
SiteServiceDep = Annotated[SiteService, Depends(get_site_service)]
UserServiceDep = Annotated[UserService, Depends(get_user_service)]


async def get_owned_site(
    site_id: UUID, user: CurrentUser, sites: SiteServiceDep,
) -> SiteLike:
    return await sites.require_owned(user.id, SiteId(site_id))


OwnedSite = Annotated[SiteLike, Depends(get_owned_site)]
