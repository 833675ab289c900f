"""Site Routes — owner-scoped CRUD endpoints for sites.

Invariants:
    - Every route requires an authenticated caller (401 otherwise)
    - The owner is always CurrentUser.id; body fields never name an owner
    - Not-owned and missing sites are both 404 "Site not found"
"""

from uuid import UUID

from fastapi import APIRouter

from app.api.dependencies import CurrentUser, OwnedSite, SiteServiceDep
from app.core.domain_types import SiteId
from app.schemas.auth import MessageResponse
from app.schemas.site import (
    SiteCreate,
    SiteListResponse,
    SiteMutationResponse,
    SiteOut,
    SiteResponse,
    SiteUpdate,
    site_detail,
    site_summary,
)

router = APIRouter(prefix="/sites", tags=["sites"])


@router.get("", response_model=SiteListResponse)
async def list_sites(user: CurrentUser, sites: SiteServiceDep):
    """List the caller's sites, newest first, with child counts."""
    rows = await sites.list_sites(user.id)
    return SiteListResponse(
        sites=[site_summary(site, counts) for site, counts in rows],
    )


@router.post("", response_model=SiteMutationResponse)
async def create_site(body: SiteCreate, user: CurrentUser, sites: SiteServiceDep):
    site = await sites.create_site(user.id, body)
    return SiteMutationResponse(
        message="Site created successfully", site=SiteOut.model_validate(site),
    )


@router.get("/{site_id}", response_model=SiteResponse)
async def get_site(site_id: UUID, user: CurrentUser, sites: SiteServiceDep):
    site, counts = await sites.get_site(user.id, SiteId(site_id))
    return SiteResponse(site=site_detail(site, counts))


@router.put("/{site_id}", response_model=SiteMutationResponse)
async def update_site(
    existing: OwnedSite, site_id: UUID, body: SiteUpdate,
    user: CurrentUser, sites: SiteServiceDep,
):
    """Partially update a site; omitted fields are left as they are.

    Ownership (OwnedSite) is checked before the body is validated.
    """
    site = await sites.update_site(user.id, SiteId(site_id), body, existing=existing)
    return SiteMutationResponse(
        message="Site updated successfully", site=SiteOut.model_validate(site),
    )


@router.delete("/{site_id}", response_model=MessageResponse)
async def delete_site(site_id: UUID, user: CurrentUser, sites: SiteServiceDep):
    await sites.delete_site(user.id, SiteId(site_id))
    return MessageResponse(message="Site deleted successfully")
