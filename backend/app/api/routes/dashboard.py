"""Dashboard Routes — stat cards for the signed-in user's dashboard."""

from fastapi import APIRouter

from app.api.dependencies import CurrentUser, SiteServiceDep
from app.schemas.site import DashboardSummary

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/summary", response_model=DashboardSummary)
async def dashboard_summary(user: CurrentUser, sites: SiteServiceDep):
    totals = await sites.summary(user.id)
    return DashboardSummary(
        sites=totals["sites"],
        articles=totals["articles"],
        automations=totals["automations"],
        tokens_balance=user.tokens_balance,
    )
