"""Analytics API endpoints."""

from fastapi import APIRouter, Depends, Query as QueryParam

from backend.app.api.deps import get_owner_id, get_query_store
from backend.app.core.config import settings
from backend.app.schemas.dashboard import AnalyticsOverviewResponse, TrendPoint
from backend.app.services.query_store import QueryStore
from backend.app.services.trends import get_overview, get_trend

router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.get("/overview", response_model=AnalyticsOverviewResponse)
async def analytics_overview(
    owner_id: str = Depends(get_owner_id),
    store: QueryStore = Depends(get_query_store),
) -> AnalyticsOverviewResponse:
    """Risk, category and emotion breakdowns plus the daily trend of the trailing week."""
    overview = await get_overview(store, owner_id, settings.tzinfo, days=settings.overview_days)
    return AnalyticsOverviewResponse(**overview)


@router.get("/trends", response_model=list[TrendPoint])
async def analytics_trends(
    days: int = QueryParam(settings.default_trend_days, ge=1),
    owner_id: str = Depends(get_owner_id),
    store: QueryStore = Depends(get_query_store),
) -> list[TrendPoint]:
    """One point per day over the trailing `days` days."""
    points = await get_trend(store, owner_id, days, settings.tzinfo)
    return [TrendPoint(**point) for point in points]
