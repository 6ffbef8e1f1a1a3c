"""Dashboard API endpoints."""

from fastapi import APIRouter, Depends, Query as QueryParam

from backend.app.api.deps import get_owner_id, get_query_store
from backend.app.core.config import settings
from backend.app.schemas.dashboard import Alert, DashboardStatsResponse
from backend.app.schemas.query import QueryActivity
from backend.app.services.query_store import QueryStore
from backend.app.services.trends import get_alerts, get_dashboard_stats
from backend.app.utils.formatting import truncate_text

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/stats", response_model=DashboardStatsResponse)
async def dashboard_stats(
    owner_id: str = Depends(get_owner_id),
    store: QueryStore = Depends(get_query_store),
) -> DashboardStatsResponse:
    """Totals, today's subset and average response time."""
    stats = await get_dashboard_stats(store, owner_id, settings.tzinfo)
    return DashboardStatsResponse(**stats)


@router.get("/recent-activity", response_model=list[QueryActivity])
async def recent_activity(
    limit: int = QueryParam(settings.recent_activity_limit, ge=1, le=settings.max_recent_activity_limit),
    owner_id: str = Depends(get_owner_id),
    store: QueryStore = Depends(get_query_store),
) -> list[QueryActivity]:
    """Most recent queries with text truncated to 100 characters."""
    queries = await store.latest(owner_id, limit)
    return [QueryActivity.from_query(query, truncate_text(query.text)) for query in queries]


@router.get("/alerts", response_model=list[Alert])
async def dashboard_alerts(
    owner_id: str = Depends(get_owner_id),
    store: QueryStore = Depends(get_query_store),
) -> list[Alert]:
    """Active alerts for the owner."""
    alerts = await get_alerts(store, owner_id, settings.alert_window_hours)
    return [Alert(**alert) for alert in alerts]
