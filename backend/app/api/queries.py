"""Query submission and record access API endpoints."""

import logging
import time
from datetime import datetime

from fastapi import APIRouter, Depends, Query as QueryParam, Request

from backend.app.api.deps import get_analyzer, get_owner_id, get_query_store
from backend.app.core.config import settings
from backend.app.core.exceptions import AnalyzerError
from backend.app.models.enums import QueryCategory, RiskLevel
from backend.app.schemas.common import Pagination
from backend.app.schemas.query import (
    EmotionalAnalysis,
    QueryActivity,
    QueryAnalyzeRequest,
    QueryAnalyzeResponse,
    QueryListResponse,
    QueryResponse,
)
from backend.app.services.analyzer import SafetyAnalyzer
from backend.app.services.query_store import QueryFilters, QueryStore
from backend.app.websocket.manager import manager

router = APIRouter(prefix="/queries", tags=["queries"])
logger = logging.getLogger(__name__)


@router.post("/analyze", response_model=QueryAnalyzeResponse)
async def analyze_query(
    payload: QueryAnalyzeRequest,
    request: Request,
    owner_id: str = Depends(get_owner_id),
    store: QueryStore = Depends(get_query_store),
    analyzer: SafetyAnalyzer = Depends(get_analyzer),
) -> QueryAnalyzeResponse:
    """
    Analyze a query for safety and store the scored record.

    The new record is broadcast to the owner's realtime feed.
    """
    started = time.perf_counter()
    try:
        analysis = await analyzer.analyze(payload.query)
    except Exception as e:
        logger.error(f"[QUERY] Analyzer failed for owner {owner_id}: {e}")
        raise AnalyzerError(e)
    response_time = int((time.perf_counter() - started) * 1000)

    query = await store.add(
        owner_id=owner_id,
        text=payload.query,
        analysis=analysis,
        response_time=response_time,
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
    )
    logger.info(f"[QUERY] Stored query {query.id} for owner {owner_id} (flagged={query.flagged})")

    await manager.send_query_analyzed(owner_id, QueryActivity.from_query(query).model_dump(mode="json"))

    return QueryAnalyzeResponse(
        id=query.id,
        query=query.text,
        safety=query.safety,
        risk_level=query.risk_level,
        confidence=query.confidence,
        categories=[query.category] if query.category else [],
        severity=query.severity,
        flagged=query.flagged,
        flags=[query.reason] if query.flagged and query.reason else [],
        emotional_analysis=EmotionalAnalysis(
            dominant=query.emotion,
            emoji=query.emotion_emoji,
            confidence=query.confidence,
        ),
        response_time=query.response_time,
        timestamp=query.created_at,
    )


@router.get("/", response_model=QueryListResponse)
async def list_queries(
    page: int = QueryParam(1, ge=1),
    limit: int = QueryParam(settings.default_page_size, ge=1, le=settings.max_page_size),
    flagged: bool | None = None,
    risk_level: RiskLevel | None = None,
    category: QueryCategory | None = None,
    date_from: datetime | None = None,
    date_to: datetime | None = None,
    owner_id: str = Depends(get_owner_id),
    store: QueryStore = Depends(get_query_store),
) -> QueryListResponse:
    """List the owner's queries, filtered before pagination."""
    filters = QueryFilters(
        flagged=flagged,
        risk_level=risk_level.value if risk_level else None,
        category=category.value if category else None,
        date_from=date_from,
        date_to=date_to,
    )
    queries, total = await store.list_queries(owner_id, filters, page=page, limit=limit)

    return QueryListResponse(
        queries=[QueryResponse.model_validate(query) for query in queries],
        pagination=Pagination.build(page, limit, total),
    )


@router.get("/realtime", response_model=list[QueryActivity])
async def realtime_queries(
    owner_id: str = Depends(get_owner_id),
    store: QueryStore = Depends(get_query_store),
) -> list[QueryActivity]:
    """Latest queries of the owner with full text, for live monitoring."""
    queries = await store.latest(owner_id, settings.realtime_limit)
    return [QueryActivity.from_query(query) for query in queries]


@router.get("/{query_id}", response_model=QueryResponse)
async def get_query(
    query_id: str,
    owner_id: str = Depends(get_owner_id),
    store: QueryStore = Depends(get_query_store),
) -> QueryResponse:
    """Get one of the owner's queries."""
    query = await store.get(owner_id, query_id)
    return QueryResponse.model_validate(query)
