"""
Live KPI API Router.

Every call simulates a fresh tick from the base fixture; nothing is shared
between requests, so two calls may legitimately disagree.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from backend.app.api.deps import get_live_snapshot
from backend.app.core.exceptions import NotFoundError
from backend.app.schemas.network import (
    AlertsResponse,
    KpiDetailResponse,
    LiveSnapshot,
    RegionalResponse,
)

router = APIRouter()


@router.get("/kpis", response_model=LiveSnapshot)
async def get_all_kpis(live: LiveSnapshot = Depends(get_live_snapshot)):
    """Full live snapshot: KPIs, regions, base stations and alerts."""
    return live


@router.get("/kpis/{kpi_name}", response_model=KpiDetailResponse)
async def get_kpi(kpi_name: str, live: LiveSnapshot = Depends(get_live_snapshot)):
    kpi = live.network_kpis.get(kpi_name)
    if kpi is None:
        raise NotFoundError("KPI", kpi_name, live.network_kpis.keys(), available_key="available_kpis")

    return KpiDetailResponse(kpi_name=kpi_name, data=kpi, timestamp=datetime.now(timezone.utc))


@router.get("/regional", response_model=RegionalResponse)
async def get_regional_performance(live: LiveSnapshot = Depends(get_live_snapshot)):
    return RegionalResponse(
        regional_performance=live.regional_performance,
        timestamp=datetime.now(timezone.utc),
    )


@router.get("/alerts", response_model=AlertsResponse)
async def get_alerts(live: LiveSnapshot = Depends(get_live_snapshot)):
    return AlertsResponse(
        alerts=live.alerts,
        count=len(live.alerts),
        timestamp=datetime.now(timezone.utc),
    )
