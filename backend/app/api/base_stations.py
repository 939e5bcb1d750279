"""
Base Station API Router.

Station reference data comes straight from the fixture; the per-station view
biases a freshly simulated KPI set by the station's status.
"""

from datetime import datetime, timezone

import numpy as np
from fastapi import APIRouter, Depends

from backend.app.api.deps import get_alert_policy, get_base_snapshot, get_rng
from backend.app.core.config import Settings, get_settings
from backend.app.core.exceptions import NotFoundError
from backend.app.core.logging import get_logger
from backend.app.schemas.network import BaseSnapshot, BaseStationsResponse, StationDetailResponse
from backend.app.services.live_simulator import AlertPolicy, apply_station_bias, simulate

router = APIRouter()
logger = get_logger(__name__)


@router.get("/base-stations", response_model=BaseStationsResponse)
async def list_base_stations(base: BaseSnapshot = Depends(get_base_snapshot)):
    return BaseStationsResponse(
        base_stations=base.base_stations,
        count=len(base.base_stations),
        timestamp=datetime.now(timezone.utc),
    )


@router.get("/base-stations/{station_id}", response_model=StationDetailResponse)
async def get_base_station(
    station_id: str,
    base: BaseSnapshot = Depends(get_base_snapshot),
    rng: np.random.Generator = Depends(get_rng),
    alert_policy: AlertPolicy = Depends(get_alert_policy),
    settings: Settings = Depends(get_settings),
):
    """Station reference data plus its status-biased live KPI view."""
    station = base.find_station(station_id)
    if station is None:
        raise NotFoundError(
            "Base station",
            station_id,
            [s.id for s in base.base_stations],
            available_key="available_stations",
        )

    live = simulate(base, rng, alert_policy=alert_policy)
    kpis = apply_station_bias(station.status, live.network_kpis, reclamp=settings.station_bias_reclamp)
    logger.debug(f"Station view for {station.id} ({station.status.value})")

    return StationDetailResponse(station=station, kpis=kpis, timestamp=datetime.now(timezone.utc))
