"""
Network Monitoring Schemas.

Shared contract between the base data store, the live simulator and the
HTTP API. All records are frozen: the simulator builds new values instead
of mutating the base snapshot.
"""
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

Number = Union[int, float]


class KpiStatus(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    WARNING = "warning"
    CRITICAL = "critical"


class StationStatus(str, Enum):
    OPERATIONAL = "operational"
    WARNING = "warning"
    MAINTENANCE = "maintenance"
    UNKNOWN = "unknown"


class AlertSeverity(str, Enum):
    INFO = "info"
    WARNING = "warning"


class KpiRecord(BaseModel):
    """A single named KPI with its sliding trend window."""
    model_config = ConfigDict(frozen=True)

    current: Number
    unit: str
    threshold: Number
    trend: Tuple[Number, ...] = Field(min_length=1)
    status: KpiStatus


class RegionalPerformance(BaseModel):
    """Per-region performance figures. No status is derived for regions."""
    model_config = ConfigDict(frozen=True)

    region: str
    call_drop_rate: float
    availability: float
    throughput: float


class BaseStation(BaseModel):
    """Immutable base station reference data. `id` is the join key."""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    city: str
    region: str
    latitude: float = Field(ge=-90.0, le=90.0)
    longitude: float = Field(ge=-180.0, le=180.0)
    coverage_radius: float = Field(ge=0.0)
    status: StationStatus = StationStatus.UNKNOWN

    @field_validator("status", mode="before")
    @classmethod
    def _unknown_status(cls, value):
        # Anything outside the known set renders as "unknown" on the map
        if not isinstance(value, str) or value not in {s.value for s in StationStatus}:
            return StationStatus.UNKNOWN
        return value


class Alert(BaseModel):
    model_config = ConfigDict(frozen=True)

    severity: AlertSeverity
    message: str
    timestamp: datetime


class NetworkSnapshot(BaseModel):
    """Full network state: KPIs, regions, stations and recent alerts."""
    model_config = ConfigDict(frozen=True)

    network_kpis: Dict[str, KpiRecord]
    regional_performance: List[RegionalPerformance] = Field(default_factory=list)
    base_stations: List[BaseStation] = Field(default_factory=list)
    alerts: List[Alert] = Field(default_factory=list)

    @field_validator("base_stations")
    @classmethod
    def _unique_station_ids(cls, stations: List[BaseStation]) -> List[BaseStation]:
        ids = [s.id for s in stations]
        duplicates = sorted({i for i in ids if ids.count(i) > 1})
        if duplicates:
            raise ValueError(f"duplicate base station ids: {duplicates}")
        return stations

    def find_station(self, station_id: str) -> Optional[BaseStation]:
        return next((s for s in self.base_stations if s.id == station_id), None)


class BaseSnapshot(NetworkSnapshot):
    """Snapshot as read from the on-disk fixture."""


class LiveSnapshot(NetworkSnapshot):
    """Snapshot produced by one simulation step. Request-scoped."""


# ---------------------------------------------------------------------------
# API response envelopes
# ---------------------------------------------------------------------------

class HealthResponse(BaseModel):
    status: str = "healthy"
    timestamp: datetime
    service: str
    version: str


class ReadinessResponse(BaseModel):
    status: str
    checks: Dict[str, str]


class KpiDetailResponse(BaseModel):
    kpi_name: str
    data: KpiRecord
    timestamp: datetime


class RegionalResponse(BaseModel):
    regional_performance: List[RegionalPerformance]
    timestamp: datetime


class AlertsResponse(BaseModel):
    alerts: List[Alert]
    count: int
    timestamp: datetime


class BaseStationsResponse(BaseModel):
    base_stations: List[BaseStation]
    count: int
    timestamp: datetime


class StationDetailResponse(BaseModel):
    station: BaseStation
    kpis: Dict[str, KpiRecord]
    timestamp: datetime
