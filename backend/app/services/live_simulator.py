"""
Live Data Simulator.

Turns a BaseSnapshot into a plausible next-tick LiveSnapshot:

- every KPI gets a bounded random step (see kpi_rules), its trend window
  slides by one and its status is reclassified;
- every region gets independent bounded noise;
- occasionally a new alert is prepended to the (capped) alert history.

simulate() is a pure function of its input snapshot plus the injected
random generator and clock. The base snapshot is never mutated: every
updated record is a new frozen model.
"""
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Dict, List, Mapping, Optional, Sequence, Tuple

import numpy as np

from backend.app.core.logging import get_logger
from backend.app.schemas.network import (
    Alert,
    AlertSeverity,
    BaseSnapshot,
    KpiRecord,
    LiveSnapshot,
    RegionalPerformance,
    StationStatus,
)
from backend.app.services.kpi_rules import get_rule

logger = get_logger(__name__)

ALERT_MESSAGES: Tuple[str, ...] = (
    "Minor network congestion detected in South region",
    "All systems operating normally",
    "Peak traffic hour - monitoring closely",
    "Scheduled maintenance completed successfully",
    "Network optimization in progress",
)


@dataclass(frozen=True)
class RegionalBound:
    """Noise amplitude, clamp interval and display precision for one regional field."""
    noise: float
    low: float
    high: float
    decimals: int


REGIONAL_BOUNDS: Dict[str, RegionalBound] = {
    "call_drop_rate": RegionalBound(noise=0.15, low=0.5, high=3.0, decimals=2),
    "availability": RegionalBound(noise=0.1, low=98.0, high=100.0, decimals=2),
    "throughput": RegionalBound(noise=2.0, low=30.0, high=60.0, decimals=1),
}


@dataclass(frozen=True)
class AlertPolicy:
    """How alerts are synthesized on each tick."""
    probability: float = 0.3
    severities: Tuple[AlertSeverity, ...] = (AlertSeverity.INFO, AlertSeverity.WARNING)
    messages: Tuple[str, ...] = ALERT_MESSAGES
    history_limit: int = 3

    @classmethod
    def from_settings(cls, settings) -> "AlertPolicy":
        return cls(
            probability=settings.alert_probability,
            severities=tuple(AlertSeverity(s) for s in settings.alert_severities),
            history_limit=settings.alert_history_limit,
        )


BIAS_DECIMALS = 2

# Station status -> {kpi_name: (multiplier, offset)}
STATION_BIAS: Dict[StationStatus, Dict[str, Tuple[float, float]]] = {
    StationStatus.WARNING: {
        "call_drop_rate": (1.3, 0.0),
        "latency": (1.2, 0.0),
    },
    StationStatus.MAINTENANCE: {
        "active_users": (0.6, 0.0),
        "network_availability": (1.0, -2.0),
    },
}


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    """Fresh generator; seeded for reproducible runs, OS entropy otherwise."""
    return np.random.default_rng(seed)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def step_kpi(name: str, kpi: KpiRecord, rng: np.random.Generator) -> KpiRecord:
    """Advance one KPI by one tick: perturb, clamp, round, slide trend, reclassify."""
    rule = get_rule(name)
    new_value = rule.next_value(kpi.current, rng)
    return kpi.model_copy(
        update={
            "current": new_value,
            "trend": kpi.trend[1:] + (new_value,),
            "status": rule.classify(new_value, kpi.threshold),
        }
    )


def simulate_kpis(kpis: Mapping[str, KpiRecord], rng: np.random.Generator) -> Dict[str, KpiRecord]:
    return {name: step_kpi(name, kpi, rng) for name, kpi in kpis.items()}


def step_region(region: RegionalPerformance, rng: np.random.Generator) -> RegionalPerformance:
    update = {}
    for field_name, bound in REGIONAL_BOUNDS.items():
        value = getattr(region, field_name) + float(rng.uniform(-bound.noise, bound.noise))
        value = round(value, bound.decimals)
        update[field_name] = max(bound.low, min(bound.high, value))
    return region.model_copy(update=update)


def simulate_regions(
    regions: Sequence[RegionalPerformance], rng: np.random.Generator
) -> List[RegionalPerformance]:
    return [step_region(region, rng) for region in regions]


def rotate_alerts(
    alerts: Sequence[Alert],
    rng: np.random.Generator,
    policy: AlertPolicy = AlertPolicy(),
    now: Optional[Callable[[], datetime]] = None,
) -> List[Alert]:
    """
    With probability `policy.probability`, prepend one synthesized alert and
    keep only the `policy.history_limit` most recent. Otherwise unchanged.
    """
    if not rng.random() < policy.probability:
        return list(alerts)[: policy.history_limit]

    clock = now or _utcnow
    alert = Alert(
        severity=policy.severities[int(rng.integers(len(policy.severities)))],
        message=policy.messages[int(rng.integers(len(policy.messages)))],
        timestamp=clock(),
    )
    return [alert, *alerts][: policy.history_limit]


def simulate(
    base: BaseSnapshot,
    rng: Optional[np.random.Generator] = None,
    *,
    alert_policy: Optional[AlertPolicy] = None,
    now: Optional[Callable[[], datetime]] = None,
) -> LiveSnapshot:
    """
    Produce one simulated tick from a base snapshot.

    Args:
        base: Snapshot loaded from the fixture (left untouched).
        rng: Random source; a fresh unseeded generator when omitted.
        alert_policy: Alert synthesis policy (defaults: 30%, info/warning, keep 3).
        now: Clock used to timestamp new alerts.
    """
    rng = rng if rng is not None else make_rng()
    policy = alert_policy or AlertPolicy()

    live = LiveSnapshot(
        network_kpis=simulate_kpis(base.network_kpis, rng),
        regional_performance=simulate_regions(base.regional_performance, rng),
        base_stations=list(base.base_stations),
        alerts=rotate_alerts(base.alerts, rng, policy, now),
    )
    logger.debug(
        "Simulated live snapshot",
        extra={"extra_data": {"kpis": len(live.network_kpis), "alerts": len(live.alerts)}},
    )
    return live


def apply_station_bias(
    station_status: StationStatus,
    kpis: Mapping[str, KpiRecord],
    reclamp: bool = False,
) -> Dict[str, KpiRecord]:
    """
    Per-station KPI view: bias a freshly simulated KPI mapping by station status.

    warning: call_drop_rate x1.3, latency x1.2
    maintenance: active_users x0.6, network_availability -2
    operational / unknown: unchanged

    Biased values keep their fractional part (trimmed to 2 decimals, integer KPIs
    included) and are reclassified. Clamp ranges are re-applied
    only when `reclamp` is set. KPIs absent from the mapping are skipped.
    """
    biased = dict(kpis)
    for name, (multiplier, offset) in STATION_BIAS.get(station_status, {}).items():
        kpi = biased.get(name)
        if kpi is None:
            continue
        rule = get_rule(name)
        value = kpi.current * multiplier + offset
        if reclamp:
            value = rule.clamp(value)
        value = round(value, BIAS_DECIMALS)
        biased[name] = kpi.model_copy(
            update={"current": value, "status": rule.classify(value, kpi.threshold)}
        )
    return biased
