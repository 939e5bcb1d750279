"""Services package."""

from backend.app.services.base_data_store import load_base_snapshot
from backend.app.services.kpi_rules import KPI_RULES, KpiRule, Polarity, classify_status, get_rule
from backend.app.services.live_simulator import AlertPolicy, apply_station_bias, make_rng, simulate

__all__ = [
    "load_base_snapshot",
    "KPI_RULES",
    "KpiRule",
    "Polarity",
    "classify_status",
    "get_rule",
    "AlertPolicy",
    "apply_station_bias",
    "make_rng",
    "simulate",
]
