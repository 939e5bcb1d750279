"""Request-scoped dependencies shared by the monitoring routers."""

import numpy as np
from fastapi import Depends

from backend.app.core.config import Settings, get_settings
from backend.app.schemas.network import BaseSnapshot, LiveSnapshot
from backend.app.services.base_data_store import load_base_snapshot
from backend.app.services.live_simulator import AlertPolicy, make_rng, simulate


def get_base_snapshot(settings: Settings = Depends(get_settings)) -> BaseSnapshot:
    """Fresh read of the fixture for every request."""
    return load_base_snapshot(settings.data_path)


def get_rng(settings: Settings = Depends(get_settings)) -> np.random.Generator:
    return make_rng(settings.simulation_seed)


def get_alert_policy(settings: Settings = Depends(get_settings)) -> AlertPolicy:
    return AlertPolicy.from_settings(settings)


def get_live_snapshot(
    base: BaseSnapshot = Depends(get_base_snapshot),
    rng: np.random.Generator = Depends(get_rng),
    alert_policy: AlertPolicy = Depends(get_alert_policy),
) -> LiveSnapshot:
    return simulate(base, rng, alert_policy=alert_policy)
