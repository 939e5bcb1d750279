"""
Base data store for the monitoring backend.

Reads the static network fixture (KPI definitions, regional metrics, base
stations, alerts) and validates it into an immutable BaseSnapshot. The
fixture is read fresh on every call and never written back.
"""

import json
from pathlib import Path
from typing import Optional, Union

from pydantic import ValidationError

from backend.app.core.config import get_settings
from backend.app.core.exceptions import BadFixtureError
from backend.app.core.logging import get_logger
from backend.app.schemas.network import BaseSnapshot

logger = get_logger(__name__)


def resolve_data_path(path: Optional[Union[str, Path]] = None) -> Path:
    """Fixture path: explicit argument, else DATA_PATH setting."""
    return Path(path) if path is not None else Path(get_settings().data_path)


def load_base_snapshot(path: Optional[Union[str, Path]] = None) -> BaseSnapshot:
    """
    Load and validate the base network snapshot.

    Args:
        path: Override for the fixture location (defaults to settings.data_path).

    Raises:
        BadFixtureError: fixture missing, unreadable, not JSON, or not a valid snapshot.
    """
    data_path = resolve_data_path(path)

    try:
        raw = data_path.read_text(encoding="utf-8")
    except OSError as e:
        logger.error(f"Cannot read base data fixture {data_path}: {e}")
        raise BadFixtureError(f"Cannot read base data fixture: {data_path}") from e

    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as e:
        logger.error(f"Base data fixture {data_path} is not valid JSON: {e}")
        raise BadFixtureError(f"Base data fixture is not valid JSON: {e.msg} (line {e.lineno})") from e

    try:
        snapshot = BaseSnapshot.model_validate(payload)
    except ValidationError as e:
        logger.error(f"Base data fixture {data_path} failed validation: {e.error_count()} error(s)")
        raise BadFixtureError(f"Base data fixture failed validation: {e.error_count()} error(s)") from e

    logger.debug(
        f"Loaded base snapshot from {data_path}",
        extra={
            "extra_data": {
                "kpis": len(snapshot.network_kpis),
                "regions": len(snapshot.regional_performance),
                "base_stations": len(snapshot.base_stations),
                "alerts": len(snapshot.alerts),
            }
        },
    )
    return snapshot
