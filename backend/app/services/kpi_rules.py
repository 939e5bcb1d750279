"""
KPI variation rules and status classification.

Each KPI name maps to a KpiRule describing how one simulation tick perturbs
it (delta distribution), the interval it must stay in, how it is rounded
and which direction is "better". Names without a rule fall back to a
multiplicative +/-5% jitter.
"""
import math
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Union

import numpy as np

from backend.app.schemas.network import KpiStatus

Number = Union[int, float]


class Polarity(str, Enum):
    LOWER_IS_BETTER = "lower_is_better"
    HIGHER_IS_BETTER = "higher_is_better"


class DeltaKind(str, Enum):
    INTEGER_STEP = "integer_step"       # current + randint(low, high)
    REAL_STEP = "real_step"             # current + uniform(low, high)
    MULTIPLICATIVE = "multiplicative"   # current * (1 + uniform(low, high))


# Status bands as fractions of the threshold, best band first
LOWER_IS_BETTER_BANDS = ((0.6, KpiStatus.EXCELLENT), (0.85, KpiStatus.GOOD), (1.0, KpiStatus.WARNING))
HIGHER_IS_BETTER_BANDS = ((1.05, KpiStatus.EXCELLENT), (0.98, KpiStatus.GOOD), (0.90, KpiStatus.WARNING))


@dataclass(frozen=True)
class KpiRule:
    delta_kind: DeltaKind
    delta_low: float
    delta_high: float
    clamp_min: Optional[float] = None
    clamp_max: Optional[float] = None
    decimals: Optional[int] = 2  # None = round to integer
    polarity: Polarity = Polarity.HIGHER_IS_BETTER

    def draw(self, current: Number, rng: np.random.Generator) -> float:
        """Apply one random perturbation to `current` (unclamped, unrounded)."""
        if self.delta_kind is DeltaKind.INTEGER_STEP:
            return current + int(rng.integers(int(self.delta_low), int(self.delta_high), endpoint=True))
        if self.delta_kind is DeltaKind.REAL_STEP:
            return current + float(rng.uniform(self.delta_low, self.delta_high))
        return current * (1 + float(rng.uniform(self.delta_low, self.delta_high)))

    def clamp(self, value: float) -> float:
        if self.clamp_min is not None:
            value = max(self.clamp_min, value)
        if self.clamp_max is not None:
            value = min(self.clamp_max, value)
        return value

    def round(self, value: float) -> Number:
        if self.decimals is None:
            # Half-up, matching how dashboards display counts
            return int(math.floor(value + 0.5))
        return round(value, self.decimals)

    def next_value(self, current: Number, rng: np.random.Generator) -> Number:
        """Perturb, clamp, then round."""
        return self.round(self.clamp(self.draw(current, rng)))

    def classify(self, current: Number, threshold: Number) -> KpiStatus:
        return classify_status(current, threshold, self.polarity)


KPI_RULES: Dict[str, KpiRule] = {
    "active_users": KpiRule(
        delta_kind=DeltaKind.INTEGER_STEP, delta_low=-2000, delta_high=2000,
        clamp_min=100_000, decimals=None,
    ),
    "latency": KpiRule(
        delta_kind=DeltaKind.INTEGER_STEP, delta_low=-3, delta_high=3,
        clamp_min=10, clamp_max=100, decimals=None,
        polarity=Polarity.LOWER_IS_BETTER,
    ),
    "call_drop_rate": KpiRule(
        delta_kind=DeltaKind.REAL_STEP, delta_low=-0.15, delta_high=0.15,
        clamp_min=0.1, clamp_max=3, polarity=Polarity.LOWER_IS_BETTER,
    ),
    "packet_loss": KpiRule(
        delta_kind=DeltaKind.REAL_STEP, delta_low=-0.15, delta_high=0.15,
        clamp_min=0.1, clamp_max=3, polarity=Polarity.LOWER_IS_BETTER,
    ),
    "call_setup_success_rate": KpiRule(
        delta_kind=DeltaKind.REAL_STEP, delta_low=-0.2, delta_high=0.2,
        clamp_min=95, clamp_max=100,
    ),
    "network_availability": KpiRule(
        delta_kind=DeltaKind.REAL_STEP, delta_low=-0.2, delta_high=0.2,
        clamp_min=95, clamp_max=100,
    ),
}

DEFAULT_RULE = KpiRule(delta_kind=DeltaKind.MULTIPLICATIVE, delta_low=-0.05, delta_high=0.05)


def get_rule(kpi_name: str) -> KpiRule:
    return KPI_RULES.get(kpi_name, DEFAULT_RULE)


def classify_status(current: Number, threshold: Number, polarity: Polarity) -> KpiStatus:
    """
    Classify a KPI reading against its threshold.

    Lower-is-better: excellent <= 0.6T < good <= 0.85T < warning <= T < critical.
    Higher-is-better: excellent >= 1.05T > good >= 0.98T > warning >= 0.90T > critical.
    """
    if polarity == Polarity.LOWER_IS_BETTER:
        for factor, status in LOWER_IS_BETTER_BANDS:
            if current <= threshold * factor:
                return status
    else:
        for factor, status in HIGHER_IS_BETTER_BANDS:
            if current >= threshold * factor:
                return status
    return KpiStatus.CRITICAL
