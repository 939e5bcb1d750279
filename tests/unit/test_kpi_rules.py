"""
Unit tests for KPI rules and status classification.
"""
import pytest

from backend.app.schemas.network import KpiStatus
from backend.app.services.kpi_rules import (
    DEFAULT_RULE,
    KPI_RULES,
    DeltaKind,
    Polarity,
    classify_status,
    get_rule,
)
from backend.app.services.live_simulator import make_rng


def test_latency_example_is_good():
    # 50 <= 80*0.6 (48) is false, 50 <= 80*0.85 (68) is true
    assert classify_status(50, 80, Polarity.LOWER_IS_BETTER) == KpiStatus.GOOD


@pytest.mark.parametrize(
    "current,expected",
    [
        (48, KpiStatus.EXCELLENT),   # boundary 0.6*T is inclusive
        (49, KpiStatus.GOOD),
        (68, KpiStatus.GOOD),        # boundary 0.85*T is inclusive
        (69, KpiStatus.WARNING),
        (80, KpiStatus.WARNING),     # boundary T is inclusive
        (81, KpiStatus.CRITICAL),
    ],
)
def test_lower_is_better_bands(current, expected):
    assert classify_status(current, 80, Polarity.LOWER_IS_BETTER) == expected


@pytest.mark.parametrize(
    "current,expected",
    [
        (105, KpiStatus.EXCELLENT),
        (104.9, KpiStatus.GOOD),
        (98, KpiStatus.GOOD),
        (97.9, KpiStatus.WARNING),
        (90, KpiStatus.WARNING),
        (89.9, KpiStatus.CRITICAL),
    ],
)
def test_higher_is_better_bands(current, expected):
    assert classify_status(current, 100, Polarity.HIGHER_IS_BETTER) == expected


def test_classification_is_deterministic():
    results = {classify_status(1.7, 2.0, Polarity.LOWER_IS_BETTER) for _ in range(50)}
    assert results == {KpiStatus.GOOD}


def test_polarity_accepts_plain_strings():
    assert classify_status(50, 80, "lower_is_better") == KpiStatus.GOOD


def test_rule_table_polarity():
    lower = {name for name, rule in KPI_RULES.items() if rule.polarity == Polarity.LOWER_IS_BETTER}
    assert lower == {"latency", "call_drop_rate", "packet_loss"}


def test_unknown_kpi_uses_multiplicative_jitter():
    rule = get_rule("throughput_mbps")
    assert rule is DEFAULT_RULE
    assert rule.delta_kind is DeltaKind.MULTIPLICATIVE
    assert rule.polarity == Polarity.HIGHER_IS_BETTER

    rng = make_rng(3)
    for _ in range(200):
        value = rule.next_value(100.0, rng)
        assert 95.0 <= value <= 105.0


def test_integer_rules_round_to_int():
    rng = make_rng(11)
    for name in ("active_users", "latency"):
        value = get_rule(name).next_value(KPI_RULES[name].clamp_min + 500, rng)
        assert isinstance(value, int)


def test_real_rules_round_to_two_decimals():
    rng = make_rng(5)
    value = get_rule("packet_loss").next_value(0.5, rng)
    assert value == round(value, 2)


def test_integer_step_stays_within_delta():
    rule = get_rule("latency")
    rng = make_rng(1)
    deltas = {rule.draw(50, rng) - 50 for _ in range(500)}
    assert deltas <= set(range(-3, 4))
    # Both extremes are reachable
    assert -3 in deltas and 3 in deltas


def test_clamp_floor_only_for_active_users():
    rule = get_rule("active_users")
    assert rule.clamp(50_000) == 100_000
    assert rule.clamp(5_000_000) == 5_000_000


def test_clamp_both_sides():
    rule = get_rule("network_availability")
    assert rule.clamp(120) == 100
    assert rule.clamp(80) == 95
    assert rule.clamp(97.5) == 97.5
