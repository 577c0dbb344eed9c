"""Tests for event/sentiment IV adjustment and post-event crush."""

import datetime as dt

import numpy as np
import pytest

from event_vol_pricing.analytics.volatility import (
    adjust_volatility,
    event_multiplier,
    post_event_iv_crush,
    sentiment_multiplier,
    time_multiplier,
)
from event_vol_pricing.config import (
    EVENT_TYPE_IV_MULTIPLIERS,
    IV_CAP_MULTIPLE,
    PRE_EVENT_IV_MULTIPLIERS,
)
from event_vol_pricing.structures import MarketEvent, SentimentScore


SEVERITY_ORDER = ["low", "medium", "high", "critical"]


def _event(
    event_type: str = "earnings",
    severity: str = "medium",
    surprise: float | None = None,
) -> MarketEvent:
    return MarketEvent(
        ticker="NVDA",
        event_type=event_type,
        event_date=dt.datetime(2026, 1, 7),
        impact_severity=severity,
        surprise_factor=surprise,
    )


def test_critical_earnings_two_days_out() -> None:
    adjustment = adjust_volatility(0.25, _event(severity="critical"), 2, None)
    assert adjustment.pre_event_multiplier == pytest.approx(1.82)
    assert adjustment.event_adjusted_iv == pytest.approx(0.455)
    assert adjustment.sentiment_multiplier == 1.0
    assert adjustment.final_iv == pytest.approx(0.455)


def test_sentiment_only_multiplier() -> None:
    sentiment = SentimentScore(overall_sentiment_score=80.0, sentiment_momentum=40.0)
    adjustment = adjust_volatility(0.30, None, 999, sentiment)
    assert adjustment.pre_event_multiplier == 1.0
    assert adjustment.event_adjusted_iv == 0.30
    assert adjustment.sentiment_multiplier == pytest.approx(1.2)
    assert adjustment.final_iv == pytest.approx(0.36)


def test_sentiment_multiplier_uses_magnitudes() -> None:
    bearish = SentimentScore(overall_sentiment_score=-80.0, sentiment_momentum=-40.0)
    assert sentiment_multiplier(bearish) == pytest.approx(1.2)
    assert sentiment_multiplier(None) == 1.0


@pytest.mark.parametrize(
    ("days", "expected"),
    [
        (-2, 1.5),
        (0, 1.5),
        (1, 1.5),
        (3, 1.35),
        (7, 1.15),
        (8, 1.1),
        (14, 1.1),
        (15, 1.05),
        (22, 1.02),
        (30, 1.02),
        (45, 1.02),
    ],
)
def test_time_multiplier_smallest_threshold_at_or_above(days: int, expected: float) -> None:
    assert time_multiplier(days) == expected


def test_time_multiplier_table_is_ascending() -> None:
    thresholds = [days for days, _ in PRE_EVENT_IV_MULTIPLIERS]
    assert thresholds == sorted(thresholds)


def test_unknown_event_type_uses_default_multiplier() -> None:
    # dividend: 0.5 * 1.15 (7 days) * 1.0 (low)
    multiplier = event_multiplier(_event("dividend", "low"), 7)
    assert multiplier == pytest.approx(0.5 * 1.15)


def test_event_beyond_horizon_is_ignored() -> None:
    assert event_multiplier(_event(severity="critical"), 31) == 1.0
    assert event_multiplier(None, 2) == 1.0


def test_final_iv_is_capped() -> None:
    sentiment = SentimentScore(overall_sentiment_score=100.0, sentiment_momentum=100.0)
    adjustment = adjust_volatility(
        0.4, _event("fda_approval", "critical"), 1, sentiment
    )
    # 1.3 * 1.5 * 1.3 = 2.535 before sentiment
    assert adjustment.event_adjusted_iv == pytest.approx(0.4 * 2.535)
    assert adjustment.final_iv == pytest.approx(0.4 * IV_CAP_MULTIPLE)


def test_final_iv_never_exceeds_cap_randomised() -> None:
    rng = np.random.default_rng(7)
    event_types = list(EVENT_TYPE_IV_MULTIPLIERS) + ["guidance_update"]
    for _ in range(500):
        base_iv = float(rng.uniform(0.01, 2.0))
        event = None
        if rng.random() < 0.8:
            event = _event(
                event_types[int(rng.integers(len(event_types)))],
                SEVERITY_ORDER[int(rng.integers(len(SEVERITY_ORDER)))],
            )
        sentiment = None
        if rng.random() < 0.8:
            sentiment = SentimentScore(
                overall_sentiment_score=float(rng.uniform(-100, 100)),
                sentiment_momentum=float(rng.uniform(-200, 200)),
            )
        days = int(rng.integers(-2, 60))
        adjustment = adjust_volatility(base_iv, event, days, sentiment)
        assert 0.0 <= adjustment.final_iv <= base_iv * IV_CAP_MULTIPLE


@pytest.mark.parametrize("days", [1, 5, 10, 30])
@pytest.mark.parametrize("event_type", list(EVENT_TYPE_IV_MULTIPLIERS))
def test_severity_is_monotonic(days: int, event_type: str) -> None:
    ivs = [
        adjust_volatility(0.3, _event(event_type, severity), days, None).event_adjusted_iv
        for severity in SEVERITY_ORDER
    ]
    assert ivs == sorted(ivs)


def test_negative_base_iv_raises() -> None:
    with pytest.raises(ValueError):
        adjust_volatility(-0.1, None, 999, None)


def test_post_event_iv_crush() -> None:
    assert post_event_iv_crush(0.5, _event(surprise=-20.0)) == pytest.approx(0.29)
    assert post_event_iv_crush(0.5, _event()) == pytest.approx(0.3)


def test_missing_momentum_counts_as_flat() -> None:
    sentiment = SentimentScore(overall_sentiment_score=80.0, sentiment_momentum=None)
    assert sentiment.sentiment_momentum == 0.0
    assert sentiment_multiplier(sentiment) == pytest.approx(1.12)


@pytest.mark.parametrize("momentum", [float("nan"), float("inf"), float("-inf")])
def test_non_finite_momentum_rejected(momentum: float) -> None:
    with pytest.raises(ValueError, match="sentiment_momentum"):
        SentimentScore(overall_sentiment_score=10.0, sentiment_momentum=momentum)


@pytest.mark.parametrize("surprise", [float("nan"), float("inf")])
def test_non_finite_surprise_rejected(surprise: float) -> None:
    with pytest.raises(ValueError, match="surprise_factor"):
        _event(surprise=surprise)


def test_post_event_iv_crush_zero_surprise() -> None:
    assert post_event_iv_crush(0.5, _event(surprise=0.0)) == pytest.approx(0.3)
