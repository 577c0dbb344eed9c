"""Tests for price range, entry price and confidence scoring."""

import datetime as dt

import numpy as np
import pytest

from event_vol_pricing.pricing.confidence import confidence_level, confidence_score
from event_vol_pricing.pricing.entry import recommended_entry_price
from event_vol_pricing.pricing.scenarios import price_range, range_factor
from event_vol_pricing.structures import MarketEvent, SentimentScore


def _event(severity: str = "medium") -> MarketEvent:
    return MarketEvent(
        ticker="AAPL",
        event_type="earnings",
        event_date=dt.datetime(2026, 2, 1),
        impact_severity=severity,
    )


def _sentiment(score: float) -> SentimentScore:
    return SentimentScore(overall_sentiment_score=score, sentiment_momentum=0.0)


# ── Price range ────────────────────────────────────────────────────────────


def test_range_factor_defaults() -> None:
    assert range_factor(None, None) == pytest.approx(0.10)
    assert range_factor(_event("low"), None) == pytest.approx(0.10)
    assert range_factor(_event("medium"), None) == pytest.approx(0.15)
    assert range_factor(_event("high"), None) == pytest.approx(0.20)
    assert range_factor(_event("critical"), _sentiment(-60.0)) == pytest.approx(0.55)


def test_price_range_bands() -> None:
    band = price_range(4.0, _event("high"), _sentiment(20.0))
    assert band.realistic == 4.0
    assert band.optimistic == pytest.approx(4.0 * 1.3)
    assert band.pessimistic == pytest.approx(4.0 * 0.7)


def test_price_range_ordering_randomised() -> None:
    rng = np.random.default_rng(11)
    severities = ["low", "medium", "high", "critical"]
    for _ in range(200):
        price = float(rng.uniform(0.01, 50.0))
        event = _event(severities[int(rng.integers(4))]) if rng.random() < 0.7 else None
        sentiment = _sentiment(float(rng.uniform(-100, 100))) if rng.random() < 0.7 else None
        band = price_range(price, event, sentiment)
        assert band.pessimistic <= band.realistic <= band.optimistic


# ── Entry price ────────────────────────────────────────────────────────────


def test_entry_without_catalyst() -> None:
    assert recommended_entry_price(2.0, 3.0, None, None, 999) == 2.0 * 0.95
    assert recommended_entry_price(2.0, 3.0, _event(), _sentiment(80.0), 31) == 2.0 * 0.95


@pytest.mark.parametrize(
    ("score", "days", "expected"),
    [
        (None, 10, 2.7),
        (40.0, 10, 2.85),
        (-40.0, 10, 2.6),
        (30.0, 10, 2.7),
        (-30.0, 10, 2.7),
        (40.0, 3, 2.0 + 0.85 * 0.9),
        (None, 1, 2.0 + 0.7 * 0.9),
        (None, 30, 2.7),
    ],
)
def test_entry_discount(score: float | None, days: int, expected: float) -> None:
    sentiment = _sentiment(score) if score is not None else None
    entry = recommended_entry_price(2.0, 3.0, _event(), sentiment, days)
    assert entry == pytest.approx(expected)


# ── Confidence ─────────────────────────────────────────────────────────────


def test_confidence_without_event_is_low() -> None:
    assert confidence_level(None, _sentiment(90.0), 1) == "low"


@pytest.mark.parametrize(
    ("severity", "score", "days", "points", "level"),
    [
        ("critical", 60.0, 5, 85, "high"),
        ("high", 10.0, 20, 50, "medium"),
        ("medium", None, 10, 35, "low"),
        ("medium", 26.0, 30, 40, "medium"),
        ("low", 30.0, 30, 20, "low"),
        ("high", 50.0, 7, 75, "high"),
        ("high", 50.0, 8, 65, "medium"),
        ("low", None, 21, 10, "low"),
    ],
)
def test_confidence_tiers(
    severity: str,
    score: float | None,
    days: int,
    points: int,
    level: str,
) -> None:
    sentiment = _sentiment(score) if score is not None else None
    assert confidence_score(_event(severity), sentiment, days) == points
    assert confidence_level(_event(severity), sentiment, days) == level
