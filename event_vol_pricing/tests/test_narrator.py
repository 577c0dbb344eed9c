"""Tests for the recommendation ladder."""

import datetime as dt

import pytest

from event_vol_pricing.pricing.narrator import (
    RECOMMENDATION_LADDER,
    NarrativeContext,
    recommend,
    select_rung,
)
from event_vol_pricing.structures import MarketEvent, SentimentScore


def _event(event_type: str = "earnings") -> MarketEvent:
    return MarketEvent(
        ticker="TSLA",
        event_type=event_type,
        event_date=dt.datetime(2026, 2, 1),
        impact_severity="high",
    )


def _sentiment(score: float) -> SentimentScore:
    return SentimentScore(overall_sentiment_score=score, sentiment_momentum=0.0)


def _ctx(days: int, event: MarketEvent | None = None, base: float = 2.0) -> NarrativeContext:
    return NarrativeContext(
        base_price=base,
        adjusted_price=2.5,
        event=event,
        sentiment=None,
        days_to_event=days,
        is_call=True,
    )


def test_ladder_order() -> None:
    names = [name for name, _, _ in RECOMMENDATION_LADDER]
    assert names == ["NO_EVENT", "URGENT", "NEAR", "FAIR", "EARLY"]


@pytest.mark.parametrize(
    ("days", "rung"),
    [(-1, "URGENT"), (3, "URGENT"), (4, "NEAR"), (7, "NEAR"), (8, "FAIR"), (14, "FAIR"), (15, "EARLY"), (999, "EARLY")],
)
def test_select_rung_boundaries(days: int, rung: str) -> None:
    assert select_rung(_ctx(days, _event())) == rung


def test_no_event_takes_precedence() -> None:
    assert select_rung(_ctx(1)) == "NO_EVENT"
    text = recommend(2.5, 3.0, None, _sentiment(90.0), 999, True)
    assert text == "No major events detected. Consider standard pricing at $2.50"


def test_urgent_message() -> None:
    text = recommend(2.0, 2.5, _event("fda_approval"), None, 1, False)
    assert text.startswith("fda_approval in 1 day.")
    assert "+25.0%" in text
    assert "Consider selling puts or waiting for IV crush." in text


def test_urgent_message_pluralises_days() -> None:
    text = recommend(2.0, 2.5, _event(), None, 3, True)
    assert "in 3 days." in text
    assert "selling calls" in text


def test_near_bullish_rich_premium() -> None:
    text = recommend(2.0, 2.5, _event(), _sentiment(50.0), 5, True)
    assert "Bullish sentiment detected" in text
    assert "Consider waiting for better entry" in text
    assert "+25.0%" in text


def test_near_bearish_moderate_premium() -> None:
    text = recommend(2.0, 2.2, _event(), _sentiment(-50.0), 6, True)
    assert "Bearish sentiment detected" in text
    assert "Moderate entry opportunity" in text


def test_near_weak_sentiment() -> None:
    text = recommend(2.0, 2.2, _event("merger"), _sentiment(40.0), 7, True)
    assert text.startswith("merger approaching (7 days).")
    assert "Consider timing your entry carefully." in text


def test_fair_and_early_messages() -> None:
    fair = recommend(2.0, 2.1, _event(), None, 10, True)
    assert "Fair entry zone" in fair
    assert "in 10 days" in fair
    assert "+5.0%" in fair

    early = recommend(2.0, 2.02, _event(), None, 25, True)
    assert early.startswith("earnings scheduled in 25 days.")
    assert "+1.0%" in early
    assert "before IV ramps up" in early


def test_zero_base_price_premium_is_zero() -> None:
    ctx = _ctx(10, _event(), base=0.0)
    assert ctx.premium_pct == 0.0
    text = recommend(0.0, 0.5, _event(), None, 10, True)
    assert "+0.0%" in text


@pytest.mark.parametrize("days", [1, 5, 10, 30])
def test_recommend_uses_selected_rung(days: int) -> None:
    ctx = _ctx(days, _event())
    formatters = {name: formatter for name, _, formatter in RECOMMENDATION_LADDER}
    expected = formatters[select_rung(ctx)](ctx)
    assert recommend(2.0, 2.5, _event(), None, days, True) == expected
