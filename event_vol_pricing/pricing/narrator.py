"""
Recommendation ladder: ordered rungs of (name, predicate, formatter).

Rungs are evaluated top-down and the first predicate that matches formats
the recommendation text. Order is significant: each rung assumes every
rung above it did not match (e.g. ``NEAR`` only sees ``days_to_event > 3``).
The final rung always matches.

Usage
-----
    from event_vol_pricing.pricing.narrator import recommend
    text = recommend(base, adjusted, event, sentiment, days_to_event, is_call)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from event_vol_pricing.config import (
    NARRATIVE_FAIR_DAYS,
    NARRATIVE_NEAR_DAYS,
    NARRATIVE_RICH_PREMIUM_PCT,
    NARRATIVE_SENTIMENT_THRESHOLD,
    NARRATIVE_URGENT_DAYS,
)
from event_vol_pricing.structures import MarketEvent, SentimentScore


@dataclass(frozen=True)
class NarrativeContext:
    base_price: float
    adjusted_price: float
    event: MarketEvent | None
    sentiment: SentimentScore | None
    days_to_event: int
    is_call: bool

    @property
    def premium_pct(self) -> float:
        """Event premium as a percent of the base price (0 for a zero base)."""
        if self.base_price == 0:
            return 0.0
        return (self.adjusted_price - self.base_price) / self.base_price * 100.0

    @property
    def event_type(self) -> str:
        return self.event.event_type if self.event else "none"

    @property
    def days_text(self) -> str:
        unit = "day" if self.days_to_event == 1 else "days"
        return f"{self.days_to_event} {unit}"

    @property
    def option_type(self) -> str:
        return "call" if self.is_call else "put"


def _no_event(ctx: NarrativeContext) -> str:
    return (
        "No major events detected. "
        f"Consider standard pricing at ${ctx.base_price:.2f}"
    )


def _urgent(ctx: NarrativeContext) -> str:
    return (
        f"{ctx.event_type} in {ctx.days_text}. "
        f"High IV premium ({ctx.premium_pct:+.1f}%). "
        f"Consider selling {ctx.option_type}s or waiting for IV crush."
    )


def _near(ctx: NarrativeContext) -> str:
    sentiment = ctx.sentiment
    if (
        sentiment is not None
        and abs(sentiment.overall_sentiment_score) > NARRATIVE_SENTIMENT_THRESHOLD
    ):
        bias = "Bullish" if sentiment.overall_sentiment_score > 0 else "Bearish"
        advice = (
            "Consider waiting for better entry"
            if ctx.premium_pct > NARRATIVE_RICH_PREMIUM_PCT
            else "Moderate entry opportunity"
        )
        return (
            f"{ctx.event_type} in {ctx.days_text}. {bias} sentiment detected. "
            f"IV premium at {ctx.premium_pct:+.1f}%. {advice}."
        )
    return (
        f"{ctx.event_type} approaching ({ctx.days_text}). "
        f"IV premium at {ctx.premium_pct:+.1f}%. "
        "Consider timing your entry carefully."
    )


def _fair(ctx: NarrativeContext) -> str:
    return (
        f"{ctx.event_type} in {ctx.days_text}. "
        f"IV premium at {ctx.premium_pct:+.1f}%. "
        "Building positions now may capture some IV expansion. Fair entry zone."
    )


def _early(ctx: NarrativeContext) -> str:
    return (
        f"{ctx.event_type} scheduled in {ctx.days_text}. "
        f"IV premium minimal ({ctx.premium_pct:+.1f}%). "
        "Good time to establish positions before IV ramps up."
    )


Rung = tuple[
    str, Callable[[NarrativeContext], bool], Callable[[NarrativeContext], str]
]

RECOMMENDATION_LADDER: tuple[Rung, ...] = (
    ("NO_EVENT", lambda ctx: ctx.event is None, _no_event),
    ("URGENT", lambda ctx: ctx.days_to_event <= NARRATIVE_URGENT_DAYS, _urgent),
    ("NEAR", lambda ctx: ctx.days_to_event <= NARRATIVE_NEAR_DAYS, _near),
    ("FAIR", lambda ctx: ctx.days_to_event <= NARRATIVE_FAIR_DAYS, _fair),
    ("EARLY", lambda ctx: True, _early),
)


def _match(ctx: NarrativeContext) -> Rung:
    for rung in RECOMMENDATION_LADDER:
        if rung[1](ctx):
            return rung
    raise AssertionError("recommendation ladder has no terminal rung")


def select_rung(ctx: NarrativeContext) -> str:
    """Return the name of the first matching rung."""
    return _match(ctx)[0]


def recommend(
    base_price: float,
    adjusted_price: float,
    event: MarketEvent | None,
    sentiment: SentimentScore | None,
    days_to_event: int,
    is_call: bool,
) -> str:
    """Return the recommendation text for the first matching rung."""
    ctx = NarrativeContext(
        base_price=base_price,
        adjusted_price=adjusted_price,
        event=event,
        sentiment=sentiment,
        days_to_event=days_to_event,
        is_call=is_call,
    )
    _, _, formatter = _match(ctx)
    return formatter(ctx)


__all__ = [
    "NarrativeContext",
    "RECOMMENDATION_LADDER",
    "recommend",
    "select_rung",
]
