"""Suggested entry price blending base and event-adjusted prices."""

from __future__ import annotations

from event_vol_pricing.config import (
    ENTRY_DISCOUNT_BASE,
    ENTRY_DISCOUNT_BEARISH,
    ENTRY_DISCOUNT_BULLISH,
    ENTRY_IMMINENT_DAYS,
    ENTRY_IMMINENT_FACTOR,
    ENTRY_SENTIMENT_THRESHOLD,
    EVENT_IV_HORIZON_DAYS,
    NO_CATALYST_ENTRY_FACTOR,
)
from event_vol_pricing.structures import MarketEvent, SentimentScore


def entry_discount_factor(
    sentiment: SentimentScore | None,
    days_to_event: int,
) -> float:
    """Share of the event premium worth paying at entry."""
    factor = ENTRY_DISCOUNT_BASE
    if sentiment is not None:
        score = sentiment.overall_sentiment_score
        if score > ENTRY_SENTIMENT_THRESHOLD:
            factor = ENTRY_DISCOUNT_BULLISH
        elif score < -ENTRY_SENTIMENT_THRESHOLD:
            factor = ENTRY_DISCOUNT_BEARISH
    if days_to_event <= ENTRY_IMMINENT_DAYS:
        factor *= ENTRY_IMMINENT_FACTOR
    return factor


def recommended_entry_price(
    base_price: float,
    adjusted_price: float,
    event: MarketEvent | None,
    sentiment: SentimentScore | None,
    days_to_event: int,
) -> float:
    """Return the suggested entry price.

    Without a catalyst inside the event horizon this is a flat discount to
    the base price; otherwise the base price plus a discounted share of the
    event premium.
    """
    if event is None or days_to_event > EVENT_IV_HORIZON_DAYS:
        return base_price * NO_CATALYST_ENTRY_FACTOR
    premium = adjusted_price - base_price
    return base_price + premium * entry_discount_factor(sentiment, days_to_event)
