"""Optimistic / realistic / pessimistic price bands."""

from __future__ import annotations

import logging

from event_vol_pricing.config import (
    BASE_RANGE_FACTOR,
    SENTIMENT_RANGE_SCALE,
    SEVERITY_RANGE_FACTORS,
)
from event_vol_pricing.structures import MarketEvent, PriceRange, SentimentScore


LOGGER = logging.getLogger(__name__)


def range_factor(event: MarketEvent | None, sentiment: SentimentScore | None) -> float:
    factor = BASE_RANGE_FACTOR
    if event is not None:
        factor = SEVERITY_RANGE_FACTORS.get(event.impact_severity, BASE_RANGE_FACTOR)
    if sentiment is not None:
        factor += abs(sentiment.overall_sentiment_score) / SENTIMENT_RANGE_SCALE
    return factor


def price_range(
    price: float,
    event: MarketEvent | None,
    sentiment: SentimentScore | None,
) -> PriceRange:
    """Return a symmetric band around ``price``.

    The pessimistic bound is not floored at zero.
    """
    factor = range_factor(event, sentiment)
    pessimistic = price * (1.0 - factor)
    if pessimistic < 0:
        LOGGER.debug(
            "Pessimistic bound %.4f below zero (range factor %.3f)",
            pessimistic,
            factor,
        )
    return PriceRange(
        optimistic=price * (1.0 + factor),
        realistic=price,
        pessimistic=pessimistic,
    )
