"""Event- and sentiment-driven implied volatility adjustment."""

from __future__ import annotations

import logging

from event_vol_pricing.config import (
    DEFAULT_EVENT_TYPE_IV_MULTIPLIER,
    EVENT_IV_HORIZON_DAYS,
    EVENT_TYPE_IV_MULTIPLIERS,
    IV_CAP_MULTIPLE,
    POST_EVENT_IV_CRUSH,
    PRE_EVENT_FALLBACK_DAYS,
    PRE_EVENT_IV_MULTIPLIERS,
    SENTIMENT_MOMENTUM_IV_WEIGHT,
    SENTIMENT_MOMENTUM_SCALE,
    SENTIMENT_SCORE_IV_WEIGHT,
    SENTIMENT_SCORE_SCALE,
    SEVERITY_IV_MULTIPLIERS,
    SURPRISE_CRUSH_WEIGHT,
)
from event_vol_pricing.structures import (
    MarketEvent,
    SentimentScore,
    VolatilityAdjustment,
)


LOGGER = logging.getLogger(__name__)

_PRE_EVENT_LOOKUP: dict[int, float] = dict(PRE_EVENT_IV_MULTIPLIERS)


def time_multiplier(days_to_event: float) -> float:
    """Return the pre-event IV multiplier for the smallest threshold >= days."""
    for threshold, multiplier in PRE_EVENT_IV_MULTIPLIERS:
        if days_to_event <= threshold:
            return multiplier
    return _PRE_EVENT_LOOKUP[PRE_EVENT_FALLBACK_DAYS]


def event_type_multiplier(event_type: str) -> float:
    return EVENT_TYPE_IV_MULTIPLIERS.get(event_type, DEFAULT_EVENT_TYPE_IV_MULTIPLIER)


def severity_multiplier(severity: str) -> float:
    return SEVERITY_IV_MULTIPLIERS.get(severity, 1.0)


def event_multiplier(event: MarketEvent | None, days_to_event: float) -> float:
    """Combined type x time x severity multiplier, 1.0 outside the event horizon."""
    if event is None or days_to_event > EVENT_IV_HORIZON_DAYS:
        return 1.0
    return (
        event_type_multiplier(event.event_type)
        * time_multiplier(days_to_event)
        * severity_multiplier(event.impact_severity)
    )


def sentiment_multiplier(sentiment: SentimentScore | None) -> float:
    if sentiment is None:
        return 1.0
    magnitude = abs(sentiment.overall_sentiment_score) / SENTIMENT_SCORE_SCALE
    momentum = abs(sentiment.sentiment_momentum) / SENTIMENT_MOMENTUM_SCALE
    return (
        1.0
        + magnitude * SENTIMENT_SCORE_IV_WEIGHT
        + momentum * SENTIMENT_MOMENTUM_IV_WEIGHT
    )


def adjust_volatility(
    base_iv: float,
    event: MarketEvent | None,
    days_to_event: float,
    sentiment: SentimentScore | None,
) -> VolatilityAdjustment:
    """Scale ``base_iv`` for event proximity and sentiment.

    The final IV is capped at ``IV_CAP_MULTIPLE`` times the base IV; the
    intermediate event-adjusted IV is not capped.
    """
    if base_iv < 0:
        raise ValueError(f"base_iv must be non-negative, got {base_iv!r}")

    event_mult = event_multiplier(event, days_to_event)
    sentiment_mult = sentiment_multiplier(sentiment)

    event_adjusted_iv = base_iv * event_mult
    uncapped = event_adjusted_iv * sentiment_mult
    cap = base_iv * IV_CAP_MULTIPLE
    if uncapped > cap:
        LOGGER.info(
            "Adjusted IV %.4f capped at %.1fx base (%.4f)",
            uncapped,
            IV_CAP_MULTIPLE,
            cap,
        )
    return VolatilityAdjustment(
        base_iv=base_iv,
        event_adjusted_iv=event_adjusted_iv,
        pre_event_multiplier=event_mult,
        sentiment_multiplier=sentiment_mult,
        final_iv=min(uncapped, cap),
    )


def post_event_iv_crush(pre_event_iv: float, event: MarketEvent) -> float:
    """Return the IV expected after ``event`` resolves."""
    surprise = event.surprise_factor if event.surprise_factor is not None else 0.0
    crush = POST_EVENT_IV_CRUSH + abs(surprise) / 100.0 * SURPRISE_CRUSH_WEIGHT
    return pre_event_iv * (1.0 - crush)
