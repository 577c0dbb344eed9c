"""Discrete confidence rating from event, sentiment and timing signals."""

from __future__ import annotations

from event_vol_pricing.config import (
    CONFIDENCE_HIGH_MIN,
    CONFIDENCE_MEDIUM_MIN,
    SENTIMENT_CONFIDENCE_FLOOR,
    SENTIMENT_CONFIDENCE_TIERS,
    SEVERITY_CONFIDENCE_POINTS,
    TIMING_CONFIDENCE_TIERS,
)
from event_vol_pricing.structures import Confidence, MarketEvent, SentimentScore


def confidence_score(
    event: MarketEvent,
    sentiment: SentimentScore | None,
    days_to_event: int,
) -> int:
    """Accumulate severity, sentiment-strength and timing points."""
    score = SEVERITY_CONFIDENCE_POINTS.get(event.impact_severity, 0)

    if sentiment is not None:
        strength = abs(sentiment.overall_sentiment_score)
        points = SENTIMENT_CONFIDENCE_FLOOR
        for threshold, tier_points in SENTIMENT_CONFIDENCE_TIERS:
            if strength > threshold:
                points = tier_points
                break
        score += points

    for max_days, tier_points in TIMING_CONFIDENCE_TIERS:
        if days_to_event <= max_days:
            score += tier_points
            break

    return score


def confidence_level(
    event: MarketEvent | None,
    sentiment: SentimentScore | None,
    days_to_event: int,
) -> Confidence:
    if event is None:
        return "low"
    score = confidence_score(event, sentiment, days_to_event)
    if score >= CONFIDENCE_HIGH_MIN:
        return "high"
    if score >= CONFIDENCE_MEDIUM_MIN:
        return "medium"
    return "low"
