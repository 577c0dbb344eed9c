"""Define pricing inputs, market context records and pricing results."""

from __future__ import annotations

import datetime as dt
import math
from dataclasses import dataclass, field
from typing import Any, Literal

Severity = Literal["low", "medium", "high", "critical"]
Confidence = Literal["low", "medium", "high"]

SEVERITIES: tuple[str, ...] = ("low", "medium", "high", "critical")


def _require_positive(name: str, value: float) -> None:
    if not math.isfinite(value) or value <= 0:
        raise ValueError(f"{name} must be a positive finite number, got {value!r}")


@dataclass(frozen=True)
class PricingRequest:
    """Contract parameters for a single event-adjusted pricing call."""

    ticker: str
    spot_price: float
    strike_price: float
    time_to_expiry_years: float
    risk_free_rate: float
    base_volatility: float
    is_call: bool = True

    def __post_init__(self) -> None:
        if not self.ticker:
            raise ValueError("ticker must be a non-empty string")
        _require_positive("spot_price", self.spot_price)
        _require_positive("strike_price", self.strike_price)
        _require_positive("time_to_expiry_years", self.time_to_expiry_years)
        _require_positive("base_volatility", self.base_volatility)
        if not math.isfinite(self.risk_free_rate):
            raise ValueError("risk_free_rate must be finite")

    @property
    def option_type(self) -> str:
        return "call" if self.is_call else "put"


@dataclass(frozen=True)
class MarketEvent:
    """Scheduled or realised market event for a ticker."""

    ticker: str
    event_type: str  # earnings, fda_approval, merger, ... (open set)
    event_date: dt.datetime | dt.date
    impact_severity: Severity
    surprise_factor: float | None = None  # signed percent
    is_future_event: bool = True
    event_title: str | None = None
    source: str | None = None

    def __post_init__(self) -> None:
        if self.impact_severity not in SEVERITIES:
            raise ValueError(
                f"impact_severity must be one of {SEVERITIES}, "
                f"got {self.impact_severity!r}"
            )
        if self.surprise_factor is not None and not math.isfinite(
            self.surprise_factor
        ):
            raise ValueError(
                f"surprise_factor must be finite, got {self.surprise_factor!r}"
            )

    def to_dict(self) -> dict[str, Any]:
        """Convert event to dictionary for report serialization."""
        return {
            "ticker": self.ticker,
            "event_type": self.event_type,
            "event_date": self.event_date.isoformat(),
            "impact_severity": self.impact_severity,
            "surprise_factor": self.surprise_factor,
            "is_future_event": self.is_future_event,
            "event_title": self.event_title,
            "source": self.source,
        }


@dataclass(frozen=True)
class SentimentScore:
    """Aggregated sentiment for a ticker."""

    overall_sentiment_score: float  # -100 .. 100
    sentiment_momentum: float = 0.0
    sentiment_category: str | None = None

    def __post_init__(self) -> None:
        if not -100.0 <= self.overall_sentiment_score <= 100.0:
            raise ValueError(
                "overall_sentiment_score must lie in [-100, 100], "
                f"got {self.overall_sentiment_score!r}"
            )
        if self.sentiment_momentum is None:
            object.__setattr__(self, "sentiment_momentum", 0.0)
        elif not math.isfinite(self.sentiment_momentum):
            raise ValueError(
                f"sentiment_momentum must be finite, got {self.sentiment_momentum!r}"
            )


@dataclass(frozen=True)
class VolatilityAdjustment:
    base_iv: float
    event_adjusted_iv: float
    pre_event_multiplier: float
    sentiment_multiplier: float
    final_iv: float

    def to_dict(self) -> dict[str, float]:
        return {
            "base_iv": self.base_iv,
            "event_adjusted_iv": self.event_adjusted_iv,
            "pre_event_multiplier": self.pre_event_multiplier,
            "sentiment_multiplier": self.sentiment_multiplier,
            "final_iv": self.final_iv,
        }


@dataclass(frozen=True)
class PriceRange:
    optimistic: float
    realistic: float
    pessimistic: float

    def to_dict(self) -> dict[str, float]:
        return {
            "optimistic": self.optimistic,
            "realistic": self.realistic,
            "pessimistic": self.pessimistic,
        }


@dataclass(frozen=True)
class EventAdjustedPricing:
    """Result of one event- and sentiment-adjusted pricing call."""

    base_price: float
    event_adjusted_price: float
    sentiment_adjusted_price: float
    recommended_entry_price: float
    adjusted_volatility: float
    base_volatility: float
    event_premium: float
    sentiment_impact: float
    days_to_event: int
    confidence: Confidence
    recommendation: str
    price_range: PriceRange

    # Diagnostics
    event: MarketEvent | None = field(default=None, compare=False)
    volatility_adjustment: VolatilityAdjustment | None = field(
        default=None, compare=False
    )

    def to_dict(self) -> dict[str, Any]:
        """Convert result to a JSON-serialisable dictionary."""
        return {
            "base_price": self.base_price,
            "event_adjusted_price": self.event_adjusted_price,
            "sentiment_adjusted_price": self.sentiment_adjusted_price,
            "recommended_entry_price": self.recommended_entry_price,
            "adjusted_volatility": self.adjusted_volatility,
            "base_volatility": self.base_volatility,
            "event_premium": self.event_premium,
            "sentiment_impact": self.sentiment_impact,
            "days_to_event": self.days_to_event,
            "confidence": self.confidence,
            "recommendation": self.recommendation,
            "price_range": self.price_range.to_dict(),
            "event": self.event.to_dict() if self.event else None,
            "volatility_adjustment": (
                self.volatility_adjustment.to_dict()
                if self.volatility_adjustment
                else None
            ),
        }


@dataclass(frozen=True)
class EventImpact:
    """Retrospective repricing of an option across a realised event."""

    pre_event_price: float
    post_event_price: float
    iv_crush_impact: float  # percent change in option value
    price_change: float
    event_date: dt.datetime | dt.date | None = None
    post_event_iv: float | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "pre_event_price": self.pre_event_price,
            "post_event_price": self.post_event_price,
            "iv_crush_impact": self.iv_crush_impact,
            "price_change": self.price_change,
            "event_date": self.event_date.isoformat() if self.event_date else None,
            "post_event_iv": self.post_event_iv,
        }
