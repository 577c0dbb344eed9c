"""Event-adjusted pricing pipeline."""

from __future__ import annotations

import datetime as dt
import logging
from typing import Any, Callable, Protocol

from event_vol_pricing.analytics.bsm import price_option
from event_vol_pricing.analytics.events import (
    days_between,
    days_until_event,
    select_nearest_event,
)
from event_vol_pricing.analytics.volatility import (
    adjust_volatility,
    post_event_iv_crush,
)
from event_vol_pricing.config import (
    DAYS_PER_YEAR,
    EVENT_WINDOW_DAYS,
    HISTORICAL_WINDOW_DAYS,
    NO_EVENT_DAYS,
    RISK_FREE_RATE,
)
from event_vol_pricing.pricing.confidence import confidence_level
from event_vol_pricing.pricing.entry import recommended_entry_price
from event_vol_pricing.pricing.narrator import recommend
from event_vol_pricing.pricing.scenarios import price_range
from event_vol_pricing.structures import (
    EventAdjustedPricing,
    EventImpact,
    MarketEvent,
    PricingRequest,
    SentimentScore,
)


LOGGER = logging.getLogger(__name__)


class Pricer(Protocol):
    def __call__(
        self,
        spot: float,
        strike: float,
        time_to_expiry: float,
        risk_free_rate: float,
        volatility: float,
        is_call: bool,
    ) -> dict[str, Any]: ...


class EventSource(Protocol):
    def get_upcoming_events(self, ticker: str, days_ahead: int) -> list[MarketEvent]: ...

    def get_historical_events(self, ticker: str, days_back: int) -> list[MarketEvent]: ...


class SentimentSource(Protocol):
    def get_sentiment_score(self, ticker: str) -> SentimentScore | None: ...


def _utc_now() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


class EventAdjustedPricer:
    """Re-price options for upcoming events and market sentiment.

    Holds only its collaborators; every call is independent, so one
    instance can serve concurrent callers.
    """

    def __init__(
        self,
        pricer: Pricer = price_option,
        event_source: EventSource | None = None,
        sentiment_source: SentimentSource | None = None,
        clock: Callable[[], dt.datetime] = _utc_now,
    ) -> None:
        self.pricer = pricer
        self.event_source = event_source
        self.sentiment_source = sentiment_source
        self.clock = clock

    def price_with_events(self, request: PricingRequest) -> EventAdjustedPricing:
        """Price ``request`` at base IV, event-adjusted IV and final IV."""
        now = self.clock()
        events = self._upcoming_events(request.ticker)
        sentiment = self._sentiment(request.ticker)

        event = select_nearest_event(events, request.time_to_expiry_years, now)
        days_to_event = (
            days_until_event(event.event_date, now) if event else NO_EVENT_DAYS
        )

        adjustment = adjust_volatility(
            request.base_volatility, event, days_to_event, sentiment
        )

        base_price = self._price(request, request.base_volatility)
        event_price = self._price(request, adjustment.event_adjusted_iv)
        sentiment_price = self._price(request, adjustment.final_iv)

        result = EventAdjustedPricing(
            base_price=base_price,
            event_adjusted_price=event_price,
            sentiment_adjusted_price=sentiment_price,
            recommended_entry_price=recommended_entry_price(
                base_price, sentiment_price, event, sentiment, days_to_event
            ),
            adjusted_volatility=adjustment.final_iv,
            base_volatility=request.base_volatility,
            event_premium=event_price - base_price,
            sentiment_impact=sentiment_price - event_price,
            days_to_event=days_to_event,
            confidence=confidence_level(event, sentiment, days_to_event),
            recommendation=recommend(
                base_price,
                sentiment_price,
                event,
                sentiment,
                days_to_event,
                request.is_call,
            ),
            price_range=price_range(sentiment_price, event, sentiment),
            event=event,
            volatility_adjustment=adjustment,
        )
        LOGGER.info(
            "%s %s K=%.2f: base=%.4f adjusted=%.4f iv %.4f->%.4f "
            "days_to_event=%d confidence=%s",
            request.ticker,
            request.option_type,
            request.strike_price,
            base_price,
            sentiment_price,
            request.base_volatility,
            adjustment.final_iv,
            days_to_event,
            result.confidence,
        )
        return result

    def event_impact_on_option(
        self,
        ticker: str,
        strike: float,
        expiration: dt.datetime | dt.date,
        is_call: bool,
        spot: float,
        current_iv: float,
    ) -> EventImpact | None:
        """Reprice an option across the most recent earnings IV crush.

        Returns None when no earnings event was realised in the lookback
        window or the event source is unavailable.
        """
        for name, value in (("strike", strike), ("spot", spot), ("current_iv", current_iv)):
            if value <= 0:
                raise ValueError(f"{name} must be positive, got {value!r}")

        historical = self._historical_events(ticker)
        recent = next(
            (event for event in historical if event.event_type == "earnings"),
            None,
        )
        if recent is None:
            LOGGER.info("No realised earnings event for %s", ticker)
            return None

        days_to_expiry = max(1.0, days_between(recent.event_date, expiration))
        t = days_to_expiry / DAYS_PER_YEAR
        post_iv = post_event_iv_crush(current_iv, recent)

        pre_price = float(
            self.pricer(spot, strike, t, RISK_FREE_RATE, current_iv, is_call)["price"]
        )
        post_price = float(
            self.pricer(spot, strike, t, RISK_FREE_RATE, post_iv, is_call)["price"]
        )
        change = post_price - pre_price
        impact_pct = change / pre_price * 100.0 if pre_price != 0 else 0.0
        return EventImpact(
            pre_event_price=pre_price,
            post_event_price=post_price,
            iv_crush_impact=impact_pct,
            price_change=change,
            event_date=recent.event_date,
            post_event_iv=post_iv,
        )

    def _price(self, request: PricingRequest, volatility: float) -> float:
        result = self.pricer(
            request.spot_price,
            request.strike_price,
            request.time_to_expiry_years,
            request.risk_free_rate,
            volatility,
            request.is_call,
        )
        return float(result["price"])

    def _upcoming_events(self, ticker: str) -> list[MarketEvent]:
        if self.event_source is None:
            return []
        try:
            return list(self.event_source.get_upcoming_events(ticker, EVENT_WINDOW_DAYS))
        except Exception as exc:
            LOGGER.warning("Upcoming events unavailable for %s: %s", ticker, exc)
            return []

    def _historical_events(self, ticker: str) -> list[MarketEvent]:
        if self.event_source is None:
            return []
        try:
            return list(
                self.event_source.get_historical_events(ticker, HISTORICAL_WINDOW_DAYS)
            )
        except Exception as exc:
            LOGGER.warning("Historical events unavailable for %s: %s", ticker, exc)
            return []

    def _sentiment(self, ticker: str) -> SentimentScore | None:
        if self.sentiment_source is None:
            return None
        try:
            return self.sentiment_source.get_sentiment_score(ticker)
        except Exception as exc:
            LOGGER.warning("Sentiment unavailable for %s: %s", ticker, exc)
            return None


def price_with_events(
    request: PricingRequest,
    event_source: EventSource | None = None,
    sentiment_source: SentimentSource | None = None,
    pricer: Pricer = price_option,
    now: dt.datetime | None = None,
) -> EventAdjustedPricing:
    """One-shot helper around :class:`EventAdjustedPricer`."""
    clock = (lambda: now) if now is not None else _utc_now
    engine = EventAdjustedPricer(
        pricer=pricer,
        event_source=event_source,
        sentiment_source=sentiment_source,
        clock=clock,
    )
    return engine.price_with_events(request)
