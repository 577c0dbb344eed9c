"""Event and sentiment sources backed by CSV files and yfinance."""

from __future__ import annotations

import datetime as dt
import logging
from pathlib import Path
from typing import Callable

import pandas as pd
import yfinance as yf

from event_vol_pricing.analytics.events import (
    filter_historical,
    filter_upcoming,
    severity_from_surprise,
    to_naive_utc,
)
from event_vol_pricing.config import EARNINGS_DATES_LIMIT
from event_vol_pricing.structures import MarketEvent, SentimentScore


LOGGER = logging.getLogger(__name__)

REQUIRED_EVENT_COLUMNS = ["ticker", "event_type", "event_date"]


def _utc_now() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


def _optional_float(value: object) -> float | None:
    if value is None or pd.isna(value):
        return None
    return float(value)


def _optional_str(value: object) -> str | None:
    if value is None or pd.isna(value):
        return None
    return str(value)


def get_spot_price(ticker: str) -> float:
    """Fetch the latest close price for a ticker."""
    history = yf.Ticker(ticker).history(period="5d")
    if history.empty:
        raise ValueError(f"No price history returned for {ticker}.")
    return float(history["Close"].iloc[-1])


def load_events_csv(path: Path, now: dt.datetime | None = None) -> list[MarketEvent]:
    """Read market events from a CSV file.

    Missing ``impact_severity`` is derived from ``surprise_factor``; missing
    ``is_future_event`` is derived from ``event_date`` relative to ``now``.
    """
    frame = pd.read_csv(path)
    missing = [col for col in REQUIRED_EVENT_COLUMNS if col not in frame.columns]
    if missing:
        raise ValueError(f"Missing event fields in {path}: {missing}")

    reference = to_naive_utc(now or _utc_now())
    dates = pd.to_datetime(frame["event_date"], utc=True).dt.tz_localize(None)
    events: list[MarketEvent] = []
    for idx, row in frame.iterrows():
        event_date = dates.loc[idx].to_pydatetime()
        surprise = _optional_float(row.get("surprise_factor"))
        severity = _optional_str(row.get("impact_severity")) or severity_from_surprise(
            surprise
        )
        is_future = row.get("is_future_event")
        if is_future is None or pd.isna(is_future):
            is_future = event_date > reference
        events.append(
            MarketEvent(
                ticker=str(row["ticker"]).upper(),
                event_type=str(row["event_type"]),
                event_date=event_date,
                impact_severity=severity,
                surprise_factor=surprise,
                is_future_event=bool(is_future),
                event_title=_optional_str(row.get("event_title")),
                source=_optional_str(row.get("source")) or "csv",
            )
        )
    LOGGER.info("Loaded %d events from %s", len(events), path)
    return events


class CsvEventSource:
    """Event collaborator over a CSV file, re-read on each lookup."""

    def __init__(
        self,
        path: Path,
        clock: Callable[[], dt.datetime] = _utc_now,
    ) -> None:
        self.path = path
        self.clock = clock

    def _events(self, ticker: str, now: dt.datetime) -> list[MarketEvent]:
        return [
            event
            for event in load_events_csv(self.path, now)
            if event.ticker == ticker.upper()
        ]

    def get_upcoming_events(self, ticker: str, days_ahead: int) -> list[MarketEvent]:
        now = self.clock()
        return filter_upcoming(self._events(ticker, now), now, days_ahead)

    def get_historical_events(self, ticker: str, days_back: int) -> list[MarketEvent]:
        now = self.clock()
        return filter_historical(self._events(ticker, now), now, days_back)


def earnings_events_from_frame(
    ticker: str,
    earnings: pd.DataFrame,
    now: dt.datetime,
) -> list[MarketEvent]:
    """Convert a yfinance earnings-dates frame into earnings events."""
    reference = to_naive_utc(now)
    events: list[MarketEvent] = []
    for stamp, row in earnings.iterrows():
        if not isinstance(stamp, pd.Timestamp):
            continue
        event_date = to_naive_utc(stamp.to_pydatetime())
        surprise = _optional_float(row.get("Surprise(%)"))
        events.append(
            MarketEvent(
                ticker=ticker.upper(),
                event_type="earnings",
                event_date=event_date,
                impact_severity=severity_from_surprise(surprise),
                surprise_factor=surprise,
                is_future_event=event_date > reference,
                event_title=f"{ticker.upper()} Earnings",
                source="yfinance",
            )
        )
    return events


class YFinanceEventSource:
    """Earnings-calendar collaborator using yfinance."""

    def __init__(
        self,
        limit: int = EARNINGS_DATES_LIMIT,
        clock: Callable[[], dt.datetime] = _utc_now,
    ) -> None:
        self.limit = limit
        self.clock = clock

    def _earnings_events(self, ticker: str, now: dt.datetime) -> list[MarketEvent]:
        try:
            earnings = yf.Ticker(ticker).get_earnings_dates(limit=self.limit)
        except Exception as exc:
            LOGGER.warning("Earnings dates fetch failed for %s: %s", ticker, exc)
            return []
        if earnings is None or earnings.empty:
            return []
        return earnings_events_from_frame(ticker, earnings, now)

    def get_upcoming_events(self, ticker: str, days_ahead: int) -> list[MarketEvent]:
        now = self.clock()
        return filter_upcoming(self._earnings_events(ticker, now), now, days_ahead)

    def get_historical_events(self, ticker: str, days_back: int) -> list[MarketEvent]:
        now = self.clock()
        return filter_historical(self._earnings_events(ticker, now), now, days_back)


class StaticSentimentSource:
    """Sentiment collaborator returning a fixed score (or None) for any ticker."""

    def __init__(self, score: SentimentScore | None) -> None:
        self.score = score

    def get_sentiment_score(self, ticker: str) -> SentimentScore | None:
        return self.score


class StaticEventSource:
    """Event collaborator over an in-memory list of events."""

    def __init__(
        self,
        events: list[MarketEvent],
        clock: Callable[[], dt.datetime] = _utc_now,
    ) -> None:
        self.events = events
        self.clock = clock

    def _for(self, ticker: str) -> list[MarketEvent]:
        return [event for event in self.events if event.ticker == ticker.upper()]

    def get_upcoming_events(self, ticker: str, days_ahead: int) -> list[MarketEvent]:
        now = self.clock()
        return filter_upcoming(self._for(ticker), now, days_ahead)

    def get_historical_events(self, ticker: str, days_back: int) -> list[MarketEvent]:
        now = self.clock()
        return filter_historical(self._for(ticker), now, days_back)
