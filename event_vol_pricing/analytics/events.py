"""Event timing, selection and classification."""

from __future__ import annotations

import datetime as dt
import logging
import math
from typing import Iterable

from event_vol_pricing.config import (
    DAYS_PER_YEAR,
    DEFAULT_SURPRISE_SEVERITY,
    SECONDS_PER_DAY,
    SURPRISE_SEVERITY_TIERS,
    UNKNOWN_SURPRISE_SEVERITY,
)
from event_vol_pricing.structures import MarketEvent


LOGGER = logging.getLogger(__name__)


def to_naive_utc(value: dt.datetime | dt.date) -> dt.datetime:
    """Normalise a date or datetime to a naive UTC datetime."""
    if not isinstance(value, dt.datetime):
        return dt.datetime(value.year, value.month, value.day)
    if value.tzinfo is not None:
        return value.astimezone(dt.timezone.utc).replace(tzinfo=None)
    return value


def days_between(start: dt.datetime | dt.date, end: dt.datetime | dt.date) -> float:
    """Return fractional days from ``start`` to ``end`` (negative if end is earlier)."""
    delta = to_naive_utc(end) - to_naive_utc(start)
    return delta.total_seconds() / SECONDS_PER_DAY


def days_until_event(
    event_date: dt.datetime | dt.date,
    now: dt.datetime | dt.date,
) -> int:
    """Return whole days until ``event_date``, rounded up."""
    return math.ceil(days_between(now, event_date))


def select_nearest_event(
    events: Iterable[MarketEvent],
    time_to_expiry_years: float,
    now: dt.datetime,
) -> MarketEvent | None:
    """Pick the nearest event that falls on or before option expiry.

    Ties on ``days_until_event`` keep the input order.
    """
    # whole calendar days to expiry
    horizon_days = math.floor(time_to_expiry_years * DAYS_PER_YEAR + 1e-9)
    cutoff = to_naive_utc(now) + dt.timedelta(days=horizon_days)
    relevant = [
        event for event in events if to_naive_utc(event.event_date) <= cutoff
    ]
    if not relevant:
        return None
    ordered = sorted(
        relevant, key=lambda event: days_until_event(event.event_date, now)
    )
    nearest = ordered[0]
    LOGGER.debug(
        "Nearest event for %s: %s on %s (%d candidates)",
        nearest.ticker,
        nearest.event_type,
        nearest.event_date,
        len(relevant),
    )
    return nearest


def severity_from_surprise(surprise: float | None) -> str:
    """Classify an earnings surprise (signed percent) into an impact severity."""
    if surprise is None or math.isnan(surprise):
        return UNKNOWN_SURPRISE_SEVERITY
    magnitude = abs(surprise)
    for threshold, severity in SURPRISE_SEVERITY_TIERS:
        if magnitude > threshold:
            return severity
    return DEFAULT_SURPRISE_SEVERITY


def filter_upcoming(
    events: Iterable[MarketEvent],
    now: dt.datetime,
    days_ahead: int,
) -> list[MarketEvent]:
    """Return future events within ``days_ahead`` of ``now``, soonest first."""
    start = to_naive_utc(now)
    end = start + dt.timedelta(days=days_ahead)
    upcoming = [
        event
        for event in events
        if event.is_future_event
        and start <= to_naive_utc(event.event_date) <= end
    ]
    return sorted(upcoming, key=lambda event: to_naive_utc(event.event_date))


def filter_historical(
    events: Iterable[MarketEvent],
    now: dt.datetime,
    days_back: int,
) -> list[MarketEvent]:
    """Return realised events within ``days_back`` of ``now``, most recent first."""
    end = to_naive_utc(now)
    start = end - dt.timedelta(days=days_back)
    past = [
        event
        for event in events
        if not event.is_future_event
        and start <= to_naive_utc(event.event_date) <= end
    ]
    return sorted(
        past, key=lambda event: to_naive_utc(event.event_date), reverse=True
    )
