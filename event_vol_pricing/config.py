"""Configuration constants for the event-adjusted pricing engine."""

from __future__ import annotations

TICKER: str = "SPY"

# Contract defaults for the CLI
DEFAULT_DAYS_TO_EXPIRY: int = 30
DEFAULT_BASE_IV: float = 0.25

# Risk-free rate
RISK_FREE_RATE: float = 0.05

# Dividend yield
DIVIDEND_YIELD: float = 0.0

DAYS_PER_YEAR: int = 365
SECONDS_PER_DAY: float = 86_400.0

# ── Event lookup windows ───────────────────────────────────────────────────
EVENT_WINDOW_DAYS: int = 30       # upcoming events read per pricing call
HISTORICAL_WINDOW_DAYS: int = 180  # lookback for the IV-crush query
NO_EVENT_DAYS: int = 999          # days_to_event sentinel: no relevant event

# ── Volatility adjustment ──────────────────────────────────────────────────
# Event path is gated at this horizon before any table lookup.
EVENT_IV_HORIZON_DAYS: int = 30

# (days threshold, IV multiplier), ascending. Smallest threshold >= days wins.
PRE_EVENT_IV_MULTIPLIERS: tuple[tuple[int, float], ...] = (
    (1, 1.5),
    (2, 1.4),
    (3, 1.35),
    (4, 1.3),
    (5, 1.25),
    (6, 1.2),
    (7, 1.15),
    (14, 1.1),
    (21, 1.05),
    (30, 1.02),
)
# Threshold used when days_to_event exceeds every key.
PRE_EVENT_FALLBACK_DAYS: int = 30

EVENT_TYPE_IV_MULTIPLIERS: dict[str, float] = {
    "earnings": 1.0,
    "fda_approval": 1.3,
    "merger": 1.2,
    "product_launch": 0.8,
    "regulatory": 1.1,
    "economic_data": 0.7,
    "other": 0.5,
}
DEFAULT_EVENT_TYPE_IV_MULTIPLIER: float = 0.5

SEVERITY_IV_MULTIPLIERS: dict[str, float] = {
    "critical": 1.3,
    "high": 1.2,
    "medium": 1.1,
    "low": 1.0,
}

SENTIMENT_SCORE_IV_WEIGHT: float = 0.15   # per 100 points of |score|
SENTIMENT_MOMENTUM_IV_WEIGHT: float = 0.1  # per 50 points of |momentum|
SENTIMENT_SCORE_SCALE: float = 100.0
SENTIMENT_MOMENTUM_SCALE: float = 50.0

# Hard clamp: final IV never exceeds base IV times this.
IV_CAP_MULTIPLE: float = 2.5

# ── Post-event IV crush ────────────────────────────────────────────────────
POST_EVENT_IV_CRUSH: float = 0.4
SURPRISE_CRUSH_WEIGHT: float = 0.1  # extra crush per 100% surprise

# ── Scenario range ─────────────────────────────────────────────────────────
BASE_RANGE_FACTOR: float = 0.10
SEVERITY_RANGE_FACTORS: dict[str, float] = {
    "critical": 0.25,
    "high": 0.20,
    "medium": 0.15,
}
SENTIMENT_RANGE_SCALE: float = 200.0

# ── Entry price ────────────────────────────────────────────────────────────
NO_CATALYST_ENTRY_FACTOR: float = 0.95
ENTRY_DISCOUNT_BASE: float = 0.7
ENTRY_DISCOUNT_BULLISH: float = 0.85
ENTRY_DISCOUNT_BEARISH: float = 0.6
ENTRY_SENTIMENT_THRESHOLD: float = 30.0
ENTRY_IMMINENT_DAYS: int = 3
ENTRY_IMMINENT_FACTOR: float = 0.9

# ── Confidence ─────────────────────────────────────────────────────────────
SEVERITY_CONFIDENCE_POINTS: dict[str, int] = {
    "critical": 30,
    "high": 30,
    "medium": 20,
}
# (strictly-greater-than |score| threshold, points), checked in order.
SENTIMENT_CONFIDENCE_TIERS: tuple[tuple[float, int], ...] = (
    (50.0, 30),
    (25.0, 20),
)
SENTIMENT_CONFIDENCE_FLOOR: int = 10
# (days_to_event <= threshold, points), checked in order.
TIMING_CONFIDENCE_TIERS: tuple[tuple[int, int], ...] = (
    (7, 25),
    (14, 15),
    (21, 10),
)
CONFIDENCE_HIGH_MIN: int = 70
CONFIDENCE_MEDIUM_MIN: int = 40

# ── Recommendation ladder ──────────────────────────────────────────────────
NARRATIVE_URGENT_DAYS: int = 3
NARRATIVE_NEAR_DAYS: int = 7
NARRATIVE_FAIR_DAYS: int = 14
NARRATIVE_SENTIMENT_THRESHOLD: float = 40.0
NARRATIVE_RICH_PREMIUM_PCT: float = 20.0

# ── Earnings surprise → severity ───────────────────────────────────────────
# (strictly-greater-than |surprise %| threshold, severity), checked in order.
SURPRISE_SEVERITY_TIERS: tuple[tuple[float, str], ...] = (
    (20.0, "critical"),
    (10.0, "high"),
    (5.0, "medium"),
)
DEFAULT_SURPRISE_SEVERITY: str = "low"
UNKNOWN_SURPRISE_SEVERITY: str = "medium"

# Earnings rows requested from yfinance per lookup.
EARNINGS_DATES_LIMIT: int = 12
