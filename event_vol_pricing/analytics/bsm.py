"""Black-Scholes-Merton pricing used as the default base pricer."""

from __future__ import annotations

import math

from scipy.stats import norm

from event_vol_pricing.config import DIVIDEND_YIELD


def _d1(
    spot: float,
    strike: float,
    t: float,
    r: float,
    q: float,
    vol: float,
) -> float:
    if t <= 0 or vol <= 0:
        return 0.0
    numerator = math.log(spot / strike) + (r - q + 0.5 * vol**2) * t
    return numerator / (vol * math.sqrt(t))


def _d2(d1: float, t: float, vol: float) -> float:
    if t <= 0:
        return 0.0
    return d1 - vol * math.sqrt(t)


def _check_type(option_type: str) -> None:
    if option_type not in ("call", "put"):
        raise ValueError("option_type must be 'call' or 'put'")


def option_price(
    spot: float,
    strike: float,
    t: float,
    r: float,
    q: float,
    vol: float,
    option_type: str,
) -> float:
    """Return BSM option price for call or put."""
    _check_type(option_type)
    if t <= 0 or vol <= 0:
        # Expired or zero-vol: discounted intrinsic on the forward
        forward = spot * math.exp((r - q) * max(t, 0.0))
        discount = math.exp(-r * max(t, 0.0))
        if option_type == "call":
            return discount * max(forward - strike, 0.0)
        return discount * max(strike - forward, 0.0)

    d1 = _d1(spot, strike, t, r, q, vol)
    d2 = _d2(d1, t, vol)
    discounted_spot = math.exp(-q * t) * spot
    discounted_strike = math.exp(-r * t) * strike
    if option_type == "call":
        return discounted_spot * norm.cdf(d1) - discounted_strike * norm.cdf(d2)
    return discounted_strike * norm.cdf(-d2) - discounted_spot * norm.cdf(-d1)


def price_option(
    spot: float,
    strike: float,
    time_to_expiry: float,
    risk_free_rate: float,
    volatility: float,
    is_call: bool,
) -> dict[str, float]:
    """Price an option and return ``{"price": ...}``.

    Matches the pricer contract consumed by
    :class:`event_vol_pricing.engine.EventAdjustedPricer`.
    """
    option_type = "call" if is_call else "put"
    args = (spot, strike, time_to_expiry, risk_free_rate, DIVIDEND_YIELD, volatility)
    return {"price": option_price(*args, option_type)}
