"""CLI entrypoint for event-adjusted option pricing."""

from __future__ import annotations

import argparse
import datetime as dt
import json
import logging
from pathlib import Path

from event_vol_pricing import config
from event_vol_pricing.data.loader import (
    CsvEventSource,
    StaticEventSource,
    StaticSentimentSource,
    YFinanceEventSource,
    get_spot_price,
)
from event_vol_pricing.data.test_data import (
    generate_scenario,
    list_available_scenarios,
)
from event_vol_pricing.engine import EventAdjustedPricer, EventSource
from event_vol_pricing.structures import (
    EventAdjustedPricing,
    EventImpact,
    PricingRequest,
    SentimentScore,
)


LOGGER = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Event-adjusted option pricing")
    parser.add_argument("--ticker", type=str, default=config.TICKER)
    parser.add_argument(
        "--spot",
        type=float,
        default=None,
        help="Spot price (fetched from yfinance when omitted)",
    )
    parser.add_argument(
        "--strike",
        type=float,
        default=None,
        help="Strike price (defaults to spot, i.e. ATM)",
    )
    parser.add_argument(
        "--days-to-expiry",
        type=float,
        default=config.DEFAULT_DAYS_TO_EXPIRY,
        help="Calendar days until option expiry",
    )
    parser.add_argument("--rate", type=float, default=config.RISK_FREE_RATE)
    parser.add_argument(
        "--iv",
        type=float,
        default=config.DEFAULT_BASE_IV,
        help="Base implied volatility as decimal",
    )
    parser.add_argument("--put", action="store_true", help="Price a put")
    events_group = parser.add_mutually_exclusive_group()
    events_group.add_argument(
        "--events-csv",
        type=str,
        default=None,
        help="CSV of market events (ticker,event_type,event_date,...)",
    )
    events_group.add_argument(
        "--live-events",
        action="store_true",
        help="Read the earnings calendar from yfinance",
    )
    events_group.add_argument(
        "--test-data",
        action="store_true",
        help="Use a synthetic event/sentiment scenario",
    )
    parser.add_argument(
        "--test-scenario",
        type=str,
        default="earnings_imminent",
        choices=list_available_scenarios(),
        help="Scenario to use (only with --test-data)",
    )
    parser.add_argument("--sentiment-score", type=float, default=None)
    parser.add_argument("--sentiment-momentum", type=float, default=0.0)
    parser.add_argument(
        "--impact-expiry",
        type=str,
        default=None,
        help="YYYY-MM-DD; also reprice across the last earnings IV crush",
    )
    parser.add_argument("--json", action="store_true", help="Print JSON output")
    return parser


def main(argv: list[str] | None = None) -> None:
    """Run a single event-adjusted pricing call."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(levelname)s: %(message)s",
    )

    now = dt.datetime.now(dt.timezone.utc)
    ticker = args.ticker.upper()
    event_source, sentiment = _build_context(args, ticker, now)
    if args.sentiment_score is not None:
        sentiment = SentimentScore(
            overall_sentiment_score=args.sentiment_score,
            sentiment_momentum=args.sentiment_momentum,
        )

    spot = args.spot if args.spot is not None else get_spot_price(ticker)
    strike = args.strike if args.strike is not None else spot
    request = PricingRequest(
        ticker=ticker,
        spot_price=spot,
        strike_price=strike,
        time_to_expiry_years=args.days_to_expiry / config.DAYS_PER_YEAR,
        risk_free_rate=args.rate,
        base_volatility=args.iv,
        is_call=not args.put,
    )

    engine = EventAdjustedPricer(
        event_source=event_source,
        sentiment_source=StaticSentimentSource(sentiment),
        clock=lambda: now,
    )
    result = engine.price_with_events(request)

    impact = None
    if args.impact_expiry:
        expiration = dt.datetime.strptime(args.impact_expiry, "%Y-%m-%d")
        impact = engine.event_impact_on_option(
            ticker, strike, expiration, request.is_call, spot, args.iv
        )

    if args.json:
        payload = {"pricing": result.to_dict()}
        if args.impact_expiry:
            payload["event_impact"] = impact.to_dict() if impact else None
        print(json.dumps(payload, indent=2))
        return
    _print_console_snapshot(request, result, impact, bool(args.impact_expiry))


def _build_context(
    args: argparse.Namespace,
    ticker: str,
    now: dt.datetime,
) -> tuple[EventSource | None, SentimentScore | None]:
    if args.test_data:
        LOGGER.info("Using synthetic scenario: %s", args.test_scenario)
        scenario = generate_scenario(args.test_scenario, now, ticker=ticker)
        LOGGER.info("%s", scenario["description"])
        return StaticEventSource(scenario["events"], clock=lambda: now), scenario["sentiment"]
    if args.events_csv:
        return CsvEventSource(Path(args.events_csv), clock=lambda: now), None
    if args.live_events:
        return YFinanceEventSource(clock=lambda: now), None
    return None, None


def _print_console_snapshot(
    request: PricingRequest,
    result: EventAdjustedPricing,
    impact: EventImpact | None,
    impact_requested: bool,
) -> None:
    print("\n" + "=" * 60)
    print(
        f"EVENT-ADJUSTED PRICING: {request.ticker} {request.option_type.upper()} "
        f"K={request.strike_price:.2f} S={request.spot_price:.2f}"
    )
    print("=" * 60)
    print(f"Base price:            {result.base_price:.4f}")
    print(f"Event-adjusted price:  {result.event_adjusted_price:.4f}")
    print(f"Sentiment-adjusted:    {result.sentiment_adjusted_price:.4f}")
    print(f"Event premium:         {result.event_premium:.4f}")
    print(f"Sentiment impact:      {result.sentiment_impact:.4f}")
    print(f"Recommended entry:     {result.recommended_entry_price:.4f}")
    print(
        f"Volatility:            {result.base_volatility:.4f} -> "
        f"{result.adjusted_volatility:.4f}"
    )
    if result.event is not None:
        print(
            f"Nearest event:         {result.event.event_type} "
            f"({result.event.impact_severity}) in {result.days_to_event} days"
        )
    else:
        print("Nearest event:         none")
    print(f"Confidence:            {result.confidence}")
    band = result.price_range
    print(
        f"Range:                 {band.pessimistic:.4f} / "
        f"{band.realistic:.4f} / {band.optimistic:.4f}"
    )
    print(f"\n{result.recommendation}")

    if impact_requested:
        print("\n" + "=" * 60)
        print("POST-EVENT IV CRUSH")
        print("=" * 60)
        if impact is None:
            print("No realised earnings event in lookback window.")
        else:
            print(f"Pre-event price:       {impact.pre_event_price:.4f}")
            print(f"Post-event price:      {impact.post_event_price:.4f}")
            print(f"Price change:          {impact.price_change:.4f}")
            print(f"IV crush impact:       {impact.iv_crush_impact:.2f}%")
    print("=" * 60)


if __name__ == "__main__":
    main()
