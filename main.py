#!/usr/bin/env python3
"""
Hyperliquid Dashboard Proxy

Runs the dashboard aggregation once and prints the JSON payload, using the
same handler the serverless endpoint uses.

Usage:
    python main.py                                   # Use config.yaml / env settings
    python main.py --price-strategy all_mids         # Pick a price source
    python main.py --position-source leaderboard --policy degrade
    python main.py --serve                           # Start the Flask dev server
"""
import argparse
import json
import sys

from hlproxy.aggregator import (
    FailurePolicy, PositionSource, PriceStrategy, ProxyHandler, ProxySettings
)
from hlproxy.utils import config, get_logger

logger = get_logger("main")


def run_once(settings: ProxySettings, method: str = "GET") -> int:
    """Run one request through the handler and print the response."""
    logger.info(
        f"Fetching dashboard data: prices={settings.price_strategy.value}, "
        f"positions={settings.position_source.value}, policy={settings.failure_policy.value}"
    )
    result = ProxyHandler(settings).handle(method)

    print(json.dumps(result.body, indent=2) if result.body is not None else "")

    if result.status != 200:
        logger.error(f"Handler returned HTTP {result.status}")
        return 1
    return 0


def main():
    parser = argparse.ArgumentParser(
        description="Hyperliquid dashboard proxy",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )

    parser.add_argument("--price-strategy", choices=[s.value for s in PriceStrategy],
                        help="Upstream price source")
    parser.add_argument("--position-source", choices=[s.value for s in PositionSource],
                        help="Where open positions come from")
    parser.add_argument("--policy", choices=[p.value for p in FailurePolicy],
                        help="Upstream failure policy")
    parser.add_argument("--wallets", nargs="+", help="Wallets to track (overrides config)")
    parser.add_argument("--timeout", type=float, help="Upstream timeout in seconds")
    parser.add_argument("--serve", action="store_true", help="Start the local dev server")
    parser.add_argument("--port", type=int, default=5000, help="Dev server port")

    args = parser.parse_args()

    settings = ProxySettings.from_config(
        config,
        price_strategy=args.price_strategy,
        position_source=args.position_source,
        failure_policy=args.policy,
        tracked_wallets=args.wallets,
        timeout=args.timeout,
    )

    if args.serve:
        from web.app import create_app
        create_app(settings).run(host="0.0.0.0", port=args.port)
        return 0

    return run_once(settings)


if __name__ == "__main__":
    sys.exit(main())
