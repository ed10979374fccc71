"""Entry point for rehearsing a single order against live market data."""

from __future__ import annotations

import argparse
from decimal import Decimal
from pathlib import Path
import signal
import sys
import time
from typing import Callable, Optional, Sequence

from paper_exchange.config.constants import DEFAULT_POLL_SECONDS
from paper_exchange.config.settings import AdapterConfig
from paper_exchange.errors import ConfigurationError, PaperExchangeError
from paper_exchange.execution.paper_broker import PaperBroker
from paper_exchange.logging.metrics import summarize_session

running = True


def shutdown_handler(sig, frame):
    global running
    print("\nGraceful shutdown initiated...")
    running = False


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Place one paper order and wait for it to fill.")
    parser.add_argument(
        "--config",
        type=Path,
        default=Path(__file__).parent / "config" / "settings.yaml",
        help="Adapter YAML config (default: bundled settings.yaml)",
    )
    parser.add_argument("--market", required=True, help="Market id, e.g. BTCUSDT")
    parser.add_argument("--side", required=True, choices=["BUY", "SELL"], type=str.upper)
    parser.add_argument("--quantity", required=True, type=Decimal)
    parser.add_argument("--price", required=True, type=Decimal)
    parser.add_argument("--poll-seconds", type=float, default=DEFAULT_POLL_SECONDS)
    parser.add_argument("--max-polls", type=int, default=0, help="Stop after N polls (0 = until filled)")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None, sleep: Callable[[float], None] = time.sleep) -> int:
    global running
    running = True
    args = parse_args(argv)
    previous = {sig: signal.signal(sig, shutdown_handler) for sig in (signal.SIGINT, signal.SIGTERM)}
    try:
        return run(args, sleep)
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler)


def run(args: argparse.Namespace, sleep: Callable[[float], None] = time.sleep) -> int:
    """Place the order, poll until filled or stopped, then print the session summary."""
    try:
        config = AdapterConfig.from_yaml(args.config)
        broker = PaperBroker.from_config(config)
    except ConfigurationError as e:
        print(f"Configuration error: {e}")
        return 2

    print(f"{broker.impl_name} started. Press CTRL+C to stop.")
    try:
        order_id = broker.place_order(args.market, args.side, args.quantity, args.price)
    except PaperExchangeError as e:
        if not broker.state.is_open:
            print(f"Order rejected: {e}")
            return 1
        # Stored, but the post-placement fill check failed.
        order_id = broker.state.open_order.order_id
        print(f"Runtime error: {e}")
    print(f"Placed {args.side} {args.quantity} @ {args.price}: {order_id}")

    polls = 0
    while running and broker.state.is_open:
        if args.max_polls and polls >= args.max_polls:
            break
        sleep(args.poll_seconds)
        polls += 1
        try:
            broker.get_open_orders(args.market)
        except PaperExchangeError as e:
            print(f"Runtime error: {e}")

    if broker.state.is_open:
        try:
            broker.cancel_order(order_id, args.market)
            print(f"Order {order_id} not filled, canceled.")
        except PaperExchangeError as e:
            print(f"Failed to cancel {order_id}: {e}")

    fills = broker.fill_history
    try:
        mark_price = broker.get_latest_market_price(args.market)
    except PaperExchangeError as e:
        print(f"Using order price as mark, latest price unavailable: {e}")
        mark_price = fills[-1].price if fills else args.price

    summary = summarize_session(config.simulation, broker.state.ledger, mark_price, fills)
    print("=== SESSION SUMMARY ===")
    for k, v in summary.items():
        print(f"{k}: {v}")
    print("Paper session stopped cleanly.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
