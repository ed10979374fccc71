"""
Tests for the session summary.
"""

from decimal import Decimal

from paper_exchange.config.settings import SimulationConfig
from paper_exchange.execution.order import OrderType
from paper_exchange.logging.metrics import summarize_session


def test_summary_after_buy_fill(broker, fake_exchange):
    """
    Scenario: 1.0 BTC / 10000 USDT, BUY 0.1 filled at 29000 with 0.1% fee.

    Expected:
      - base +0.1, counter -2902.9
      - equity at 29000 changes only by the 2.9 fee
    """
    fake_exchange.ask = Decimal("29000")
    broker.place_order("BTCUSDT", OrderType.BUY, Decimal("0.1"), Decimal("30000"))
    starting = SimulationConfig(
        base_currency="BTC",
        counter_currency="USDT",
        base_starting_balance=Decimal("1.0"),
        counter_starting_balance=Decimal("10000"),
    )

    summary = summarize_session(starting, broker.state.ledger, Decimal("29000"), broker.fill_history)

    assert summary["base_delta"] == Decimal("0.1")
    assert summary["counter_delta"] == Decimal("-2902.9")
    assert summary["fills"] == 1
    assert summary["total_fees"] == Decimal("2.9")
    assert summary["equity_change"] == Decimal("-2.9")
    assert summary["base_currency"] == "BTC"


def test_summary_without_fills(state):
    starting = SimulationConfig("BTC", "USDT", Decimal("1.0"), Decimal("10000"))

    summary = summarize_session(starting, state.ledger, Decimal("50000"), [])

    assert summary["fills"] == 0
    assert summary["total_fees"] == Decimal("0")
    assert summary["equity_change"] == Decimal("0")
