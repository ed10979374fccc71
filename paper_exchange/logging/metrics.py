"""Session summary helpers."""

from __future__ import annotations

from decimal import Decimal
from typing import Iterable

from paper_exchange.accounting.balance import BalanceLedger
from paper_exchange.config.settings import SimulationConfig
from paper_exchange.execution.order import Fill


def summarize_session(
    starting: SimulationConfig,
    ledger: BalanceLedger,
    mark_price: Decimal,
    fills: Iterable[Fill],
) -> dict[str, Decimal | int | str]:
    """Build a snapshot of how the simulated balances moved over the session."""
    fills = list(fills)
    start_equity = starting.counter_starting_balance + (starting.base_starting_balance * mark_price)
    current_equity = ledger.equity(mark_price)
    return {
        "base_currency": ledger.base_currency,
        "counter_currency": ledger.counter_currency,
        "base_start": starting.base_starting_balance,
        "base_current": ledger.base_balance,
        "base_delta": ledger.base_balance - starting.base_starting_balance,
        "counter_start": starting.counter_starting_balance,
        "counter_current": ledger.counter_balance,
        "counter_delta": ledger.counter_balance - starting.counter_starting_balance,
        "mark_price": mark_price,
        "equity_change": current_equity - start_equity,
        "fills": len(fills),
        "total_fees": sum((f.fee for f in fills), Decimal(0)),
    }
