"""Balance ledger for the two simulated currencies."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict


@dataclass(frozen=True)
class BalanceInfo:
    """Snapshot of available and on-hold balances keyed by currency code."""

    available: Dict[str, Decimal]
    on_hold: Dict[str, Decimal] = field(default_factory=dict)


@dataclass
class BalanceLedger:
    """Running base/counter balances; only fill settlement mutates them."""

    base_currency: str
    counter_currency: str
    base_balance: Decimal
    counter_balance: Decimal

    def __post_init__(self) -> None:
        if self.base_currency == self.counter_currency:
            raise ValueError(f"Base and counter currency must differ, both are '{self.base_currency}'")

    def snapshot(self) -> BalanceInfo:
        return BalanceInfo(
            available={
                self.base_currency: self.base_balance,
                self.counter_currency: self.counter_balance,
            }
        )

    def equity(self, mark_price: Decimal) -> Decimal:
        """Total value in the counter currency, base marked at `mark_price`."""
        return self.counter_balance + (self.base_balance * mark_price)
