"""Owned simulation state: the balance ledger plus the single open order slot."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from paper_exchange.accounting.balance import BalanceLedger
from paper_exchange.config.settings import SimulationConfig
from paper_exchange.execution.order import Fill, SimulatedOrder


@dataclass
class SimulationState:
    """Mutable state of one paper broker; the slot holds zero or one order."""

    ledger: BalanceLedger
    open_order: Optional[SimulatedOrder] = None
    fills: List[Fill] = field(default_factory=list)

    @classmethod
    def from_config(cls, simulation: SimulationConfig) -> "SimulationState":
        return cls(
            ledger=BalanceLedger(
                base_currency=simulation.base_currency,
                counter_currency=simulation.counter_currency,
                base_balance=simulation.base_starting_balance,
                counter_balance=simulation.counter_starting_balance,
            )
        )

    @property
    def is_open(self) -> bool:
        return self.open_order is not None
