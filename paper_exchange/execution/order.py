"""Order models for the paper exchange simulation."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Union
from uuid import uuid4


class OrderType(str, Enum):
    """Side of a simulated order."""

    BUY = "BUY"
    SELL = "SELL"


@dataclass(frozen=True)
class SimulatedOrder:
    """The single resting limit order; filled in full or not at all."""

    order_id: str
    created_at: datetime
    market_id: str
    side: Union[OrderType, str]
    price: Decimal
    original_quantity: Decimal
    total: Decimal

    @property
    def quantity(self) -> Decimal:
        """Remaining quantity, always the original quantity since fills are all-or-nothing."""
        return self.original_quantity


@dataclass(frozen=True)
class Fill:
    """Settlement record of a filled simulated order."""

    order_id: str
    ts: datetime
    market_id: str
    side: OrderType
    price: Decimal
    qty: Decimal
    fee: Decimal
    counter_delta: Decimal
    base_delta: Decimal


def new_order_id(side: OrderType, created_at: datetime) -> str:
    """Unique id embedding side and creation time in milliseconds."""
    millis = int(created_at.timestamp() * 1000)
    return f"PAPER_{side.value}_ORDER_{millis}_{uuid4().hex[:8]}"
