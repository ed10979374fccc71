"""Market data value types shared by delegates and the simulator."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import List, Optional


@dataclass(frozen=True)
class Ticker:
    """Top-of-book snapshot."""

    bid: Decimal
    ask: Decimal
    last: Optional[Decimal] = None
    ts: Optional[datetime] = None


@dataclass(frozen=True)
class MarketOrder:
    """A single price level in the market order book."""

    side: str
    price: Decimal
    quantity: Decimal

    @property
    def total(self) -> Decimal:
        return self.price * self.quantity


@dataclass(frozen=True)
class MarketOrderBook:
    """Order book with asks ascending and bids descending by price."""

    market_id: str
    sell_orders: List[MarketOrder] = field(default_factory=list)
    buy_orders: List[MarketOrder] = field(default_factory=list)
