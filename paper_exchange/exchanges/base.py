"""Capability contract for exchanges that supply live market data."""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Mapping, Protocol

from paper_exchange.data.models import MarketOrderBook, Ticker


class ExchangeAdapter(Protocol):
    """Market data and fee schedule source the paper broker delegates to.

    Implementations may raise ``NetworkError`` when the exchange cannot be
    reached and ``TradingApiError`` subclasses for exchange-side errors.
    Both are passed through the paper broker unchanged.
    """

    impl_name: str

    def init(self, config: Mapping[str, Any]) -> None:
        ...

    def get_ticker(self, market_id: str) -> Ticker:
        ...

    def get_market_order_book(self, market_id: str) -> MarketOrderBook:
        ...

    def get_latest_market_price(self, market_id: str) -> Decimal:
        ...

    def get_buy_fee_percentage(self, market_id: str) -> Decimal:
        ...

    def get_sell_fee_percentage(self, market_id: str) -> Decimal:
        ...
