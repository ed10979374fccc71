"""Live market data from the public Binance.US websocket streams."""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Callable, Mapping, Optional

from websockets.sync.client import connect as ws_connect

from paper_exchange.config.constants import DEFAULT_BOOK_DEPTH, DEFAULT_FEE, DEFAULT_TIMEOUT_SECONDS
from paper_exchange.config.settings import parse_decimal
from paper_exchange.data.market_feed import BinanceUsStreamFeed
from paper_exchange.data.models import MarketOrderBook, Ticker
from paper_exchange.errors import ConfigurationError
from paper_exchange.logging.adapter_log import get_adapter_logger

logger = get_adapter_logger()


class BinanceUsExchangeAdapter:
    """Public-stream Binance.US market data with configured fee percentages.

    Each call opens a short-lived stream connection and reads one message,
    so a call blocks for at most ``timeout_seconds`` on connect plus receive.
    Binance.US does not publish account fees on a public stream, hence the
    ``buy_fee``/``sell_fee`` config items.
    """

    impl_name = "Binance.US public streams (websocket market data)"

    def __init__(self, connect: Callable[..., Any] = ws_connect) -> None:
        self._connect = connect
        self.timeout_seconds = DEFAULT_TIMEOUT_SECONDS
        self.depth = DEFAULT_BOOK_DEPTH
        self.buy_fee = Decimal(DEFAULT_FEE)
        self.sell_fee = Decimal(DEFAULT_FEE)
        self._feeds: dict[str, BinanceUsStreamFeed] = {}

    def init(self, config: Mapping[str, Any]) -> None:
        self.buy_fee = parse_decimal("buy_fee", config.get("buy_fee", DEFAULT_FEE))
        self.sell_fee = parse_decimal("sell_fee", config.get("sell_fee", DEFAULT_FEE))
        try:
            self.timeout_seconds = float(config.get("timeout_seconds", DEFAULT_TIMEOUT_SECONDS))
            self.depth = int(config.get("depth", DEFAULT_BOOK_DEPTH))
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(f"timeout_seconds and depth must be numeric: {exc}") from exc
        if self.timeout_seconds <= 0:
            raise ConfigurationError(f"timeout_seconds must be positive, got {self.timeout_seconds}")
        if self.depth < 1:
            raise ConfigurationError(f"depth must be at least 1, got {self.depth}")
        logger.info(
            "Binance.US delegate ready: timeout=%ss depth=%d buy_fee=%s sell_fee=%s",
            self.timeout_seconds,
            self.depth,
            self.buy_fee,
            self.sell_fee,
        )

    def get_ticker(self, market_id: str) -> Ticker:
        return self._feed(market_id).book_ticker()

    def get_market_order_book(self, market_id: str) -> MarketOrderBook:
        return self._feed(market_id).depth(market_id, self.depth)

    def get_latest_market_price(self, market_id: str) -> Decimal:
        return self._feed(market_id).last_trade_price()

    def get_buy_fee_percentage(self, market_id: str) -> Decimal:
        return self.buy_fee

    def get_sell_fee_percentage(self, market_id: str) -> Decimal:
        return self.sell_fee

    def _feed(self, market_id: str) -> BinanceUsStreamFeed:
        symbol = market_id.replace("/", "").lower()
        feed: Optional[BinanceUsStreamFeed] = self._feeds.get(symbol)
        if feed is None:
            feed = BinanceUsStreamFeed(symbol, timeout_seconds=self.timeout_seconds, connect=self._connect)
            self._feeds[symbol] = feed
        return feed
