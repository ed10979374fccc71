"""Offline exchange backed by the seeded synthetic market feed."""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Mapping, Optional

from paper_exchange.config.constants import (
    DEFAULT_BOOK_DEPTH,
    DEFAULT_FEE,
    DEFAULT_MARKET_ID,
    DEFAULT_SEED,
    DEFAULT_SPREAD_BPS,
    DEFAULT_START_PRICE,
    DEFAULT_STEP_BPS,
)
from paper_exchange.config.settings import parse_decimal
from paper_exchange.data.market_feed import SyntheticMarketFeed
from paper_exchange.data.models import MarketOrderBook, Ticker
from paper_exchange.errors import ConfigurationError, UpstreamTradingError


class SyntheticExchangeAdapter:
    """Serves one market from a deterministic random walk; every ticker call is a new tick."""

    impl_name = "Synthetic exchange (seeded random-walk market data)"

    def __init__(self) -> None:
        self.market_id = DEFAULT_MARKET_ID
        self.depth = DEFAULT_BOOK_DEPTH
        self.buy_fee = Decimal(DEFAULT_FEE)
        self.sell_fee = Decimal(DEFAULT_FEE)
        self.feed: Optional[SyntheticMarketFeed] = None

    def init(self, config: Mapping[str, Any]) -> None:
        self.market_id = str(config.get("market_id", DEFAULT_MARKET_ID)).upper()
        self.buy_fee = parse_decimal("buy_fee", config.get("buy_fee", DEFAULT_FEE))
        self.sell_fee = parse_decimal("sell_fee", config.get("sell_fee", DEFAULT_FEE))
        try:
            self.depth = int(config.get("depth", DEFAULT_BOOK_DEPTH))
            seed = int(config.get("seed", DEFAULT_SEED))
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(f"depth and seed must be integers: {exc}") from exc
        if self.depth < 1:
            raise ConfigurationError(f"depth must be at least 1, got {self.depth}")
        self.feed = SyntheticMarketFeed(
            seed=seed,
            start_price=parse_decimal("start_price", config.get("start_price", DEFAULT_START_PRICE)),
            spread_bps=parse_decimal("spread_bps", config.get("spread_bps", DEFAULT_SPREAD_BPS)),
            step_bps=parse_decimal("step_bps", config.get("step_bps", DEFAULT_STEP_BPS)),
        )

    def get_ticker(self, market_id: str) -> Ticker:
        return self._feed_for(market_id).next_tick()

    def get_market_order_book(self, market_id: str) -> MarketOrderBook:
        return self._feed_for(market_id).order_book(self.market_id, self.depth)

    def get_latest_market_price(self, market_id: str) -> Decimal:
        return self._feed_for(market_id).current().last

    def get_buy_fee_percentage(self, market_id: str) -> Decimal:
        self._feed_for(market_id)
        return self.buy_fee

    def get_sell_fee_percentage(self, market_id: str) -> Decimal:
        self._feed_for(market_id)
        return self.sell_fee

    def _feed_for(self, market_id: str) -> SyntheticMarketFeed:
        if self.feed is None:
            raise UpstreamTradingError("Synthetic exchange used before init()")
        if market_id.upper() != self.market_id:
            raise UpstreamTradingError(
                f"Unknown market id '{market_id}', synthetic exchange serves {self.market_id}"
            )
        return self.feed
