"""Market feed sources backing the delegate exchanges."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
import json
import math
import random
from typing import Any, Callable, Optional

from websockets.exceptions import WebSocketException
from websockets.sync.client import connect as ws_connect

from paper_exchange.config.constants import PRICE_DECIMALS, QTY_DECIMALS
from paper_exchange.data.models import MarketOrder, MarketOrderBook, Ticker
from paper_exchange.errors import NetworkError, UpstreamTradingError

PRICE_QUANTUM = Decimal(1).scaleb(-PRICE_DECIMALS)
QTY_QUANTUM = Decimal(1).scaleb(-QTY_DECIMALS)
BPS = Decimal(10_000)


class SyntheticMarketFeed:
    """Deterministic top-of-book feed: a seeded random walk around a mild sinusoid."""

    def __init__(
        self,
        seed: int = 42,
        start_price: Decimal = Decimal("50000"),
        spread_bps: Decimal = Decimal("5"),
        step_bps: Decimal = Decimal("15"),
    ) -> None:
        self._rng = random.Random(seed)
        self._mid = start_price.quantize(PRICE_QUANTUM)
        self.spread_bps = spread_bps
        self.step_bps = step_bps
        self._tick = 0
        self._last: Optional[Ticker] = None

    def next_tick(self) -> Ticker:
        """Advance the walk one step and return the new top of book."""
        wave = math.sin(self._tick / 40.0) * 0.25
        noise = self._rng.uniform(-1.0, 1.0)
        drift = Decimal(str(round(wave + noise, 6))) * self.step_bps / BPS

        self._mid = max(PRICE_QUANTUM, (self._mid * (1 + drift)).quantize(PRICE_QUANTUM))
        self._tick += 1
        self._last = self._ticker_at(self._mid)
        return self._last

    def current(self) -> Ticker:
        """Latest tick without advancing, generating the first one if needed."""
        if self._last is None:
            return self.next_tick()
        return self._last

    def order_book(self, market_id: str, depth: int) -> MarketOrderBook:
        """Build `depth` levels per side around the current top of book."""
        top = self.current()
        step = max(PRICE_QUANTUM, top.ask - top.bid)
        asks = [
            MarketOrder(side="SELL", price=top.ask + step * i, quantity=self._level_qty())
            for i in range(depth)
        ]
        bids = [
            MarketOrder(side="BUY", price=max(PRICE_QUANTUM, top.bid - step * i), quantity=self._level_qty())
            for i in range(depth)
        ]
        return MarketOrderBook(market_id=market_id, sell_orders=asks, buy_orders=bids)

    def _ticker_at(self, mid: Decimal) -> Ticker:
        half_spread = mid * self.spread_bps / BPS / 2
        bid = max(PRICE_QUANTUM, (mid - half_spread).quantize(PRICE_QUANTUM))
        ask = max(bid, (mid + half_spread).quantize(PRICE_QUANTUM))
        return Ticker(bid=bid, ask=ask, last=mid, ts=datetime.now(timezone.utc))

    def _level_qty(self) -> Decimal:
        return Decimal(str(self._rng.uniform(0.1, 5.0))).quantize(QTY_QUANTUM)


class BinanceUsStreamFeed:
    """Reads single snapshots from the public Binance.US websocket streams."""

    BINANCE_WS_URL = "wss://stream.binance.us:9443/ws"
    DEPTH_LEVELS = (5, 10, 20)

    def __init__(
        self,
        symbol: str,
        timeout_seconds: float = 10.0,
        connect: Callable[..., Any] = ws_connect,
    ) -> None:
        self.symbol = symbol.lower()
        self.timeout_seconds = timeout_seconds
        self._connect = connect

    def book_ticker(self) -> Ticker:
        """Best bid/ask from the `@bookTicker` stream."""
        msg = self._read("bookTicker")
        try:
            return Ticker(bid=Decimal(msg["b"]), ask=Decimal(msg["a"]), ts=datetime.now(timezone.utc))
        except (KeyError, TypeError, ArithmeticError) as exc:
            raise UpstreamTradingError(f"Malformed bookTicker message for {self.symbol}: {msg}") from exc

    def depth(self, market_id: str, levels: int) -> MarketOrderBook:
        """Partial order book from the `@depth<N>` stream."""
        stream_levels = next((n for n in self.DEPTH_LEVELS if n >= levels), self.DEPTH_LEVELS[-1])
        msg = self._read(f"depth{stream_levels}")
        try:
            asks = [MarketOrder("SELL", Decimal(p), Decimal(q)) for p, q in msg["asks"][:levels]]
            bids = [MarketOrder("BUY", Decimal(p), Decimal(q)) for p, q in msg["bids"][:levels]]
        except (KeyError, TypeError, ValueError, ArithmeticError) as exc:
            raise UpstreamTradingError(f"Malformed depth message for {self.symbol}: {msg}") from exc
        return MarketOrderBook(market_id=market_id, sell_orders=asks, buy_orders=bids)

    def last_trade_price(self) -> Decimal:
        """Price of the next trade printed on the `@trade` stream."""
        msg = self._read("trade")
        try:
            return Decimal(msg["p"])
        except (KeyError, TypeError, ArithmeticError) as exc:
            raise UpstreamTradingError(f"Malformed trade message for {self.symbol}: {msg}") from exc

    def _read(self, stream: str) -> dict:
        url = f"{self.BINANCE_WS_URL}/{self.symbol}@{stream}"
        try:
            with self._connect(url, open_timeout=self.timeout_seconds) as ws:
                raw = ws.recv(timeout=self.timeout_seconds)
        except (OSError, TimeoutError, WebSocketException) as exc:
            raise NetworkError(f"Failed to read {url}: {exc}") from exc
        try:
            msg = json.loads(raw)
        except ValueError as exc:
            raise UpstreamTradingError(f"Non-JSON message from {url}: {raw!r}") from exc
        if not isinstance(msg, dict):
            raise UpstreamTradingError(f"Unexpected message from {url}: {msg!r}")
        if "code" in msg and "msg" in msg:
            raise UpstreamTradingError(f"Binance.US error from {url}: {msg['msg']}")
        return msg

