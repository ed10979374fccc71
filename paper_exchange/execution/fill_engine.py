"""Decides when the open simulated order fills and settles it into the ledger."""

from __future__ import annotations

import contextlib
from datetime import datetime, timezone
from decimal import Decimal
from typing import Iterator, Optional

from paper_exchange.data.models import Ticker
from paper_exchange.errors import UnrecognizedStateError
from paper_exchange.exchanges.base import ExchangeAdapter
from paper_exchange.execution.order import Fill, OrderType, SimulatedOrder
from paper_exchange.execution.state import SimulationState
from paper_exchange.logging.trade_log import get_trade_logger


class FillEngine:
    """Fills the open order at the live touch price once the market crosses its limit.

    A SELL fills when bid >= limit, at the bid; a BUY fills when ask <= limit,
    at the ask. Ticker and fee are both fetched before the ledger is touched,
    so a delegate failure leaves the order open and the balances unchanged.

    Nested calls made while an evaluation is running (for example a delegate
    that calls back into the broker) return immediately.
    """

    def __init__(self, state: SimulationState, delegate: ExchangeAdapter) -> None:
        self.state = state
        self.delegate = delegate
        self.trade_logger = get_trade_logger()
        self._evaluating = False

    @property
    def evaluating(self) -> bool:
        return self._evaluating

    @contextlib.contextmanager
    def _evaluation(self) -> Iterator[None]:
        self._evaluating = True
        try:
            yield
        finally:
            self._evaluating = False

    def evaluate(self, market_id: str, ticker: Optional[Ticker] = None) -> Optional[Fill]:
        """Check the open order against the current ticker; return the Fill if it executed.

        Pass `ticker` when the caller already fetched one, so the fill is judged
        against the same prices the caller sees.
        """
        if self._evaluating:
            return None
        with self._evaluation():
            order = self.state.open_order
            if order is None:
                return None
            if order.side == OrderType.BUY:
                return self._check_buy(order, market_id, ticker)
            if order.side == OrderType.SELL:
                return self._check_sell(order, market_id, ticker)
            raise UnrecognizedStateError(f"Order type not recognized: {order.side!r}")

    def _check_sell(
        self, order: SimulatedOrder, market_id: str, ticker: Optional[Ticker]
    ) -> Optional[Fill]:
        bid = (ticker if ticker is not None else self.delegate.get_ticker(market_id)).bid
        if bid < order.price:
            return None
        fee_pct = self.delegate.get_sell_fee_percentage(market_id)
        self.trade_logger.info(
            "SELL: bid %s moved to/above limit %s, recording execution at the current bid",
            bid,
            order.price,
        )
        gross = order.original_quantity * bid
        fee = fee_pct * gross
        return self._settle(
            order, OrderType.SELL, bid, fee, counter_delta=gross - fee, base_delta=-order.original_quantity
        )

    def _check_buy(
        self, order: SimulatedOrder, market_id: str, ticker: Optional[Ticker]
    ) -> Optional[Fill]:
        ask = (ticker if ticker is not None else self.delegate.get_ticker(market_id)).ask
        if ask > order.price:
            return None
        fee_pct = self.delegate.get_buy_fee_percentage(market_id)
        self.trade_logger.info(
            "BUY: ask %s moved to/below limit %s, recording execution at the current ask",
            ask,
            order.price,
        )
        gross = order.original_quantity * ask
        fee = fee_pct * gross
        return self._settle(
            order, OrderType.BUY, ask, fee, counter_delta=-(gross + fee), base_delta=order.original_quantity
        )

    def _settle(
        self,
        order: SimulatedOrder,
        side: OrderType,
        price: Decimal,
        fee: Decimal,
        counter_delta: Decimal,
        base_delta: Decimal,
    ) -> Fill:
        ledger = self.state.ledger
        ledger.counter_balance += counter_delta
        ledger.base_balance += base_delta
        self.state.open_order = None

        fill = Fill(
            order_id=order.order_id,
            ts=datetime.now(timezone.utc),
            market_id=order.market_id,
            side=side,
            price=price,
            qty=order.original_quantity,
            fee=fee,
            counter_delta=counter_delta,
            base_delta=base_delta,
        )
        self.state.fills.append(fill)
        self.trade_logger.info(
            "fill id=%s side=%s qty=%s price=%s fee=%s %s=%s %s=%s",
            fill.order_id,
            side.value,
            fill.qty,
            price,
            fee,
            ledger.base_currency,
            ledger.base_balance,
            ledger.counter_currency,
            ledger.counter_balance,
        )
        return fill
