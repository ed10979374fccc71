"""Paper broker: simulated orders and balances on top of a live market data exchange."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import List, Optional, Union

from paper_exchange.accounting.balance import BalanceInfo
from paper_exchange.config.settings import AdapterConfig
from paper_exchange.data.models import MarketOrderBook, Ticker
from paper_exchange.errors import InvalidOperationError
from paper_exchange.exchanges.base import ExchangeAdapter
from paper_exchange.exchanges.registry import create_delegate
from paper_exchange.execution.fill_engine import FillEngine
from paper_exchange.execution.order import Fill, OrderType, SimulatedOrder, new_order_id
from paper_exchange.execution.state import SimulationState
from paper_exchange.logging.adapter_log import get_adapter_logger
from paper_exchange.logging.trade_log import get_trade_logger


class PaperBroker:
    """Exchange adapter that simulates order placement, fills and balances.

    Market data and fee schedules come from the delegate exchange. Orders
    never reach the exchange: at most one simulated limit order rests at a
    time and it fills in full once the live ticker crosses its limit price.
    Fills are only checked as a side effect of calls that can reveal new
    market state, never in the background.
    """

    def __init__(self, state: SimulationState, delegate: ExchangeAdapter) -> None:
        self.state = state
        self.delegate = delegate
        self.fill_engine = FillEngine(state, delegate)
        self.trade_logger = get_trade_logger()
        self.adapter_logger = get_adapter_logger()

    @classmethod
    def from_config(cls, config: AdapterConfig) -> "PaperBroker":
        """Build the broker and its delegate; raises ConfigurationError if the delegate fails."""
        logger = get_adapter_logger()
        logger.info("About to initialise paper broker with delegate '%s'", config.delegate)
        delegate = create_delegate(config.delegate, config.delegate_config)
        return cls(SimulationState.from_config(config.simulation), delegate)

    @property
    def impl_name(self) -> str:
        return f"Paper broker (simulated orders, market data from {self.delegate.impl_name})"

    @property
    def fill_history(self) -> List[Fill]:
        return list(self.state.fills)

    def check_fills(self, market_id: str) -> Optional[Fill]:
        """Run the fill check on demand; no-op without an open order."""
        return self.fill_engine.evaluate(market_id)

    def get_market_order_book(self, market_id: str) -> MarketOrderBook:
        self.fill_engine.evaluate(market_id)
        self.adapter_logger.info("Delegate 'get_market_order_book' for %s", market_id)
        return self.delegate.get_market_order_book(market_id)

    def get_open_orders(self, market_id: str) -> List[SimulatedOrder]:
        self.fill_engine.evaluate(market_id)
        order = self.state.open_order
        if order is None:
            self.trade_logger.info("get_open_orders: no open order found")
            return []
        self.trade_logger.info("get_open_orders: found open paper order %s", order)
        return [order]

    def place_order(
        self,
        market_id: str,
        side: Union[OrderType, str],
        quantity: Decimal,
        price: Decimal,
    ) -> str:
        """Create the simulated order and return its id; it may fill immediately.

        The order is stored before the second fill check. If that check fails
        (e.g. NetworkError) the error propagates without an id while the order
        stays open in `state.open_order`, to be re-checked on the next call.
        """
        self.fill_engine.evaluate(market_id)
        if self.state.open_order is not None:
            raise InvalidOperationError(
                "Can only record/execute one order at a time. Wait for the open order to fill"
            )
        order_side = self._parse_side(side)
        quantity = self._positive_decimal("quantity", quantity)
        price = self._positive_decimal("price", price)

        created_at = datetime.now(timezone.utc)
        order = SimulatedOrder(
            order_id=new_order_id(order_side, created_at),
            created_at=created_at,
            market_id=market_id,
            side=order_side,
            price=price,
            original_quantity=quantity,
            total=price * quantity,
        )
        self.state.open_order = order
        self.trade_logger.info("Created a new paper order: %s", order)
        self.fill_engine.evaluate(market_id)
        return order.order_id

    def cancel_order(self, order_id: str, market_id: str) -> bool:
        self.fill_engine.evaluate(market_id)
        order = self.state.open_order
        if order is None:
            raise InvalidOperationError("Tried to cancel an order, but no open order found")
        if order.order_id != order_id:
            raise InvalidOperationError(
                "Tried to cancel an order, but the order id does not match the current open order."
                f" Expected: {order.order_id}, actual: {order_id}"
            )
        self.trade_logger.info("The following order is canceled: %s", order)
        self.state.open_order = None
        return True

    def get_latest_market_price(self, market_id: str) -> Decimal:
        self.fill_engine.evaluate(market_id)
        self.adapter_logger.info("Delegate 'get_latest_market_price' for %s", market_id)
        return self.delegate.get_latest_market_price(market_id)

    def get_ticker(self, market_id: str) -> Ticker:
        """Fetch the ticker once and judge the open order against that same ticker."""
        self.adapter_logger.info("Delegate 'get_ticker' for %s", market_id)
        ticker = self.delegate.get_ticker(market_id)
        self.fill_engine.evaluate(market_id, ticker=ticker)
        return ticker

    def get_balances(self) -> BalanceInfo:
        balances = self.state.ledger.snapshot()
        self.trade_logger.info("Return the following simulated balances: %s", balances.available)
        return balances

    def get_buy_fee_percentage(self, market_id: str) -> Decimal:
        return self.delegate.get_buy_fee_percentage(market_id)

    def get_sell_fee_percentage(self, market_id: str) -> Decimal:
        return self.delegate.get_sell_fee_percentage(market_id)

    @staticmethod
    def _parse_side(side: Union[OrderType, str]) -> OrderType:
        try:
            return OrderType(str(getattr(side, "value", side)).upper())
        except ValueError as exc:
            raise InvalidOperationError(f"Unknown order side: {side!r}") from exc

    @staticmethod
    def _positive_decimal(name: str, value: Union[Decimal, str, int]) -> Decimal:
        try:
            parsed = value if isinstance(value, Decimal) else Decimal(str(value))
        except InvalidOperation as exc:
            raise InvalidOperationError(f"{name} must be a decimal, got {value!r}") from exc
        if not parsed.is_finite() or parsed <= 0:
            raise InvalidOperationError(f"{name} must be positive, got {value!r}")
        return parsed
