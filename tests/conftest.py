"""
Pytest configuration file.

Puts the repo root on sys.path so that 'import paper_exchange...' works, and
provides a scriptable in-memory exchange to stand in for live market data.
"""
import sys
from decimal import Decimal
from pathlib import Path

import pytest

repo_root = Path(__file__).parent.parent
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from paper_exchange.accounting.balance import BalanceLedger  # noqa: E402
from paper_exchange.data.models import MarketOrder, MarketOrderBook, Ticker  # noqa: E402
from paper_exchange.execution.paper_broker import PaperBroker  # noqa: E402
from paper_exchange.execution.state import SimulationState  # noqa: E402


class FakeExchange:
    """In-memory exchange with settable prices, fees and failures."""

    impl_name = "Fake exchange"

    def __init__(self, bid="100", ask="101", buy_fee="0.001", sell_fee="0.002"):
        self.bid = Decimal(bid)
        self.ask = Decimal(ask)
        self.last = Decimal(bid)
        self.buy_fee = Decimal(buy_fee)
        self.sell_fee = Decimal(sell_fee)
        self.ticker_error = None
        self.fee_error = None
        self.on_ticker = None
        self.config = None
        self.calls = []

    def init(self, config):
        self.config = dict(config)

    def get_ticker(self, market_id):
        self.calls.append(("get_ticker", market_id))
        if self.ticker_error is not None:
            raise self.ticker_error
        if self.on_ticker is not None:
            callback, self.on_ticker = self.on_ticker, None
            callback()
        return Ticker(bid=self.bid, ask=self.ask, last=self.last)

    def get_market_order_book(self, market_id):
        self.calls.append(("get_market_order_book", market_id))
        return MarketOrderBook(
            market_id=market_id,
            sell_orders=[MarketOrder("SELL", self.ask, Decimal("1"))],
            buy_orders=[MarketOrder("BUY", self.bid, Decimal("2"))],
        )

    def get_latest_market_price(self, market_id):
        self.calls.append(("get_latest_market_price", market_id))
        return self.last

    def get_buy_fee_percentage(self, market_id):
        self.calls.append(("get_buy_fee_percentage", market_id))
        if self.fee_error is not None:
            raise self.fee_error
        return self.buy_fee

    def get_sell_fee_percentage(self, market_id):
        self.calls.append(("get_sell_fee_percentage", market_id))
        if self.fee_error is not None:
            raise self.fee_error
        return self.sell_fee


@pytest.fixture
def fake_exchange():
    return FakeExchange()


@pytest.fixture
def state():
    ledger = BalanceLedger(
        base_currency="BTC",
        counter_currency="USDT",
        base_balance=Decimal("1.0"),
        counter_balance=Decimal("10000"),
    )
    return SimulationState(ledger=ledger)


@pytest.fixture
def broker(state, fake_exchange):
    return PaperBroker(state, fake_exchange)


@pytest.fixture
def fake_exchange_cls():
    return FakeExchange
