"""
Tests for the synthetic exchange and its seeded market feed.
"""

from decimal import Decimal

import pytest

from paper_exchange.data.market_feed import SyntheticMarketFeed
from paper_exchange.errors import ConfigurationError, UpstreamTradingError
from paper_exchange.exchanges.synthetic import SyntheticExchangeAdapter


def make_exchange(**config):
    exchange = SyntheticExchangeAdapter()
    exchange.init({"market_id": "BTCUSDT", **config})
    return exchange


def test_same_seed_gives_same_ticks():
    a = make_exchange(seed=11)
    b = make_exchange(seed=11)

    ticks_a = [(t.bid, t.ask) for t in (a.get_ticker("BTCUSDT") for _ in range(20))]
    ticks_b = [(t.bid, t.ask) for t in (b.get_ticker("BTCUSDT") for _ in range(20))]

    assert ticks_a == ticks_b


def test_each_ticker_call_advances_the_feed():
    exchange = make_exchange(seed=3, step_bps="50")

    mids = {exchange.get_ticker("BTCUSDT").last for _ in range(10)}

    assert len(mids) > 1


def test_ticks_respect_spread_and_precision():
    feed = SyntheticMarketFeed(seed=5, start_price=Decimal("30000"), spread_bps=Decimal("10"))

    for _ in range(50):
        tick = feed.next_tick()
        assert tick.bid <= tick.last <= tick.ask
        assert tick.bid.as_tuple().exponent == -2
        # 10 bps of ~30000 is ~30, allow for rounding
        assert Decimal("25") <= tick.ask - tick.bid <= Decimal("35")


def test_latest_price_does_not_advance_feed():
    exchange = make_exchange(seed=1)
    tick = exchange.get_ticker("BTCUSDT")

    assert exchange.get_latest_market_price("BTCUSDT") == tick.last
    assert exchange.get_latest_market_price("BTCUSDT") == tick.last


def test_order_book_levels_are_sorted():
    exchange = make_exchange(depth=4)

    book = exchange.get_market_order_book("btcusdt")

    asks = [level.price for level in book.sell_orders]
    bids = [level.price for level in book.buy_orders]
    assert len(asks) == len(bids) == 4
    assert asks == sorted(asks)
    assert bids == sorted(bids, reverse=True)
    assert bids[0] < asks[0]
    assert all(level.quantity > 0 for level in book.sell_orders + book.buy_orders)


def test_fees_come_from_config():
    exchange = make_exchange(buy_fee="0.0025", sell_fee="0.004")

    assert exchange.get_buy_fee_percentage("BTCUSDT") == Decimal("0.0025")
    assert exchange.get_sell_fee_percentage("BTCUSDT") == Decimal("0.004")


def test_unknown_market_raises():
    exchange = make_exchange()

    with pytest.raises(UpstreamTradingError, match="Unknown market"):
        exchange.get_ticker("ETHUSDT")


def test_use_before_init_raises():
    with pytest.raises(UpstreamTradingError):
        SyntheticExchangeAdapter().get_ticker("BTCUSDT")


@pytest.mark.parametrize("config", [{"depth": "many"}, {"seed": None}, {"buy_fee": "cheap"}, {"depth": -1}])
def test_bad_config_raises(config):
    with pytest.raises(ConfigurationError):
        make_exchange(**config)
