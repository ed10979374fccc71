"""
Tests for delegate exchange creation.

The registry maps config keys to constructors; any failure to build or
initialise the delegate is a ConfigurationError.
"""

import pytest

from paper_exchange.errors import ConfigurationError
from paper_exchange.exchanges import registry
from paper_exchange.exchanges.binance_us import BinanceUsExchangeAdapter
from paper_exchange.exchanges.synthetic import SyntheticExchangeAdapter


def test_builtin_delegates_are_registered():
    assert registry.DELEGATE_REGISTRY["synthetic"] is SyntheticExchangeAdapter
    assert registry.DELEGATE_REGISTRY["binance_us"] is BinanceUsExchangeAdapter


def test_create_delegate_initialises_with_config(monkeypatch, fake_exchange_cls):
    monkeypatch.setitem(registry.DELEGATE_REGISTRY, "fake", fake_exchange_cls)

    delegate = registry.create_delegate("fake", {"market_id": "ETHUSDT"})

    assert isinstance(delegate, fake_exchange_cls)
    assert delegate.config == {"market_id": "ETHUSDT"}


def test_register_delegate_adds_key(monkeypatch, fake_exchange_cls):
    monkeypatch.setattr(registry, "DELEGATE_REGISTRY", dict(registry.DELEGATE_REGISTRY))

    registry.register_delegate("fake", fake_exchange_cls)

    assert registry.create_delegate("fake", {}).impl_name == "Fake exchange"


def test_unknown_delegate_raises():
    with pytest.raises(ConfigurationError, match="Unknown delegate"):
        registry.create_delegate("kraken_pro_max", {})


def test_constructor_failure_is_wrapped(monkeypatch):
    def broken():
        raise RuntimeError("no network stack")

    monkeypatch.setitem(registry.DELEGATE_REGISTRY, "broken", broken)

    with pytest.raises(ConfigurationError) as exc_info:
        registry.create_delegate("broken", {})

    assert isinstance(exc_info.value.__cause__, RuntimeError)


def test_init_failure_is_wrapped(monkeypatch, fake_exchange_cls):
    class FailingInit(fake_exchange_cls):
        def init(self, config):
            raise KeyError("api_url")

    monkeypatch.setitem(registry.DELEGATE_REGISTRY, "failing", FailingInit)

    with pytest.raises(ConfigurationError):
        registry.create_delegate("failing", {})


def test_invalid_delegate_config_raises():
    with pytest.raises(ConfigurationError):
        registry.create_delegate("synthetic", {"depth": 0})
