"""Registry mapping config keys to delegate exchange constructors."""

from __future__ import annotations

from typing import Any, Callable, Mapping

from paper_exchange.config.constants import BINANCE_US_DELEGATE, SYNTHETIC_DELEGATE
from paper_exchange.errors import ConfigurationError
from paper_exchange.exchanges.base import ExchangeAdapter
from paper_exchange.exchanges.binance_us import BinanceUsExchangeAdapter
from paper_exchange.exchanges.synthetic import SyntheticExchangeAdapter
from paper_exchange.logging.adapter_log import get_adapter_logger

logger = get_adapter_logger()

DelegateFactory = Callable[[], ExchangeAdapter]

DELEGATE_REGISTRY: dict[str, DelegateFactory] = {
    SYNTHETIC_DELEGATE: SyntheticExchangeAdapter,
    BINANCE_US_DELEGATE: BinanceUsExchangeAdapter,
}


def register_delegate(key: str, factory: DelegateFactory) -> None:
    """Make a delegate constructor available under `key`."""
    DELEGATE_REGISTRY[key] = factory


def create_delegate(key: str, config: Mapping[str, Any]) -> ExchangeAdapter:
    """Construct and initialise the delegate registered under `key`.

    Any failure is fatal for adapter startup and surfaces as ConfigurationError.
    """
    logger.info("Creating the delegate exchange adapter: %s...", key)
    factory = DELEGATE_REGISTRY.get(key)
    if factory is None:
        msg = f"Unknown delegate exchange adapter '{key}'. Known: {sorted(DELEGATE_REGISTRY)}"
        logger.error(msg)
        raise ConfigurationError(msg)
    try:
        delegate = factory()
        delegate.init(config)
    except ConfigurationError as exc:
        logger.error("Failed to initialise delegate exchange adapter '%s': %s", key, exc)
        raise
    except Exception as exc:
        msg = f"Failed to create and initialise delegate exchange adapter '{key}'"
        logger.error("%s: %s", msg, exc)
        raise ConfigurationError(msg) from exc
    logger.info("Successfully created the delegate exchange adapter: %s", delegate.impl_name)
    return delegate
