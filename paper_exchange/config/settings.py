"""YAML configuration for the paper exchange adapter."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Mapping

import yaml

from paper_exchange.config.constants import (
    BASE_CURRENCY_KEY,
    BASE_STARTING_BALANCE_KEY,
    COUNTER_CURRENCY_KEY,
    COUNTER_STARTING_BALANCE_KEY,
    DELEGATE_CONFIG_SECTION,
    DELEGATE_KEY,
    EXCHANGE_SECTION,
    SIMULATION_SECTION,
)
from paper_exchange.errors import ConfigurationError
from paper_exchange.logging.adapter_log import get_adapter_logger

logger = get_adapter_logger()


def parse_decimal(name: str, value: Any) -> Decimal:
    """Parse a config value into an exact, finite Decimal."""
    if value is None or isinstance(value, bool):
        raise ConfigurationError(f"{name} must be a decimal value, got {value!r}")
    try:
        parsed = Decimal(str(value).strip())
    except InvalidOperation as exc:
        raise ConfigurationError(f"{name} must be a decimal value, got {value!r}") from exc
    if not parsed.is_finite():
        raise ConfigurationError(f"{name} must be finite, got {value!r}")
    return parsed


def _require(section: Mapping[str, Any], key: str, where: str) -> Any:
    value = section.get(key)
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ConfigurationError(f"Missing required config item '{where}.{key}'")
    return value


def _require_section(parent: Mapping[str, Any], key: str, where: str) -> Mapping[str, Any]:
    section = parent.get(key)
    if not isinstance(section, Mapping):
        raise ConfigurationError(f"Missing config section '{where}{key}'")
    return section


@dataclass(frozen=True)
class SimulationConfig:
    """Simulated currencies and their starting balances."""

    base_currency: str
    counter_currency: str
    base_starting_balance: Decimal
    counter_starting_balance: Decimal

    @classmethod
    def from_mapping(cls, section: Mapping[str, Any]) -> "SimulationConfig":
        where = f"{EXCHANGE_SECTION}.{SIMULATION_SECTION}"
        base_currency = str(_require(section, BASE_CURRENCY_KEY, where)).strip()
        logger.info("Base currency to be simulated: %s", base_currency)
        base_balance = parse_decimal(
            BASE_STARTING_BALANCE_KEY, _require(section, BASE_STARTING_BALANCE_KEY, where)
        )
        logger.info("Base currency balance at simulation start: %s", base_balance)

        counter_currency = str(_require(section, COUNTER_CURRENCY_KEY, where)).strip()
        logger.info("Counter currency to be simulated: %s", counter_currency)
        counter_balance = parse_decimal(
            COUNTER_STARTING_BALANCE_KEY, _require(section, COUNTER_STARTING_BALANCE_KEY, where)
        )
        logger.info("Counter currency balance at simulation start: %s", counter_balance)

        if base_currency == counter_currency:
            raise ConfigurationError(
                f"Base and counter currency must differ, both are '{base_currency}'"
            )
        return cls(
            base_currency=base_currency,
            counter_currency=counter_currency,
            base_starting_balance=base_balance,
            counter_starting_balance=counter_balance,
        )


@dataclass(frozen=True)
class AdapterConfig:
    """Validated adapter configuration."""

    simulation: SimulationConfig
    delegate: str
    delegate_config: dict[str, Any] = field(default_factory=dict)
    name: str = "paper"

    @classmethod
    def from_yaml(cls, path: str | Path) -> "AdapterConfig":
        logger.info("Loading paper exchange config from %s", path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except OSError as exc:
            logger.error("Failed to read config file %s: %s", path, exc)
            raise ConfigurationError(f"Failed to read config file {path}: {exc}") from exc
        except yaml.YAMLError as exc:
            logger.error("Failed to parse config file %s: %s", path, exc)
            raise ConfigurationError(f"Failed to parse config file {path}: {exc}") from exc
        return cls.from_mapping(data)

    @classmethod
    def from_mapping(cls, data: Any) -> "AdapterConfig":
        try:
            if not isinstance(data, Mapping):
                raise ConfigurationError("Config root must be a mapping")
            exchange = _require_section(data, EXCHANGE_SECTION, "")
            simulation = SimulationConfig.from_mapping(
                _require_section(exchange, SIMULATION_SECTION, f"{EXCHANGE_SECTION}.")
            )
            delegate = str(_require(exchange, DELEGATE_KEY, EXCHANGE_SECTION)).strip()
            logger.info("Delegate exchange adapter to be used for market data: %s", delegate)
            delegate_config = exchange.get(DELEGATE_CONFIG_SECTION) or {}
            if not isinstance(delegate_config, Mapping):
                raise ConfigurationError(
                    f"'{EXCHANGE_SECTION}.{DELEGATE_CONFIG_SECTION}' must be a mapping"
                )
        except ConfigurationError as exc:
            logger.error("Invalid paper exchange config: %s", exc)
            raise
        logger.info("Paper exchange config successfully loaded.")
        return cls(
            simulation=simulation,
            delegate=delegate,
            delegate_config=dict(delegate_config),
            name=str(exchange.get("name", "paper")),
        )
