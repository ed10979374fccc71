"""Project-wide constants for the paper exchange adapter."""

from __future__ import annotations

# Top-level config sections
EXCHANGE_SECTION = "exchange"
SIMULATION_SECTION = "simulation"
DELEGATE_CONFIG_SECTION = "delegate_config"
DELEGATE_KEY = "delegate"

# Simulation items
BASE_CURRENCY_KEY = "base_currency"
BASE_STARTING_BALANCE_KEY = "base_starting_balance"
COUNTER_CURRENCY_KEY = "counter_currency"
COUNTER_STARTING_BALANCE_KEY = "counter_starting_balance"

# Delegate registry keys
SYNTHETIC_DELEGATE = "synthetic"
BINANCE_US_DELEGATE = "binance_us"

# Delegate defaults
DEFAULT_MARKET_ID = "BTCUSDT"
DEFAULT_FEE = "0.001"
DEFAULT_START_PRICE = "50000"
DEFAULT_SPREAD_BPS = "5"
DEFAULT_STEP_BPS = "15"
DEFAULT_BOOK_DEPTH = 5
DEFAULT_SEED = 42
DEFAULT_TIMEOUT_SECONDS = 10.0

# Runner behavior
DEFAULT_POLL_SECONDS = 5.0

# Precision used when the synthetic feed quantizes prices
PRICE_DECIMALS = 2
QTY_DECIMALS = 6
