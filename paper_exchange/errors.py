"""Exception hierarchy for the paper exchange adapter."""

from __future__ import annotations


class PaperExchangeError(Exception):
    """Base class for all adapter errors."""


class ConfigurationError(PaperExchangeError):
    """Startup configuration is missing/invalid or the delegate could not be created."""


class NetworkError(PaperExchangeError):
    """The delegate exchange could not be reached."""


class TradingApiError(PaperExchangeError):
    """Base class for trading errors reported to the caller."""


class InvalidOperationError(TradingApiError):
    """Operation not allowed in the current order slot state."""


class UnrecognizedStateError(TradingApiError):
    """An open order carries a side that is neither BUY nor SELL."""


class UpstreamTradingError(TradingApiError):
    """The delegate exchange reported a domain error."""
