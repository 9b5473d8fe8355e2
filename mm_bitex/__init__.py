"""Sell-side quoting helpers for the Bitex exchange."""

from .bitex_client import BitexClient
from .errors import BitexError, NotFoundError, ParseError, TransportError
from .exchange import ExchangeClient
from .rebalancer import rebalance_tickers
from .tick import run_tick
from .types import AskQuote, OpenOrder, RunResult, TickerConfig, TickParams

__all__ = [
    "AskQuote",
    "BitexClient",
    "BitexError",
    "ExchangeClient",
    "NotFoundError",
    "OpenOrder",
    "ParseError",
    "RunResult",
    "TickParams",
    "TickerConfig",
    "TransportError",
    "rebalance_tickers",
    "run_tick",
]
