"""swapcore: pricing, routing and transaction lifecycle for a constant-product DEX."""

from swapcore.client import SwapClient
from swapcore.config import DEFAULT_CONFIG, NETWORK_CONFIGS, Network, SwapConfig
from swapcore.errors import ErrorKind, SwapCoreError, classify_error
from swapcore.math import Fraction, Percent, Rounding
from swapcore.models import SwapRequest, TradeType
from swapcore.routing import OptimalPath, Quote

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_CONFIG",
    "ErrorKind",
    "Fraction",
    "NETWORK_CONFIGS",
    "Network",
    "OptimalPath",
    "Percent",
    "Quote",
    "Rounding",
    "SwapClient",
    "SwapConfig",
    "SwapCoreError",
    "SwapRequest",
    "TradeType",
    "classify_error",
]
