"""Test helpers module for shared test utilities.

- constants: Token ids and common values
- fakes: In-memory pool oracle, scripted submission channel, recording sleep
"""

from tests.helpers.constants import (
    AQUA,
    BTC,
    DEFAULT_FEE_BPS,
    EURC,
    FIXED_NOW,
    USDC,
    XLM,
)
from tests.helpers.fakes import (
    FakePool,
    FakeSubmissionChannel,
    InMemoryPoolOracle,
    RecordingSleep,
)

__all__ = [
    # Constants
    "XLM",
    "USDC",
    "EURC",
    "AQUA",
    "BTC",
    "DEFAULT_FEE_BPS",
    "FIXED_NOW",
    # Fakes
    "FakePool",
    "FakeSubmissionChannel",
    "InMemoryPoolOracle",
    "RecordingSleep",
]
