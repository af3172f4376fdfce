"""Protocol constants and SDK defaults.

Centralizes precision constants and the default values used when a caller
does not supply an override.
"""

# Basis-point denominator (10000 bps = 100%)
BPS_DENOMINATOR = 10_000

# Maximum fee/slippage in basis points
MAX_BPS = 10_000

# Price impact reported when a pool cannot price the trade at all
MAX_PRICE_IMPACT_BPS = 10_000

# Quote defaults
DEFAULT_SLIPPAGE_BPS = 50
DEFAULT_DEADLINE_SEC = 1200
DEFAULT_MAX_HOPS = 3

# Retry defaults (seconds)
DEFAULT_MAX_RETRIES = 3
DEFAULT_RETRY_BASE_DELAY = 1.0
DEFAULT_RETRY_MAX_DELAY = 10.0
DEFAULT_BACKOFF_MULTIPLIER = 2.0
DEFAULT_RETRY_JITTER = 0.15

# Polling defaults (seconds)
DEFAULT_POLLING_INTERVAL = 1.0
DEFAULT_MAX_POLLING_ATTEMPTS = 30
DEFAULT_POLLING_BACKOFF_FACTOR = 2.0
DEFAULT_MAX_POLLING_INTERVAL = 10.0
