"""Client configuration.

SwapConfig holds every tunable used by the client. Defaults live in
constants.py; from_env() overlays environment variables so deployments can
retune retry and polling without code changes.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import TypeVar

from swapcore.constants import (
    DEFAULT_DEADLINE_SEC,
    DEFAULT_MAX_HOPS,
    DEFAULT_SLIPPAGE_BPS,
    MAX_BPS,
)
from swapcore.submission.polling import PollingOptions, PollingStrategy
from swapcore.submission.retry import RetryOptions

T = TypeVar("T")


class Network(str, Enum):
    TESTNET = "testnet"
    MAINNET = "mainnet"


@dataclass(frozen=True)
class NetworkConfig:
    """Endpoints and identifiers of one network deployment."""

    rpc_url: str
    network_passphrase: str


NETWORK_CONFIGS: dict[Network, NetworkConfig] = {
    Network.TESTNET: NetworkConfig(
        rpc_url="https://soroban-testnet.stellar.org",
        network_passphrase="Test SDF Network ; September 2015",
    ),
    Network.MAINNET: NetworkConfig(
        rpc_url="https://soroban.stellar.org",
        network_passphrase="Public Global Stellar Network ; September 2015",
    ),
}


@dataclass(frozen=True)
class SwapConfig:
    """Client-wide settings.

    Attributes:
        network: Target network
        rpc_url: Overrides the network's default RPC endpoint
        default_slippage_bps: Slippage used when a quote call passes none
        default_deadline_sec: Deadline offset used when a quote call passes none
        max_hops: Maximum pools per route
        retry: Retry policy for simulate and broadcast
        polling: Confirmation polling parameters
    """

    network: Network = Network.TESTNET
    rpc_url: str | None = None
    default_slippage_bps: int = DEFAULT_SLIPPAGE_BPS
    default_deadline_sec: int = DEFAULT_DEADLINE_SEC
    max_hops: int = DEFAULT_MAX_HOPS
    retry: RetryOptions = field(default_factory=RetryOptions)
    polling: PollingOptions = field(default_factory=PollingOptions)

    def __post_init__(self) -> None:
        if not 0 <= self.default_slippage_bps <= MAX_BPS:
            raise ValueError(
                f"default_slippage_bps must be within [0, {MAX_BPS}], "
                f"got {self.default_slippage_bps}"
            )
        if self.default_deadline_sec <= 0:
            raise ValueError(
                f"default_deadline_sec must be positive, got {self.default_deadline_sec}"
            )
        if self.max_hops < 1:
            raise ValueError(f"max_hops must be >= 1, got {self.max_hops}")

    @property
    def network_config(self) -> NetworkConfig:
        return NETWORK_CONFIGS[self.network]

    @property
    def resolved_rpc_url(self) -> str:
        return self.rpc_url or self.network_config.rpc_url

    def with_network(self, network: Network) -> SwapConfig:
        """Copy of this config targeting another network (custom RPC URL dropped)."""
        return replace(self, network=network, rpc_url=None)

    @classmethod
    def from_env(
        cls,
        prefix: str = "SWAPCORE_",
        environ: Mapping[str, str] | None = None,
    ) -> SwapConfig:
        """Build a config from environment variables.

        Recognized variables (with the default prefix):
        - SWAPCORE_NETWORK: testnet | mainnet
        - SWAPCORE_RPC_URL
        - SWAPCORE_SLIPPAGE_BPS, SWAPCORE_DEADLINE_SEC, SWAPCORE_MAX_HOPS
        - SWAPCORE_MAX_RETRIES, SWAPCORE_RETRY_BASE_DELAY,
          SWAPCORE_RETRY_MAX_DELAY, SWAPCORE_BACKOFF_MULTIPLIER
        - SWAPCORE_POLLING_STRATEGY: linear | exponential
        - SWAPCORE_POLLING_INTERVAL, SWAPCORE_MAX_POLLING_ATTEMPTS,
          SWAPCORE_POLLING_BACKOFF_FACTOR, SWAPCORE_MAX_POLLING_INTERVAL

        Unset variables keep their defaults.

        Raises:
            ValueError: If a variable cannot be parsed or fails validation
        """
        env = os.environ if environ is None else environ

        def get(name: str) -> str | None:
            value = env.get(prefix + name)
            return value.strip() if value is not None and value.strip() else None

        base = cls()
        retry = base.retry
        polling = base.polling

        retry = replace(
            retry,
            max_retries=_parse(get("MAX_RETRIES"), int, retry.max_retries),
            base_delay=_parse(get("RETRY_BASE_DELAY"), float, retry.base_delay),
            max_delay=_parse(get("RETRY_MAX_DELAY"), float, retry.max_delay),
            backoff_multiplier=_parse(
                get("BACKOFF_MULTIPLIER"), float, retry.backoff_multiplier
            ),
        )
        strategy = get("POLLING_STRATEGY")
        polling = replace(
            polling,
            strategy=PollingStrategy(strategy.upper()) if strategy else polling.strategy,
            interval=_parse(get("POLLING_INTERVAL"), float, polling.interval),
            max_attempts=_parse(get("MAX_POLLING_ATTEMPTS"), int, polling.max_attempts),
            backoff_factor=_parse(get("POLLING_BACKOFF_FACTOR"), float, polling.backoff_factor),
            max_interval=_parse(get("MAX_POLLING_INTERVAL"), float, polling.max_interval),
        )

        network = get("NETWORK")
        return cls(
            network=Network(network.lower()) if network else base.network,
            rpc_url=get("RPC_URL"),
            default_slippage_bps=_parse(get("SLIPPAGE_BPS"), int, base.default_slippage_bps),
            default_deadline_sec=_parse(get("DEADLINE_SEC"), int, base.default_deadline_sec),
            max_hops=_parse(get("MAX_HOPS"), int, base.max_hops),
            retry=retry,
            polling=polling,
        )


def _parse(raw: str | None, kind: Callable[[str], T], default: T) -> T:
    if raw is None:
        return default
    return kind(raw)


# Default configuration instance
DEFAULT_CONFIG = SwapConfig()


__all__ = ["Network", "NetworkConfig", "NETWORK_CONFIGS", "SwapConfig", "DEFAULT_CONFIG"]
