"""
Network and token configuration.

Environment variables (all optional):
    XAPAY_NETWORK         Registry key of the network. Default: xahau-testnet
    XAPAY_RPC_URL         Overrides the network's JSON-RPC URL.
    XAPAY_ISSUER_ADDRESS  r-address issuing the token.
                          Default: rhyYNdxAyFQ7s2KYXhaTMJKF7NrkkZj1X9
    XAPAY_CURRENCY_CODE   Token currency code. Default: JPY
    XAPAY_HTTP_TIMEOUT    JSON-RPC request timeout in seconds. Default: 30
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass

from xapay.errors import InvalidInput

logger = logging.getLogger(__name__)

DEFAULT_ISSUER_ADDRESS = "rhyYNdxAyFQ7s2KYXhaTMJKF7NrkkZj1X9"
DEFAULT_CURRENCY_CODE = "JPY"
DEFAULT_HTTP_TIMEOUT = 30.0

# Account with no known key; payments to it remove tokens from circulation.
BLACK_HOLE_ADDRESS = "rrrrrrrrrrrrrrrrrrrrrhoLvTp"


@dataclass(frozen=True)
class Network:
    """A Xahau network endpoint."""

    name: str
    network_id: int
    rpc_url: str
    websocket_url: str
    explorer_url: str


NETWORKS: dict[str, Network] = {
    "xahau-testnet": Network(
        name="xahau-testnet",
        network_id=21338,
        rpc_url="https://xahau-test.net",
        websocket_url="wss://xahau-test.net/",
        explorer_url="https://test.xahauexplorer.com",
    ),
    "xahau-mainnet": Network(
        name="xahau-mainnet",
        network_id=21337,
        rpc_url="https://xahau.network",
        websocket_url="wss://xahau.network/",
        explorer_url="https://xahauexplorer.com",
    ),
}


def get_network(name: str) -> Network:
    """Get a network by name. Raises ``KeyError`` if not found."""
    if name not in NETWORKS:
        raise KeyError(
            f"Unknown network '{name}'. Available: {list(NETWORKS)}"
        )
    return NETWORKS[name]


@dataclass(frozen=True)
class Settings:
    """Resolved runtime settings."""

    network: Network
    rpc_url: str
    issuer_address: str = DEFAULT_ISSUER_ADDRESS
    currency_code: str = DEFAULT_CURRENCY_CODE
    http_timeout: float = DEFAULT_HTTP_TIMEOUT

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from environment variables.

        Args:
            environ: Mapping to read from. Defaults to ``os.environ``.

        Raises:
            InvalidInput: If XAPAY_NETWORK names an unknown network or
                XAPAY_HTTP_TIMEOUT is not a positive number.
        """
        env = os.environ if environ is None else environ
        network_name = env.get("XAPAY_NETWORK", "xahau-testnet")
        try:
            network = get_network(network_name)
        except KeyError as exc:
            raise InvalidInput(f"XAPAY_NETWORK: {exc.args[0]}") from None
        rpc_url = env.get("XAPAY_RPC_URL", network.rpc_url).rstrip("/")

        raw_timeout = env.get("XAPAY_HTTP_TIMEOUT", str(DEFAULT_HTTP_TIMEOUT))
        try:
            timeout = float(raw_timeout)
        except ValueError:
            raise InvalidInput(
                f"XAPAY_HTTP_TIMEOUT must be a number, got: {raw_timeout!r}"
            ) from None
        if timeout <= 0:
            raise InvalidInput(f"XAPAY_HTTP_TIMEOUT must be positive, got: {timeout}")

        settings = cls(
            network=network,
            rpc_url=rpc_url,
            issuer_address=env.get("XAPAY_ISSUER_ADDRESS", DEFAULT_ISSUER_ADDRESS),
            currency_code=env.get("XAPAY_CURRENCY_CODE", DEFAULT_CURRENCY_CODE),
            http_timeout=timeout,
        )
        logger.debug(
            "config: network=%s rpc_url=%s currency=%s",
            network.name,
            rpc_url,
            settings.currency_code,
        )
        return settings
