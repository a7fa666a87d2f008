"""
XRPL client protocol — the network boundary.

Three methods:
    - submit(signed_tx_blob_hex) → SubmitResult
    - get_tx(tx_hash) → TxStatusResult
    - account_lines(address) → AccountLinesResult

All return frozen dataclasses. Expected ledger failures are captured in
the results; only transport-level failures raise.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable


@dataclass(frozen=True)
class SubmitResult:
    """Result of submitting a signed transaction blob.

    Attributes:
        accepted: Whether the node queued the transaction. Not validation.
        tx_hash: Transaction hash if the node computed one.
        engine_result: Engine result code, None on server-level error.
        error_code: Machine-readable category when accepted is False.
        detail: Human-readable detail for diagnostics.
    """

    accepted: bool
    tx_hash: str | None = None
    engine_result: str | None = None
    error_code: str | None = None
    detail: str | None = None


@dataclass(frozen=True)
class TxStatusResult:
    """Result of querying a transaction's ledger status."""

    found: bool
    validated: bool = False
    ledger_index: int | None = None
    engine_result: str | None = None
    error_code: str | None = None
    detail: str | None = None


@dataclass(frozen=True)
class TrustLine:
    """One trust line of an account (issued-token balance)."""

    account: str
    currency: str
    balance: str
    limit: str


@dataclass(frozen=True)
class AccountLinesResult:
    """Result of an account_lines query."""

    found: bool
    lines: tuple[TrustLine, ...] = field(default_factory=tuple)
    error_code: str | None = None
    detail: str | None = None


@runtime_checkable
class XRPLClient(Protocol):
    """Interface for ledger network operations."""

    async def submit(self, signed_tx_blob_hex: str) -> SubmitResult:
        """Submit a signed transaction blob."""
        ...

    async def get_tx(self, tx_hash: str) -> TxStatusResult:
        """Query the status of a submitted transaction."""
        ...

    async def account_lines(self, address: str) -> AccountLinesResult:
        """List the trust lines (token balances) of an account."""
        ...
