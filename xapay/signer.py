"""
Signer protocols — the secrets boundary.

Two capabilities are consumed, both keeping key material inside the
signer:

    - ``MessageSigner`` signs raw bytes (allowance messages).
    - ``XRPLSigner`` autofills and signs a transaction dict, returning
      a blob ready for submission. Supplied by the caller; the planning
      layer never sees private keys.

``WalletMessageSigner`` is the concrete message signer, backed by an
xrpl-py ``Wallet``. The signature scheme is the wallet's own
(Ed25519 or secp256k1); the hook verifies it against the account key.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from xrpl.core import keypairs
from xrpl.wallet import Wallet


@dataclass(frozen=True)
class SignResult:
    """Result of signing a transaction.

    Attributes:
        signed_tx_blob_hex: Hex-encoded signed transaction blob.
        tx_hash: Transaction hash computed during signing (64 hex chars).
        key_id: Public identifier of the signing key. Never a secret.
    """

    signed_tx_blob_hex: str
    tx_hash: str
    key_id: str


@runtime_checkable
class XRPLSigner(Protocol):
    """Interface for XRPL transaction autofill + signing."""

    @property
    def account(self) -> str:
        """XRPL r-address associated with this signer."""
        ...

    @property
    def key_id(self) -> str:
        """Public identifier of the signing key (safe for logging)."""
        ...

    def sign(self, tx_dict: dict[str, object]) -> SignResult:
        """Fill Sequence/Fee/SigningPubKey and sign an unsigned tx dict.

        Raises:
            Exception: Any failure; the adapter records it as REJECTED.
        """
        ...


@runtime_checkable
class MessageSigner(Protocol):
    """Interface for signing arbitrary message bytes."""

    @property
    def account(self) -> str:
        """XRPL r-address whose key produces the signatures."""
        ...

    @property
    def key_id(self) -> str:
        """Public key hex (safe for logging)."""
        ...

    def sign_message(self, message: bytes) -> str:
        """Sign message bytes and return the signature as hex."""
        ...


class WalletMessageSigner:
    """MessageSigner backed by an xrpl-py Wallet."""

    def __init__(self, wallet: Wallet) -> None:
        self._wallet = wallet

    @classmethod
    def from_seed(cls, seed: str) -> WalletMessageSigner:
        """Build a signer from a family seed ("s..." string)."""
        return cls(Wallet.from_seed(seed))

    @property
    def account(self) -> str:
        return self._wallet.classic_address

    @property
    def key_id(self) -> str:
        return self._wallet.public_key

    def sign_message(self, message: bytes) -> str:
        return keypairs.sign(message, self._wallet.private_key)

    def __repr__(self) -> str:
        return f"WalletMessageSigner(account={self.account!r})"


def verify_message(message: bytes, signature_hex: str, public_key: str) -> bool:
    """Check a hex signature over message bytes against a public key.

    Returns False for malformed hex rather than raising.
    """
    try:
        signature = bytes.fromhex(signature_hex)
    except ValueError:
        return False
    return keypairs.is_valid_message(message, signature, public_key)
