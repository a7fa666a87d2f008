"""
Allowance authorizations — a payer's signed spending cap for a payee.

Signed message (wire contract, shared with the payment hook):

    "<payer r-address>:<payee r-address>:<cap amount>"   (UTF-8)

Field order and the ":" delimiter cannot change without invalidating
every authorization already issued.

Lifecycle:
    An authorization is created once per (payer, payee, cap) and may back
    many payment requests until the cap is spent. Raising the cap means
    signing a new record (``raise_allowance``). Spent-amount bookkeeping
    and cap enforcement live in the hook, not here.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, replace

from xapay.amounts import add_amounts, parse_cap_amount, parse_token_amount
from xapay.errors import InvalidInput, SigningUnavailable
from xapay.signer import MessageSigner, verify_message

logger = logging.getLogger(__name__)

MESSAGE_DELIMITER = ":"

_HEX_RE = re.compile(r"[0-9A-Fa-f]+")


def _validate_address(value: object, name: str) -> str:
    if not isinstance(value, str) or not value:
        raise InvalidInput(f"{name} must be a non-empty string, got: {value!r}")
    if MESSAGE_DELIMITER in value:
        raise InvalidInput(f"{name} must not contain {MESSAGE_DELIMITER!r}: {value!r}")
    return value


def normalize_signature(signature: object) -> str:
    """Uppercase a hex signature, rejecting empty or non-hex input."""
    if not isinstance(signature, str) or not _HEX_RE.fullmatch(signature):
        raise InvalidInput(f"signature must be non-empty hex, got: {signature!r}")
    return signature.upper()


# =========================================================================
# Types
# =========================================================================


@dataclass(frozen=True)
class AllowanceRecord:
    """The maximum cumulative amount a payer lets a payee draw.

    ``cap_amount`` is kept exactly as given (after validation) because
    it is part of the signed message.
    """

    payer_address: str
    payee_address: str
    cap_amount: str

    def __post_init__(self) -> None:
        _validate_address(self.payer_address, "payer_address")
        _validate_address(self.payee_address, "payee_address")
        if isinstance(self.cap_amount, int) and not isinstance(self.cap_amount, bool):
            object.__setattr__(self, "cap_amount", str(self.cap_amount))
        parse_cap_amount(self.cap_amount)


@dataclass(frozen=True)
class AllowanceAuthorization:
    """A signed allowance record.

    Bearer capability: whoever holds it can present it for redemption up
    to the cap. Store and transmit it with the same care as a credential.
    It is deliberately free of behavior beyond validation.
    """

    record: AllowanceRecord
    signature: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "signature", normalize_signature(self.signature))

    def __repr__(self) -> str:
        return (
            f"AllowanceAuthorization(record={self.record!r}, "
            f"signature=<{len(self.signature) // 2} bytes>)"
        )


@dataclass(frozen=True)
class PaymentRequest:
    """A payee's request to draw ``requested_amount`` under an authorization.

    The amount is not checked against the cap; the hook enforces it
    against its own spent-amount state.
    """

    authorization: AllowanceAuthorization
    requested_amount: str

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "requested_amount",
            parse_token_amount(self.requested_amount, "requested_amount"),
        )


# =========================================================================
# Operations
# =========================================================================


def build_allowance_message(record: AllowanceRecord) -> bytes:
    """Return the exact bytes the payer signs."""
    return MESSAGE_DELIMITER.join(
        (record.payer_address, record.payee_address, record.cap_amount)
    ).encode("utf-8")


def sign_allowance(
    record: AllowanceRecord,
    signer: MessageSigner | None,
) -> AllowanceAuthorization:
    """Sign an allowance record with the payer's key.

    Raises:
        SigningUnavailable: If signer is None or raises.
        InvalidInput: If the signer returns something other than hex.
    """
    if signer is None:
        raise SigningUnavailable("no message signer configured")

    message = build_allowance_message(record)
    try:
        signature = signer.sign_message(message)
    except Exception as exc:
        raise SigningUnavailable(f"message signing failed: {exc}") from exc

    logger.info(
        "allowance signed: payer=%s payee=%s cap=%s",
        record.payer_address,
        record.payee_address,
        record.cap_amount,
    )
    return AllowanceAuthorization(record=record, signature=signature)


def raise_allowance(
    record: AllowanceRecord,
    top_up: str | int,
    signer: MessageSigner | None,
) -> AllowanceAuthorization:
    """Re-sign a record whose cap is increased by ``top_up``.

    The new cap is the exact decimal sum of the current cap and the
    top-up. No remaining-balance tracking happens here.
    """
    new_record = replace(record, cap_amount=add_amounts(record.cap_amount, top_up))
    return sign_allowance(new_record, signer)


def verify_allowance(authorization: AllowanceAuthorization, public_key: str) -> bool:
    """Check an authorization's signature against the payer's public key."""
    return verify_message(
        build_allowance_message(authorization.record),
        authorization.signature,
        public_key,
    )
