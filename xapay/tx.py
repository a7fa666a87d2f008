"""
XRPL transaction builders.

Each builder returns an unsigned transaction dict: pure, deterministic,
no secrets, no network calls. Sequence, Fee, LastLedgerSequence,
NetworkID and SigningPubKey are filled in by the XRPLSigner at submit
time and are NOT included here.

Builders:
    - ``plan_invoke`` — Invoke to a hook account carrying one memo,
      optionally with a token Amount (charge + allowance update).
    - ``plan_token_payment`` — issued-token Payment.
    - ``plan_burn`` — Payment to the black-hole account.
    - ``plan_trust_set`` — TrustSet towards the token issuer.
"""

from __future__ import annotations

from xapay.amounts import parse_token_amount
from xapay.config import BLACK_HOLE_ADDRESS
from xapay.errors import InvalidInput
from xapay.memo import TransportPayload


def _require_account(value: str, name: str) -> None:
    if not value:
        raise InvalidInput(f"{name} must be non-empty")


def issued_amount(value: str | int, issuer: str, currency: str) -> dict[str, str]:
    """Build an issued-currency Amount object (whole units only)."""
    _require_account(issuer, "issuer")
    if not currency:
        raise InvalidInput("currency must be non-empty")
    return {
        "currency": currency,
        "issuer": issuer,
        "value": parse_token_amount(value),
    }


def plan_invoke(
    account: str,
    destination: str,
    memo: TransportPayload,
    amount: dict[str, str] | None = None,
) -> dict[str, object]:
    """Build an unsigned Invoke carrying a hook memo.

    Args:
        account: Sender r-address.
        destination: Hook account r-address.
        memo: Encoded transport payload.
        amount: Optional issued amount (from ``issued_amount``).
    """
    _require_account(account, "account")
    _require_account(destination, "destination")

    tx: dict[str, object] = {
        "TransactionType": "Invoke",
        "Account": account,
        "Destination": destination,
    }
    if amount is not None:
        tx["Amount"] = amount
    tx["Memos"] = [memo.to_memo()]
    return tx


def plan_token_payment(
    account: str,
    destination: str,
    amount: str | int,
    issuer: str,
    currency: str,
) -> dict[str, object]:
    """Build an unsigned issued-token Payment."""
    _require_account(account, "account")
    _require_account(destination, "destination")
    return {
        "TransactionType": "Payment",
        "Account": account,
        "Destination": destination,
        "Amount": issued_amount(amount, issuer, currency),
    }


def plan_burn(
    account: str,
    amount: str | int,
    issuer: str,
    currency: str,
) -> dict[str, object]:
    """Build a Payment that sends tokens to the black-hole account."""
    return plan_token_payment(account, BLACK_HOLE_ADDRESS, amount, issuer, currency)


def plan_trust_set(
    account: str,
    limit: str | int,
    issuer: str,
    currency: str,
) -> dict[str, object]:
    """Build an unsigned TrustSet so ``account`` can hold the token."""
    _require_account(account, "account")
    return {
        "TransactionType": "TrustSet",
        "Account": account,
        "LimitAmount": issued_amount(limit, issuer, currency),
    }
