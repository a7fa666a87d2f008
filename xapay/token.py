"""Issued-token maintenance: trust, transfer, burn, balance."""

from __future__ import annotations

import logging

from xapay import adapter
from xapay.adapter import LedgerOutcome
from xapay.client import TrustLine, XRPLClient
from xapay.config import DEFAULT_CURRENCY_CODE, DEFAULT_ISSUER_ADDRESS
from xapay.errors import XApayError, classify_connection_error
from xapay.signer import XRPLSigner
from xapay.tx import plan_burn, plan_token_payment, plan_trust_set

logger = logging.getLogger(__name__)

DEFAULT_TRUST_LIMIT = "1000000"


class BalanceUnavailable(XApayError):
    """account_lines could not be answered."""

    def __init__(self, code: str, detail: str | None = None) -> None:
        super().__init__(f"{code}: {detail}" if detail else code)
        self.code = code
        self.detail = detail


async def issue_token(
    signer: XRPLSigner,
    client: XRPLClient,
    limit: str | int = DEFAULT_TRUST_LIMIT,
    *,
    issuer: str = DEFAULT_ISSUER_ADDRESS,
    currency: str = DEFAULT_CURRENCY_CODE,
) -> LedgerOutcome:
    """Open a trust line from the signer's account to the issuer."""
    tx = plan_trust_set(signer.account, limit, issuer, currency)
    return await adapter.submit(tx, client, signer)


async def send_token(
    signer: XRPLSigner,
    client: XRPLClient,
    destination: str,
    amount: str | int,
    *,
    issuer: str = DEFAULT_ISSUER_ADDRESS,
    currency: str = DEFAULT_CURRENCY_CODE,
) -> LedgerOutcome:
    """Transfer whole token units. Fractions raise InvalidInput."""
    tx = plan_token_payment(signer.account, destination, amount, issuer, currency)
    return await adapter.submit(tx, client, signer)


async def burn_token(
    signer: XRPLSigner,
    client: XRPLClient,
    amount: str | int,
    *,
    issuer: str = DEFAULT_ISSUER_ADDRESS,
    currency: str = DEFAULT_CURRENCY_CODE,
) -> LedgerOutcome:
    """Destroy whole token units by paying the black-hole account."""
    tx = plan_burn(signer.account, amount, issuer, currency)
    logger.info("burn: account=%s amount=%s", signer.account, tx["Amount"])
    return await adapter.submit(tx, client, signer)


async def check_balance(
    client: XRPLClient,
    address: str,
    *,
    currency: str | None = None,
) -> list[TrustLine]:
    """Return the account's trust lines, optionally for one currency.

    An unknown account has no lines.

    Raises:
        BalanceUnavailable: Connection or server error.
    """
    try:
        result = await client.account_lines(address)
    except Exception as exc:
        raise BalanceUnavailable(
            str(classify_connection_error(str(exc))), str(exc)
        ) from exc

    if result.error_code is not None:
        raise BalanceUnavailable(result.error_code, result.detail)

    lines = list(result.lines)
    if currency is not None:
        lines = [line for line in lines if line.currency == currency]
    return lines
