"""
Allowance payment flows against the payment hook.

    - ``charge_and_update_allowance`` — payer deposits tokens and raises
      the operator's cap in one Invoke.
    - ``send_payment_with_allowance`` — operator redeems part of a cap
      with the payer's pre-signed authorization.
    - ``withdraw_balance`` — payer takes deposited tokens back.

Each flow plans, signs and submits exactly one transaction and returns
the LedgerOutcome next to what it built. Confirmation is a separate
``adapter.confirm`` call.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from xapay import adapter
from xapay.adapter import LedgerOutcome
from xapay.allowance import (
    AllowanceAuthorization,
    AllowanceRecord,
    PaymentRequest,
    raise_allowance,
)
from xapay.amounts import parse_token_amount
from xapay.client import XRPLClient
from xapay.config import DEFAULT_CURRENCY_CODE, DEFAULT_ISSUER_ADDRESS
from xapay.errors import InvalidInput
from xapay.memo import (
    encode_allowance_update_payload,
    encode_payment_payload,
    encode_withdraw_payload,
)
from xapay.signer import MessageSigner, XRPLSigner
from xapay.tx import issued_amount, plan_invoke

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AllowanceUpdate:
    """Result of charge_and_update_allowance().

    ``authorization`` is the new bearer token; keep it confidential.
    """

    authorization: AllowanceAuthorization
    tx: dict[str, object]
    outcome: LedgerOutcome


@dataclass(frozen=True)
class HookInvocation:
    """An Invoke sent to the hook and its outcome."""

    tx: dict[str, object]
    outcome: LedgerOutcome


async def charge_and_update_allowance(
    signer: XRPLSigner,
    message_signer: MessageSigner,
    client: XRPLClient,
    *,
    hook_address: str,
    operator_address: str,
    charge_amount: str | int,
    remaining_allowance: str | int,
    issuer: str = DEFAULT_ISSUER_ADDRESS,
    currency: str = DEFAULT_CURRENCY_CODE,
) -> AllowanceUpdate:
    """Deposit ``charge_amount`` and raise the operator's cap by the same.

    The new cap is remaining_allowance + charge_amount, computed with
    exact decimal arithmetic and re-signed by the payer.

    Raises:
        InvalidInput: Bad amounts, or the two signers belong to
            different accounts.
        SigningUnavailable: The message signer failed.
    """
    if signer.account != message_signer.account:
        raise InvalidInput(
            f"transaction signer {signer.account} and message signer "
            f"{message_signer.account} must be the same account"
        )
    charge = parse_token_amount(charge_amount, "charge_amount")

    current = AllowanceRecord(
        payer_address=signer.account,
        payee_address=operator_address,
        cap_amount=str(remaining_allowance),
    )
    authorization = raise_allowance(current, charge, message_signer)
    memo = encode_allowance_update_payload(authorization.record, authorization.signature)

    tx = plan_invoke(
        signer.account,
        hook_address,
        memo,
        amount=issued_amount(charge, issuer, currency),
    )
    logger.info(
        "charge: account=%s charge=%s new_cap=%s",
        signer.account,
        charge,
        authorization.record.cap_amount,
    )
    outcome = await adapter.submit(tx, client, signer)
    return AllowanceUpdate(authorization=authorization, tx=tx, outcome=outcome)


async def send_payment_with_allowance(
    operator_signer: XRPLSigner,
    client: XRPLClient,
    *,
    hook_address: str,
    request: PaymentRequest,
) -> HookInvocation:
    """Have the operator draw ``request.requested_amount`` from the hook.

    Raises:
        InvalidInput: If the authorization names a different payee.
    """
    payee = request.authorization.record.payee_address
    if payee != operator_signer.account:
        raise InvalidInput(
            f"authorization payee {payee} does not match operator {operator_signer.account}"
        )

    tx = plan_invoke(operator_signer.account, hook_address, encode_payment_payload(request))
    logger.info(
        "allowance payment: payer=%s amount=%s",
        request.authorization.record.payer_address,
        request.requested_amount,
    )
    outcome = await adapter.submit(tx, client, operator_signer)
    return HookInvocation(tx=tx, outcome=outcome)


async def withdraw_balance(
    signer: XRPLSigner,
    client: XRPLClient,
    *,
    hook_address: str,
    amount: str | int,
) -> HookInvocation:
    """Ask the hook to return ``amount`` of the deposited balance."""
    tx = plan_invoke(signer.account, hook_address, encode_withdraw_payload(amount))
    logger.info("withdraw: account=%s", signer.account)
    outcome = await adapter.submit(tx, client, signer)
    return HookInvocation(tx=tx, outcome=outcome)
