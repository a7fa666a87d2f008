"""
Ledger adapter.

Composes planned transactions (tx.py) with the signer and client
boundaries:

    - ``submit()`` — sign + submit once. Returns a LedgerOutcome.
    - ``confirm()`` — query validation status once. Returns a LedgerOutcome.

Every attempt produces an outcome, even on failure. No retries and no
polling loops; backoff is the caller's concern. Secrets never appear
in outcomes or logs.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum

from xapay.client import XRPLClient
from xapay.errors import (
    LedgerErrorCode,
    classify_connection_error,
    classify_engine_result,
)
from xapay.signer import XRPLSigner

logger = logging.getLogger(__name__)


class OutcomeStatus(StrEnum):
    """Status of a ledger interaction."""

    SUBMITTED = "SUBMITTED"
    CONFIRMED = "CONFIRMED"
    FAILED = "FAILED"
    DEFERRED = "DEFERRED"


@dataclass(frozen=True)
class LedgerOutcome:
    """What happened to one submit or confirm attempt.

    Attributes:
        status: SUBMITTED (queued), CONFIRMED (validated), DEFERRED (not
            yet validated or not found), FAILED.
        tx_hash: Transaction hash when known.
        engine_result: Engine result code when known.
        ledger_index: Validated ledger index (CONFIRMED only).
        key_id: Public identifier of the signing key (submit only).
        error_code: LedgerErrorCode value when status is FAILED.
        detail: Diagnostics.
    """

    status: OutcomeStatus
    tx_hash: str | None = None
    engine_result: str | None = None
    ledger_index: int | None = None
    key_id: str | None = None
    error_code: str | None = None
    detail: str | None = None

    @property
    def ok(self) -> bool:
        return self.status in (OutcomeStatus.SUBMITTED, OutcomeStatus.CONFIRMED)


async def submit(
    tx: dict[str, object],
    client: XRPLClient,
    signer: XRPLSigner,
) -> LedgerOutcome:
    """Sign and submit an unsigned transaction dict.

    Returns:
        LedgerOutcome with status SUBMITTED if the node accepted the
        blob, FAILED otherwise (signing error, connection error, or
        engine rejection).
    """
    tx_type = tx.get("TransactionType")

    try:
        sign_result = signer.sign(tx)
    except Exception as exc:
        logger.warning("submit: signing %s failed: %s", tx_type, exc)
        return LedgerOutcome(
            status=OutcomeStatus.FAILED,
            error_code=str(LedgerErrorCode.REJECTED),
            detail=f"signing failed: {exc}",
        )

    try:
        result = await client.submit(sign_result.signed_tx_blob_hex)
    except Exception as exc:
        logger.warning("submit: %s did not reach the ledger: %s", tx_type, exc)
        return LedgerOutcome(
            status=OutcomeStatus.FAILED,
            tx_hash=sign_result.tx_hash,
            key_id=sign_result.key_id,
            error_code=str(classify_connection_error(str(exc))),
            detail=f"submit failed: {exc}",
        )

    tx_hash = result.tx_hash or sign_result.tx_hash

    if result.accepted:
        logger.info(
            "submit: %s accepted tx_hash=%s engine_result=%s",
            tx_type,
            tx_hash,
            result.engine_result,
        )
        return LedgerOutcome(
            status=OutcomeStatus.SUBMITTED,
            tx_hash=tx_hash,
            engine_result=result.engine_result,
            key_id=sign_result.key_id,
        )

    detail_parts: list[str] = []
    if result.engine_result:
        detail_parts.append(f"engine_result={result.engine_result}")
    if result.detail:
        detail_parts.append(result.detail)

    logger.warning(
        "submit: %s rejected tx_hash=%s engine_result=%s",
        tx_type,
        tx_hash,
        result.engine_result,
    )
    return LedgerOutcome(
        status=OutcomeStatus.FAILED,
        tx_hash=tx_hash,
        engine_result=result.engine_result,
        key_id=sign_result.key_id,
        error_code=result.error_code or str(classify_engine_result(result.engine_result)),
        detail="; ".join(detail_parts) if detail_parts else None,
    )


async def confirm(tx_hash: str, client: XRPLClient) -> LedgerOutcome:
    """Check once whether a submitted transaction is validated.

    Returns:
        CONFIRMED if validated with tesSUCCESS, FAILED if validated with
        any other result or if the query failed, DEFERRED otherwise.
    """
    try:
        result = await client.get_tx(tx_hash)
    except Exception as exc:
        logger.warning("confirm: tx %s query failed: %s", tx_hash, exc)
        return LedgerOutcome(
            status=OutcomeStatus.FAILED,
            tx_hash=tx_hash,
            error_code=str(classify_connection_error(str(exc))),
            detail=f"get_tx failed: {exc}",
        )

    if result.error_code is not None:
        return LedgerOutcome(
            status=OutcomeStatus.FAILED,
            tx_hash=tx_hash,
            error_code=result.error_code,
            detail=result.detail,
        )

    if not result.found or not result.validated:
        return LedgerOutcome(status=OutcomeStatus.DEFERRED, tx_hash=tx_hash)

    if result.engine_result != "tesSUCCESS":
        return LedgerOutcome(
            status=OutcomeStatus.FAILED,
            tx_hash=tx_hash,
            engine_result=result.engine_result,
            ledger_index=result.ledger_index,
            error_code=str(classify_engine_result(result.engine_result)),
            detail=f"engine_result={result.engine_result}",
        )

    logger.info("confirm: tx %s validated in ledger %s", tx_hash, result.ledger_index)
    return LedgerOutcome(
        status=OutcomeStatus.CONFIRMED,
        tx_hash=tx_hash,
        engine_result=result.engine_result,
        ledger_index=result.ledger_index,
    )
