"""
JSON-RPC implementation of XRPLClient.

Translates rippled-style submit / tx / account_lines responses into
result dataclasses. Xahau nodes speak the same JSON-RPC dialect.

No retry loops. No secrets. Transport exceptions propagate to the
caller (the adapter maps them to BACKEND_UNAVAILABLE).

Response conventions:
    - Success: {"result": {"status": "success", ...}}
    - Error:   {"result": {"status": "error", "error": "...", ...}}
"""

from __future__ import annotations

import itertools
import logging
from typing import Any

from xapay.client import AccountLinesResult, SubmitResult, TrustLine, TxStatusResult
from xapay.config import Settings
from xapay.transport import HttpxTransport, JsonRpcTransport

logger = logging.getLogger(__name__)

_request_ids = itertools.count(1)


class JsonRpcClient:
    """XRPLClient over JSON-RPC.

    Args:
        url: JSON-RPC endpoint (e.g. "https://xahau-test.net").
        transport: Injectable transport. Defaults to HttpxTransport.
    """

    def __init__(
        self,
        url: str,
        transport: JsonRpcTransport | None = None,
    ) -> None:
        self._url = url
        self._transport = transport or HttpxTransport()

    @classmethod
    def from_settings(cls, settings: Settings) -> JsonRpcClient:
        return cls(settings.rpc_url, HttpxTransport(timeout=settings.http_timeout))

    @property
    def url(self) -> str:
        return self._url

    async def _call(self, method: str, params: dict[str, Any]) -> dict[str, Any]:
        payload = {"method": method, "params": [params], "id": next(_request_ids)}
        logger.debug("jsonrpc: %s -> %s", method, self._url)
        return await self._transport.post_json(self._url, payload)

    async def submit(self, signed_tx_blob_hex: str) -> SubmitResult:
        response = await self._call("submit", {"tx_blob": signed_tx_blob_hex})
        return _parse_submit_response(response)

    async def get_tx(self, tx_hash: str) -> TxStatusResult:
        response = await self._call("tx", {"transaction": tx_hash, "binary": False})
        return _parse_tx_response(response)

    async def account_lines(self, address: str) -> AccountLinesResult:
        response = await self._call(
            "account_lines", {"account": address, "ledger_index": "current"}
        )
        return _parse_account_lines_response(response)


# =====================================================================
# Response parsing
# =====================================================================

# Server errors that mean "nothing there yet" rather than a failure.
_NOT_FOUND_ERRORS = frozenset({"txnNotFound", "actNotFound"})


def _unwrap(response: dict[str, Any]) -> tuple[dict[str, Any], str | None, str | None]:
    """Split a response into (result, error name, error detail)."""
    result = response.get("result", {})
    if result.get("status") != "error":
        return result, None, None
    error = result.get("error") or "unknown"
    return result, error, result.get("error_message") or error


def _parse_submit_response(response: dict[str, Any]) -> SubmitResult:
    result, error, detail = _unwrap(response)
    if error is not None:
        return SubmitResult(accepted=False, error_code="SERVER_ERROR", detail=detail)

    engine_result = result.get("engine_result")
    if engine_result is None:
        return SubmitResult(
            accepted=False,
            error_code="SERVER_ERROR",
            detail="no engine_result in submit response",
        )

    tx_json = result.get("tx_json")
    tx_hash = tx_json.get("hash") if isinstance(tx_json, dict) else None

    # Older servers omit "accepted"; tesSUCCESS and ter* count as queued.
    accepted = bool(result.get("accepted")) or (
        engine_result == "tesSUCCESS" or engine_result.startswith("ter")
    )
    return SubmitResult(
        accepted=accepted,
        tx_hash=tx_hash,
        engine_result=engine_result,
        detail=result.get("engine_result_message"),
    )


def _parse_tx_response(response: dict[str, Any]) -> TxStatusResult:
    result, error, detail = _unwrap(response)
    if error in _NOT_FOUND_ERRORS:
        return TxStatusResult(found=False)
    if error is not None:
        return TxStatusResult(found=False, error_code="SERVER_ERROR", detail=detail)

    meta = result.get("meta")
    validated = bool(result.get("validated", False))
    return TxStatusResult(
        found=True,
        validated=validated,
        ledger_index=result.get("ledger_index") if validated else None,
        engine_result=meta.get("TransactionResult") if isinstance(meta, dict) else None,
    )


def _parse_account_lines_response(response: dict[str, Any]) -> AccountLinesResult:
    result, error, detail = _unwrap(response)
    if error in _NOT_FOUND_ERRORS:
        return AccountLinesResult(found=False)
    if error is not None:
        return AccountLinesResult(found=False, error_code="SERVER_ERROR", detail=detail)

    lines = tuple(
        TrustLine(
            account=line.get("account", ""),
            currency=line.get("currency", ""),
            balance=line.get("balance", "0"),
            limit=line.get("limit", "0"),
        )
        for line in result.get("lines", [])
        if isinstance(line, dict)
    )
    return AccountLinesResult(found=True, lines=lines)
