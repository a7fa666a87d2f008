"""
XApay error types and XRPL engine result mapping.

Codec errors are raised immediately and never retried:
    - ``InvalidInput`` — malformed seed inputs, amounts, addresses.
    - ``SigningUnavailable`` — message signer missing or failing.
    - ``EncodingFailure`` — a memo payload cannot be serialized/decoded.

Ledger errors are NOT raised. Submission and status queries capture
them in ``LedgerOutcome`` with a coarse ``LedgerErrorCode``.

XRPL engine result prefixes:
    - tes: success (tesSUCCESS)
    - tec: claimed cost (tecPATH_DRY, tecNO_DST, etc.) — tx included but "failed"
    - tef: local failure (tefPAST_SEQ, etc.) — not forwarded
    - tem: malformed (temBAD_FEE, etc.) — not forwarded
    - ter: retry (terQUEUED, etc.) — maybe later
"""

from __future__ import annotations

from enum import StrEnum


class XApayError(Exception):
    """Base class for all XApay errors."""


class InvalidInput(XApayError, ValueError):
    """Input failed validation (wrong count, type, or amount format)."""


class SigningUnavailable(XApayError):
    """The message signer is absent or raised while signing."""


class EncodingFailure(XApayError, ValueError):
    """A transport payload could not be encoded or decoded."""


class LedgerErrorCode(StrEnum):
    """Error taxonomy for ledger outcomes."""

    BACKEND_UNAVAILABLE = "BACKEND_UNAVAILABLE"
    REJECTED = "REJECTED"
    UNKNOWN = "UNKNOWN"


# Coarse prefix-based mapping.
_PREFIX_MAP: dict[str, LedgerErrorCode] = {
    "tem": LedgerErrorCode.REJECTED,
    "tef": LedgerErrorCode.REJECTED,
    "tec": LedgerErrorCode.REJECTED,
    "ter": LedgerErrorCode.REJECTED,
}


def classify_engine_result(engine_result: str | None) -> LedgerErrorCode:
    """Map an XRPL engine result code to a LedgerErrorCode.

    Args:
        engine_result: Engine result string (e.g. "temBAD_FEE").
            None means the engine never responded.

    Returns:
        LedgerErrorCode. UNKNOWN for unrecognized codes, for None,
        and for tesSUCCESS (which is not an error).
    """
    if engine_result is None or engine_result == "tesSUCCESS":
        return LedgerErrorCode.UNKNOWN

    for prefix, code in _PREFIX_MAP.items():
        if engine_result.startswith(prefix):
            return code

    return LedgerErrorCode.UNKNOWN


def classify_connection_error(detail: str | None = None) -> LedgerErrorCode:
    """Classify a failure that never reached the ledger node."""
    return LedgerErrorCode.BACKEND_UNAVAILABLE
