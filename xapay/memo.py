"""
Hook memo payloads (transport payloads).

Each payload is a JSON object carried in the ``MemoData`` field of an
Invoke transaction, with ``MemoFormat`` = "application/json". The hook
dispatches on ``type``:

    allowance_payment:
        {"type": "allowance_payment",
         "user_address": "<payer r-address>",
         "payment_amount": "<whole units>",
         "allowance": {"amount": "<cap>", "signature": "<UPPERCASE HEX>"}}

    update_allowance:
        {"type": "update_allowance",
         "allowance": "<new cap>",
         "signature": "<UPPERCASE HEX>"}

    withdraw:
        {"type": "withdraw", "amount": "<whole units>"}

Field names and nesting are the contract with the hook's parser.

Rules:
    - Compact JSON, keys in the order shown (matches JSON.stringify).
    - UTF-8, non-ASCII kept as-is. Content that cannot be encoded as
      UTF-8 raises EncodingFailure.
    - Max serialized size: 1024 bytes, the hook's memo buffer.
    - Hex form is uppercase.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

import jsonschema  # type: ignore[import-untyped]

from xapay.allowance import (
    AllowanceAuthorization,
    AllowanceRecord,
    PaymentRequest,
    normalize_signature,
)
from xapay.amounts import parse_token_amount
from xapay.errors import EncodingFailure, InvalidInput

MEMO_FORMAT = "application/json"

MEMO_FORMAT_HEX = MEMO_FORMAT.encode("utf-8").hex().upper()

# Hook-side memo buffer size.
MAX_MEMO_BYTES = 1024

PAYLOAD_ALLOWANCE_PAYMENT = "allowance_payment"
PAYLOAD_UPDATE_ALLOWANCE = "update_allowance"
PAYLOAD_WITHDRAW = "withdraw"

_AMOUNT = {"type": "string", "pattern": r"^[0-9]+(\.[0-9]+)?\Z"}
_WHOLE_AMOUNT = {"type": "string", "pattern": r"^[0-9]+\Z"}
_SIGNATURE = {"type": "string", "pattern": r"^[0-9A-F]+\Z"}

PAYLOAD_SCHEMAS: dict[str, dict[str, Any]] = {
    PAYLOAD_ALLOWANCE_PAYMENT: {
        "type": "object",
        "required": ["type", "user_address", "payment_amount", "allowance"],
        "properties": {
            "type": {"const": PAYLOAD_ALLOWANCE_PAYMENT},
            "user_address": {"type": "string", "minLength": 1},
            "payment_amount": _WHOLE_AMOUNT,
            "allowance": {
                "type": "object",
                "required": ["amount", "signature"],
                "properties": {"amount": _AMOUNT, "signature": _SIGNATURE},
                "additionalProperties": False,
            },
        },
        "additionalProperties": False,
    },
    PAYLOAD_UPDATE_ALLOWANCE: {
        "type": "object",
        "required": ["type", "allowance", "signature"],
        "properties": {
            "type": {"const": PAYLOAD_UPDATE_ALLOWANCE},
            "allowance": _AMOUNT,
            "signature": _SIGNATURE,
        },
        "additionalProperties": False,
    },
    PAYLOAD_WITHDRAW: {
        "type": "object",
        "required": ["type", "amount"],
        "properties": {
            "type": {"const": PAYLOAD_WITHDRAW},
            "amount": _WHOLE_AMOUNT,
        },
        "additionalProperties": False,
    },
}


@dataclass(frozen=True)
class TransportPayload:
    """A serialized hook memo.

    Attributes:
        payload: The JSON object, in wire key order.
        data: Its UTF-8 JSON bytes (the decoded MemoData).
    """

    payload: dict[str, Any]
    data: bytes

    @property
    def data_hex(self) -> str:
        """Uppercase hex of ``data``, for the MemoData field."""
        return self.data.hex().upper()

    def to_memo(self) -> dict[str, dict[str, str]]:
        """Build one XRPL ``Memos`` entry."""
        return {
            "Memo": {
                "MemoData": self.data_hex,
                "MemoFormat": MEMO_FORMAT_HEX,
            }
        }


# =========================================================================
# Encoding
# =========================================================================


def serialize_payload(payload: dict[str, Any]) -> TransportPayload:
    """Serialize a payload dict to compact UTF-8 JSON.

    Raises:
        EncodingFailure: Unserializable values, non-UTF-8-safe strings,
            or output larger than MAX_MEMO_BYTES.
    """
    try:
        text = json.dumps(
            payload,
            separators=(",", ":"),
            ensure_ascii=False,
            allow_nan=False,
        )
        data = text.encode("utf-8")
    except (TypeError, ValueError) as exc:
        raise EncodingFailure(f"payload is not serializable: {exc}") from exc

    if len(data) > MAX_MEMO_BYTES:
        raise EncodingFailure(
            f"memo payload exceeds {MAX_MEMO_BYTES} bytes (got {len(data)} bytes)"
        )
    return TransportPayload(payload=payload, data=data)


def encode_payment_payload(request: PaymentRequest) -> TransportPayload:
    """Payload for a payee redeeming part of an allowance."""
    authorization = request.authorization
    return serialize_payload(
        {
            "type": PAYLOAD_ALLOWANCE_PAYMENT,
            "user_address": authorization.record.payer_address,
            "payment_amount": request.requested_amount,
            "allowance": {
                "amount": authorization.record.cap_amount,
                "signature": authorization.signature,
            },
        }
    )


def encode_allowance_update_payload(
    record: AllowanceRecord,
    signature: str,
) -> TransportPayload:
    """Payload announcing a payer's new cap and its signature.

    The cap is taken from ``record`` as-is; computing it (old cap plus
    top-up) is the caller's job, see ``amounts.add_amounts``.
    """
    return serialize_payload(
        {
            "type": PAYLOAD_UPDATE_ALLOWANCE,
            "allowance": record.cap_amount,
            "signature": normalize_signature(signature),
        }
    )


def encode_withdraw_payload(amount: str | int) -> TransportPayload:
    """Payload asking the hook to return part of the deposited balance."""
    return serialize_payload(
        {
            "type": PAYLOAD_WITHDRAW,
            "amount": parse_token_amount(amount),
        }
    )


# =========================================================================
# Decoding
# =========================================================================


def decode_payload(data: bytes | str) -> dict[str, Any]:
    """Decode MemoData (raw bytes or hex) and validate it by ``type``.

    Raises:
        EncodingFailure: Bad hex, bad UTF-8/JSON, unknown type, or a
            shape that does not match the payload schema.
    """
    if isinstance(data, str):
        try:
            data = bytes.fromhex(data)
        except ValueError as exc:
            raise EncodingFailure(f"memo data is not hex: {exc}") from exc

    try:
        payload = json.loads(data.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise EncodingFailure(f"memo data is not UTF-8 JSON: {exc}") from exc

    if not isinstance(payload, dict):
        raise EncodingFailure("memo payload must be a JSON object")

    payload_type = payload.get("type")
    schema = PAYLOAD_SCHEMAS.get(payload_type) if isinstance(payload_type, str) else None
    if schema is None:
        raise EncodingFailure(f"unknown memo payload type: {payload_type!r}")

    try:
        jsonschema.validate(instance=payload, schema=schema)
    except jsonschema.ValidationError as exc:
        raise EncodingFailure(f"invalid {payload['type']} payload: {exc.message}") from exc
    return payload


def decode_payment_request(data: bytes | str, payee_address: str) -> PaymentRequest:
    """Rebuild a PaymentRequest from an allowance_payment memo.

    The payee is not in the memo; the hook takes it from the submitting
    account, so the caller supplies it here.
    """
    payload = decode_payload(data)
    if payload["type"] != PAYLOAD_ALLOWANCE_PAYMENT:
        raise EncodingFailure(
            f"expected {PAYLOAD_ALLOWANCE_PAYMENT} payload, got {payload['type']!r}"
        )
    allowance = payload["allowance"]
    try:
        record = AllowanceRecord(
            payer_address=payload["user_address"],
            payee_address=payee_address,
            cap_amount=allowance["amount"],
        )
        return PaymentRequest(
            authorization=AllowanceAuthorization(
                record=record, signature=allowance["signature"]
            ),
            requested_amount=payload["payment_amount"],
        )
    except InvalidInput as exc:
        raise EncodingFailure(f"invalid allowance_payment payload: {exc}") from exc
