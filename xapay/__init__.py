"""
XApay — allowance payments on the Xahau ledger.

Public API:

    Pure layer (no I/O):
        - ``derive_seed()`` — wallet seed from eight numbers.
        - Allowance types and signing: ``AllowanceRecord``,
          ``AllowanceAuthorization``, ``PaymentRequest``,
          ``build_allowance_message``, ``sign_allowance``,
          ``raise_allowance``, ``verify_allowance``.
        - Memo payloads: ``encode_payment_payload``,
          ``encode_allowance_update_payload``, ``encode_withdraw_payload``,
          ``decode_payload``.
        - Amounts: ``parse_token_amount``, ``add_amounts``.
        - Transaction builders: ``plan_invoke``, ``plan_token_payment``,
          ``plan_burn``, ``plan_trust_set``.

    Impure layer (network I/O):
        - ``submit()`` / ``confirm()`` — one ledger attempt each.
        - Flows in ``xapay.payments`` and ``xapay.token``.

    Protocols (for dependency injection):
        - ``MessageSigner``, ``XRPLSigner``, ``XRPLClient``,
          ``JsonRpcTransport``.
"""

from xapay.adapter import LedgerOutcome, OutcomeStatus, confirm, submit
from xapay.allowance import (
    AllowanceAuthorization,
    AllowanceRecord,
    PaymentRequest,
    build_allowance_message,
    raise_allowance,
    sign_allowance,
    verify_allowance,
)
from xapay.amounts import add_amounts, parse_cap_amount, parse_token_amount
from xapay.client import (
    AccountLinesResult,
    SubmitResult,
    TrustLine,
    TxStatusResult,
    XRPLClient,
)
from xapay.config import NETWORKS, Network, Settings, get_network
from xapay.errors import (
    EncodingFailure,
    InvalidInput,
    LedgerErrorCode,
    SigningUnavailable,
    XApayError,
)
from xapay.jsonrpc_client import JsonRpcClient
from xapay.memo import (
    MAX_MEMO_BYTES,
    MEMO_FORMAT,
    TransportPayload,
    decode_payload,
    decode_payment_request,
    encode_allowance_update_payload,
    encode_payment_payload,
    encode_withdraw_payload,
)
from xapay.seed import SEED_ALPHABET, derive_seed, random_seed_inputs
from xapay.signer import (
    MessageSigner,
    SignResult,
    WalletMessageSigner,
    XRPLSigner,
    verify_message,
)
from xapay.transport import HttpxTransport, JsonRpcTransport
from xapay.tx import (
    issued_amount,
    plan_burn,
    plan_invoke,
    plan_token_payment,
    plan_trust_set,
)

__version__ = "0.1.0"

__all__ = [
    "AccountLinesResult",
    "AllowanceAuthorization",
    "AllowanceRecord",
    "EncodingFailure",
    "HttpxTransport",
    "InvalidInput",
    "JsonRpcClient",
    "JsonRpcTransport",
    "LedgerErrorCode",
    "LedgerOutcome",
    "MAX_MEMO_BYTES",
    "MEMO_FORMAT",
    "MessageSigner",
    "NETWORKS",
    "Network",
    "OutcomeStatus",
    "PaymentRequest",
    "SEED_ALPHABET",
    "Settings",
    "SignResult",
    "SigningUnavailable",
    "SubmitResult",
    "TransportPayload",
    "TrustLine",
    "TxStatusResult",
    "WalletMessageSigner",
    "XApayError",
    "XRPLClient",
    "XRPLSigner",
    "add_amounts",
    "build_allowance_message",
    "confirm",
    "decode_payload",
    "decode_payment_request",
    "derive_seed",
    "encode_allowance_update_payload",
    "encode_payment_payload",
    "encode_withdraw_payload",
    "get_network",
    "issued_amount",
    "parse_cap_amount",
    "parse_token_amount",
    "plan_burn",
    "plan_invoke",
    "plan_token_payment",
    "plan_trust_set",
    "raise_allowance",
    "random_seed_inputs",
    "sign_allowance",
    "submit",
    "verify_allowance",
    "verify_message",
]
