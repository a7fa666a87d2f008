"""
Tests for adapter submit() and confirm().

All tests use fake client + fake signer — no network calls.

Test plan:
- Submit: accepted → SUBMITTED with tx_hash/engine_result/key_id,
  rejected → FAILED with REJECTED, connection error → BACKEND_UNAVAILABLE,
  signing error → FAILED before any submission, server error code kept
- Confirm: validated tesSUCCESS → CONFIRMED, validated tec → FAILED,
  not found / not validated → DEFERRED, query error → FAILED
- Error mapping: tem/tef/tec/ter prefixes → REJECTED, unknown → UNKNOWN
"""

import pytest

from tests.fakes import (
    HOOK_ADDRESS,
    PAYER_ADDRESS,
    SAMPLE_KEY_ID,
    SAMPLE_SIGNED_BLOB,
    SAMPLE_TX_HASH,
    FakeClient,
    FakeSigner,
)
from xapay.adapter import OutcomeStatus, confirm, submit
from xapay.client import SubmitResult, TxStatusResult
from xapay.errors import LedgerErrorCode, classify_engine_result
from xapay.memo import encode_withdraw_payload
from xapay.tx import plan_invoke


def _tx() -> dict[str, object]:
    return plan_invoke(PAYER_ADDRESS, HOOK_ADDRESS, encode_withdraw_payload("10"))


class TestSubmit:
    @pytest.mark.asyncio
    async def test_accepted(self) -> None:
        outcome = await submit(_tx(), FakeClient(), FakeSigner())
        assert outcome.status == OutcomeStatus.SUBMITTED
        assert outcome.ok
        assert outcome.tx_hash == SAMPLE_TX_HASH
        assert outcome.engine_result == "tesSUCCESS"
        assert outcome.key_id == SAMPLE_KEY_ID
        assert outcome.error_code is None

    @pytest.mark.asyncio
    async def test_signer_gets_unsigned_tx(self) -> None:
        signer = FakeSigner()
        tx = _tx()
        await submit(tx, FakeClient(), signer)
        assert signer.sign_calls == [tx]

    @pytest.mark.asyncio
    async def test_client_gets_signed_blob(self) -> None:
        client = FakeClient()
        await submit(_tx(), client, FakeSigner())
        assert client.submit_calls == [SAMPLE_SIGNED_BLOB]

    @pytest.mark.asyncio
    async def test_rejected(self) -> None:
        client = FakeClient(
            submit_result=SubmitResult(
                accepted=False,
                tx_hash="b" * 64,
                engine_result="tecNO_DST",
                detail="Destination does not exist.",
            )
        )
        outcome = await submit(_tx(), client, FakeSigner())
        assert outcome.status == OutcomeStatus.FAILED
        assert not outcome.ok
        assert outcome.error_code == LedgerErrorCode.REJECTED
        assert outcome.tx_hash == "b" * 64
        assert outcome.detail == "engine_result=tecNO_DST; Destination does not exist."

    @pytest.mark.asyncio
    async def test_server_error_code_kept(self) -> None:
        client = FakeClient(
            submit_result=SubmitResult(accepted=False, error_code="SERVER_ERROR", detail="x")
        )
        outcome = await submit(_tx(), client, FakeSigner())
        assert outcome.error_code == "SERVER_ERROR"

    @pytest.mark.asyncio
    async def test_connection_error(self) -> None:
        client = FakeClient(should_raise=ConnectionError("refused"))
        outcome = await submit(_tx(), client, FakeSigner())
        assert outcome.status == OutcomeStatus.FAILED
        assert outcome.error_code == LedgerErrorCode.BACKEND_UNAVAILABLE
        assert "refused" in (outcome.detail or "")

    @pytest.mark.asyncio
    async def test_signing_error(self) -> None:
        client = FakeClient()
        signer = FakeSigner(should_raise=ValueError("no sequence"))
        outcome = await submit(_tx(), client, signer)
        assert outcome.status == OutcomeStatus.FAILED
        assert outcome.error_code == "REJECTED"
        assert client.submit_calls == []


class TestConfirm:
    @pytest.mark.asyncio
    async def test_confirmed(self) -> None:
        client = FakeClient(
            get_tx_result=TxStatusResult(
                found=True, validated=True, ledger_index=42, engine_result="tesSUCCESS"
            )
        )
        outcome = await confirm(SAMPLE_TX_HASH, client)
        assert outcome.status == OutcomeStatus.CONFIRMED
        assert outcome.ledger_index == 42
        assert client.get_tx_calls == [SAMPLE_TX_HASH]

    @pytest.mark.asyncio
    async def test_validated_failure(self) -> None:
        client = FakeClient(
            get_tx_result=TxStatusResult(
                found=True, validated=True, ledger_index=42, engine_result="tecHOOK_REJECTED"
            )
        )
        outcome = await confirm(SAMPLE_TX_HASH, client)
        assert outcome.status == OutcomeStatus.FAILED
        assert outcome.error_code == LedgerErrorCode.REJECTED

    @pytest.mark.asyncio
    async def test_not_found_deferred(self) -> None:
        outcome = await confirm(SAMPLE_TX_HASH, FakeClient())
        assert outcome.status == OutcomeStatus.DEFERRED

    @pytest.mark.asyncio
    async def test_not_validated_deferred(self) -> None:
        client = FakeClient(get_tx_result=TxStatusResult(found=True, validated=False))
        outcome = await confirm(SAMPLE_TX_HASH, client)
        assert outcome.status == OutcomeStatus.DEFERRED

    @pytest.mark.asyncio
    async def test_server_error(self) -> None:
        client = FakeClient(
            get_tx_result=TxStatusResult(found=False, error_code="SERVER_ERROR", detail="x")
        )
        outcome = await confirm(SAMPLE_TX_HASH, client)
        assert outcome.status == OutcomeStatus.FAILED
        assert outcome.error_code == "SERVER_ERROR"

    @pytest.mark.asyncio
    async def test_connection_error(self) -> None:
        client = FakeClient(should_raise=TimeoutError("slow"))
        outcome = await confirm(SAMPLE_TX_HASH, client)
        assert outcome.status == OutcomeStatus.FAILED
        assert outcome.error_code == LedgerErrorCode.BACKEND_UNAVAILABLE


class TestClassifyEngineResult:
    @pytest.mark.parametrize(
        "code", ["temBAD_FEE", "tefPAST_SEQ", "tecPATH_DRY", "terQUEUED"]
    )
    def test_rejected_prefixes(self, code: str) -> None:
        assert classify_engine_result(code) == LedgerErrorCode.REJECTED

    def test_none(self) -> None:
        assert classify_engine_result(None) == LedgerErrorCode.UNKNOWN

    def test_success_is_not_error(self) -> None:
        assert classify_engine_result("tesSUCCESS") == LedgerErrorCode.UNKNOWN

    def test_unknown(self) -> None:
        assert classify_engine_result("xyzWHAT") == LedgerErrorCode.UNKNOWN
