"""
Tests for allowance payment flows.

Test plan:
- charge_and_update_allowance: new cap is exact sum, memo carries the
  new cap + signature, Invoke Amount is the charge, signer mismatch and
  fractional charge rejected before anything is signed
- send_payment_with_allowance: memo is the allowance_payment payload,
  submitted by the operator, payee mismatch rejected
- withdraw_balance: withdraw memo, fractional amount rejected
"""

import pytest

from tests.fakes import (
    HOOK_ADDRESS,
    OPERATOR_ADDRESS,
    PAYER_ADDRESS,
    FakeClient,
    FakeMessageSigner,
    FakeSigner,
)
from xapay.adapter import OutcomeStatus
from xapay.allowance import AllowanceRecord, PaymentRequest, sign_allowance
from xapay.config import DEFAULT_ISSUER_ADDRESS
from xapay.errors import InvalidInput
from xapay.memo import decode_payload
from xapay.payments import (
    charge_and_update_allowance,
    send_payment_with_allowance,
    withdraw_balance,
)


def _memo_payload(tx: dict[str, object]) -> dict[str, object]:
    memos = tx["Memos"]
    return decode_payload(memos[0]["Memo"]["MemoData"])  # type: ignore[index]


class TestChargeAndUpdateAllowance:
    @pytest.mark.asyncio
    async def test_new_cap_exact(self) -> None:
        result = await charge_and_update_allowance(
            FakeSigner(),
            FakeMessageSigner(),
            FakeClient(),
            hook_address=HOOK_ADDRESS,
            operator_address=OPERATOR_ADDRESS,
            charge_amount="2000",
            remaining_allowance="5000",
        )
        assert result.authorization.record.cap_amount == "7000"
        assert result.outcome.status == OutcomeStatus.SUBMITTED

    @pytest.mark.asyncio
    async def test_memo_and_amount(self) -> None:
        message_signer = FakeMessageSigner(signature="beef")
        result = await charge_and_update_allowance(
            FakeSigner(),
            message_signer,
            FakeClient(),
            hook_address=HOOK_ADDRESS,
            operator_address=OPERATOR_ADDRESS,
            charge_amount="2000",
            remaining_allowance="5000",
        )
        assert _memo_payload(result.tx) == {
            "type": "update_allowance",
            "allowance": "7000",
            "signature": "BEEF",
        }
        assert result.tx["TransactionType"] == "Invoke"
        assert result.tx["Destination"] == HOOK_ADDRESS
        assert result.tx["Amount"] == {
            "currency": "JPY",
            "issuer": DEFAULT_ISSUER_ADDRESS,
            "value": "2000",
        }
        assert message_signer.messages == [
            f"{PAYER_ADDRESS}:{OPERATOR_ADDRESS}:7000".encode()
        ]

    @pytest.mark.asyncio
    async def test_signer_mismatch(self) -> None:
        with pytest.raises(InvalidInput, match="same account"):
            await charge_and_update_allowance(
                FakeSigner(account="rSomeoneElse"),
                FakeMessageSigner(),
                FakeClient(),
                hook_address=HOOK_ADDRESS,
                operator_address=OPERATOR_ADDRESS,
                charge_amount="2000",
                remaining_allowance="5000",
            )

    @pytest.mark.asyncio
    async def test_fractional_charge(self) -> None:
        message_signer = FakeMessageSigner()
        client = FakeClient()
        with pytest.raises(InvalidInput):
            await charge_and_update_allowance(
                FakeSigner(),
                message_signer,
                client,
                hook_address=HOOK_ADDRESS,
                operator_address=OPERATOR_ADDRESS,
                charge_amount="100.5",
                remaining_allowance="5000",
            )
        assert message_signer.messages == []
        assert client.submit_calls == []


class TestSendPaymentWithAllowance:
    def _request(self) -> PaymentRequest:
        record = AllowanceRecord(
            payer_address=PAYER_ADDRESS,
            payee_address=OPERATOR_ADDRESS,
            cap_amount="10000",
        )
        authorization = sign_allowance(record, FakeMessageSigner(signature="abc123"))
        return PaymentRequest(authorization=authorization, requested_amount="500")

    @pytest.mark.asyncio
    async def test_memo(self) -> None:
        operator = FakeSigner(account=OPERATOR_ADDRESS)
        result = await send_payment_with_allowance(
            operator, FakeClient(), hook_address=HOOK_ADDRESS, request=self._request()
        )
        assert result.tx["Account"] == OPERATOR_ADDRESS
        assert "Amount" not in result.tx
        assert _memo_payload(result.tx) == {
            "type": "allowance_payment",
            "user_address": PAYER_ADDRESS,
            "payment_amount": "500",
            "allowance": {"amount": "10000", "signature": "ABC123"},
        }
        assert operator.sign_calls == [result.tx]

    @pytest.mark.asyncio
    async def test_payee_mismatch(self) -> None:
        with pytest.raises(InvalidInput, match="payee"):
            await send_payment_with_allowance(
                FakeSigner(account="rNotTheOperator"),
                FakeClient(),
                hook_address=HOOK_ADDRESS,
                request=self._request(),
            )


class TestWithdrawBalance:
    @pytest.mark.asyncio
    async def test_memo(self) -> None:
        result = await withdraw_balance(
            FakeSigner(), FakeClient(), hook_address=HOOK_ADDRESS, amount="300"
        )
        assert _memo_payload(result.tx) == {"type": "withdraw", "amount": "300"}
        assert result.outcome.ok

    @pytest.mark.asyncio
    async def test_fractional(self) -> None:
        with pytest.raises(InvalidInput):
            await withdraw_balance(
                FakeSigner(), FakeClient(), hook_address=HOOK_ADDRESS, amount="100.5"
            )
