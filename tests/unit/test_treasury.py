"""Unit tests for funds handling and access control."""

from __future__ import annotations

from typing import Callable

import pytest

from src.registry import ColorRegistry
from src.registry.constants import (
    EVENT_PRINCIPAL_TRANSFERRED,
    EVENT_RECEIVED,
    EVENT_WITHDRAWN,
)
from src.registry.errors import (
    InvalidTargetError,
    NotAuthorizedError,
    TransferFailedError,
)
from src.registry.treasury import InMemoryPayouts
from tests.testing_utils import ALICE, BOB, PRINCIPAL, FailingPayouts


class TestDeposits:
    """Deposits are accepted unconditionally."""

    def test_receive(self, registry: ColorRegistry) -> None:
        registry.receive(BOB, 42)
        assert registry.balance == 42
        assert registry.events.of_type(EVENT_RECEIVED)[0]["sender"] == BOB

    def test_create_payments_accumulate(
        self, registry: ColorRegistry, create: Callable[..., int]
    ) -> None:
        create("123456")
        create("FF0000")
        expected = registry.required_payment("123456") + registry.required_payment("FF0000")
        assert registry.balance == expected
        # Payments made with a create are not plain deposits
        assert registry.events.of_type(EVENT_RECEIVED) == []


class TestWithdraw:
    """Only the principal withdraws; failures restore the balance."""

    def test_withdraw_pays_principal(self, registry: ColorRegistry) -> None:
        registry.receive(BOB, 100)
        assert registry.withdraw(PRINCIPAL) == 100
        assert registry.balance == 0
        assert isinstance(registry.treasury.payouts, InMemoryPayouts)
        assert registry.treasury.payouts.total_paid(PRINCIPAL) == 100
        assert registry.events.of_type(EVENT_WITHDRAWN)[0]["amount"] == 100

    def test_non_principal_cannot_withdraw(self, registry: ColorRegistry) -> None:
        registry.receive(BOB, 100)
        with pytest.raises(NotAuthorizedError):
            registry.withdraw(ALICE)
        assert registry.balance == 100

    def test_failed_payout_restores_balance(self) -> None:
        payouts = FailingPayouts()
        registry = ColorRegistry(PRINCIPAL, payouts=payouts)
        registry.receive(BOB, 100)

        with pytest.raises(TransferFailedError) as exc_info:
            registry.withdraw(PRINCIPAL)

        assert exc_info.value.retriable is True
        assert payouts.attempts == [(PRINCIPAL, 100)]
        assert registry.balance == 100
        assert registry.events.of_type(EVENT_WITHDRAWN) == []

    def test_direct_treasury_withdraw_is_atomic(self) -> None:
        """The treasury opens its own transaction when called directly."""
        registry = ColorRegistry(PRINCIPAL, payouts=FailingPayouts())
        registry.treasury.receive(BOB, 5)
        with pytest.raises(TransferFailedError):
            registry.treasury.withdraw(PRINCIPAL)
        assert registry.treasury.balance == 5

    def test_withdraw_goes_to_current_principal(self, registry: ColorRegistry) -> None:
        registry.receive(BOB, 10)
        registry.transfer_principal(PRINCIPAL, ALICE)
        registry.withdraw(ALICE)
        assert registry.treasury.payouts.total_paid(ALICE) == 10  # type: ignore[attr-defined]

    def test_negative_deposit_rejected(self, registry: ColorRegistry) -> None:
        with pytest.raises(ValueError):
            registry.receive(BOB, -1)


class TestAccessControl:
    """Single-principal authorization."""

    def test_current_principal(self, registry: ColorRegistry) -> None:
        assert registry.current_principal() == PRINCIPAL
        assert registry.is_principal(PRINCIPAL)
        assert not registry.is_principal(ALICE)
        assert not registry.is_principal("")

    def test_transfer_principal(self, registry: ColorRegistry) -> None:
        registry.transfer_principal(PRINCIPAL, ALICE)
        assert registry.current_principal() == ALICE
        event = registry.events.of_type(EVENT_PRINCIPAL_TRANSFERRED)[0]
        assert event["previous"] == PRINCIPAL
        assert event["new"] == ALICE

    def test_only_principal_can_transfer_principal(self, registry: ColorRegistry) -> None:
        with pytest.raises(NotAuthorizedError):
            registry.transfer_principal(ALICE, ALICE)
        assert registry.current_principal() == PRINCIPAL

    def test_empty_new_principal_rejected(self, registry: ColorRegistry) -> None:
        with pytest.raises(InvalidTargetError):
            registry.transfer_principal(PRINCIPAL, "")

    def test_empty_initial_principal_rejected(self) -> None:
        with pytest.raises(ValueError):
            ColorRegistry("")
