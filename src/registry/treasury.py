"""Funds held by the registry.

Deposits are accepted unconditionally. Withdrawal pays the whole balance to
the current principal through a PayoutChannel; if the channel reports
failure the withdrawal aborts and the balance is restored.
"""

from __future__ import annotations

import logging
from typing import Protocol, runtime_checkable

from .access_control import AccessControl
from .constants import EVENT_RECEIVED, EVENT_WITHDRAWN
from .errors import TransferFailedError
from .events import RegistryEvents


logger = logging.getLogger(__name__)


@runtime_checkable
class PayoutChannel(Protocol):
    """Outward payment call. Returns True on success."""

    def send(self, to_id: str, amount: int) -> bool: ...


class InMemoryPayouts:
    """Default payout channel crediting an in-memory map."""

    def __init__(self) -> None:
        self.paid: dict[str, int] = {}

    def send(self, to_id: str, amount: int) -> bool:
        self.paid[to_id] = self.paid.get(to_id, 0) + amount
        return True

    def total_paid(self, to_id: str) -> int:
        return self.paid.get(to_id, 0)


class Treasury:
    """Balance of base units held by the registry."""

    _balance: int

    def __init__(
        self,
        access: AccessControl,
        events: RegistryEvents,
        payouts: PayoutChannel | None = None,
    ) -> None:
        self._balance = 0
        self._access = access
        self._events = events
        self.payouts: PayoutChannel = payouts if payouts is not None else InMemoryPayouts()

    @property
    def balance(self) -> int:
        return self._balance

    def _set_balance(self, value: int) -> None:
        previous = self._balance
        self._balance = value
        self._events.journal.record(lambda: setattr(self, "_balance", previous))

    def credit(self, amount: int) -> None:
        """Add a payment that arrived with a registry call."""
        if amount < 0:
            raise ValueError(f"amount cannot be negative: {amount}")
        if amount:
            self._set_balance(self._balance + amount)

    def receive(self, sender: str, amount: int) -> None:
        """Accept a plain deposit."""
        self.credit(amount)
        self._events.emit(EVENT_RECEIVED, sender=sender, amount=amount)

    def withdraw(self, caller: str) -> int:
        """Pay the full balance to the principal.

        Returns:
            The amount paid out.

        Raises:
            NotAuthorizedError: If caller is not the principal
            TransferFailedError: If the payout channel reports failure
        """
        self._access.require_principal(caller, "withdraw")
        amount = self._balance
        to_id = self._access.current_principal()

        with self._events.journal.transaction():
            self._set_balance(0)
            if not self.payouts.send(to_id, amount):
                logger.warning("Payout of %d to %s failed", amount, to_id)
                raise TransferFailedError(
                    f"Payout of {amount} to {to_id} failed", to_id=to_id, amount=amount
                )
            self._events.emit(EVENT_WITHDRAWN, to_id=to_id, amount=amount)
        return amount
