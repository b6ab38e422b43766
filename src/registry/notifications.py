"""Ownership-transfer notification collaborator.

A principal that has a registered TokenReceiver is a programmable account.
When an entry lands on a programmable account (creation or transfer), the
registry calls the receiver after the ledger effects are applied. The
receiver may call back into the registry; it sees the new owner already in
place. A falsy answer rejects the entry and the whole operation rolls back.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from .errors import NotificationRejectedError


@runtime_checkable
class TokenReceiver(Protocol):
    """Programmable account able to accept (or refuse) incoming entries."""

    def on_token_received(
        self, operator: str, from_id: str, to_id: str, token_id: int
    ) -> bool: ...


class ReceiverDirectory:
    """Maps principal ids to their TokenReceiver."""

    _receivers: dict[str, TokenReceiver]

    def __init__(self) -> None:
        self._receivers = {}

    def register(self, principal_id: str, receiver: TokenReceiver) -> None:
        """Mark a principal as programmable."""
        if not isinstance(receiver, TokenReceiver):
            raise TypeError(
                f"{type(receiver).__name__} does not implement on_token_received"
            )
        self._receivers[principal_id] = receiver

    def unregister(self, principal_id: str) -> bool:
        return self._receivers.pop(principal_id, None) is not None

    def is_programmable(self, principal_id: str) -> bool:
        return principal_id in self._receivers

    def check(self, operator: str, from_id: str, to_id: str, token_id: int) -> None:
        """Ask to_id's receiver whether it accepts the entry.

        Plain (non-programmable) principals always accept. Exceptions raised
        by the receiver propagate unchanged.

        Raises:
            NotificationRejectedError: If the receiver answers falsy
        """
        receiver = self._receivers.get(to_id)
        if receiver is None:
            return
        if not receiver.on_token_received(operator, from_id, to_id, token_id):
            raise NotificationRejectedError(
                f"{to_id} refused color {token_id}",
                operator=operator,
                from_id=from_id,
                to_id=to_id,
                token_id=token_id,
            )
