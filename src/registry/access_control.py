"""Single-principal access control.

One principal (the registry's administrative owner) holds authority over
the upgrade lock and fund withdrawal. Administrative operations call
``require_principal`` and never bypass it.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from .constants import EVENT_PRINCIPAL_TRANSFERRED, NO_PRINCIPAL
from .errors import InvalidTargetError, NotAuthorizedError
from .events import RegistryEvents


@runtime_checkable
class AccessControlled(Protocol):
    """Something administered by a single principal."""

    def current_principal(self) -> str: ...

    def is_principal(self, caller: str) -> bool: ...


class AccessControl:
    """Holds and checks the administrative principal."""

    _principal: str
    _events: RegistryEvents

    def __init__(self, principal: str, events: RegistryEvents) -> None:
        if not principal:
            raise ValueError("principal must be a non-empty id")
        self._principal = principal
        self._events = events

    def current_principal(self) -> str:
        return self._principal

    def is_principal(self, caller: str) -> bool:
        return bool(caller) and caller == self._principal

    def require_principal(self, caller: str, action: str = "this operation") -> None:
        """Raise unless caller is the principal.

        Raises:
            NotAuthorizedError: If caller is not the principal
        """
        if not self.is_principal(caller):
            raise NotAuthorizedError(
                f"Only the principal may perform {action}",
                caller=caller,
                action=action,
            )

    def transfer_principal(self, caller: str, new_principal: str) -> None:
        """Hand administrative authority to another principal.

        Raises:
            NotAuthorizedError: If caller is not the principal
            InvalidTargetError: If new_principal is empty
        """
        self.require_principal(caller, "transfer_principal")
        if new_principal == NO_PRINCIPAL:
            raise InvalidTargetError("New principal must be a non-empty id")

        previous = self._principal
        self._principal = new_principal
        self._events.journal.record(lambda: setattr(self, "_principal", previous))
        self._events.emit(
            EVENT_PRINCIPAL_TRANSFERRED, previous=previous, new=new_principal
        )
