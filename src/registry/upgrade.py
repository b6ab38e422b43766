"""Upgrade lock and the delegate that honors it.

The lock is a one-way flag: false at construction, settable to true by the
principal, and never cleared. No method resets it. The UpgradeDelegate
stands in for the code-replacement machinery
around the registry; it consults ``is_locked()`` before every swap.
"""

from __future__ import annotations

import logging
from typing import Protocol, runtime_checkable

from .access_control import AccessControl
from .constants import EVENT_UPGRADED, EVENT_UPGRADES_LOCKED
from .errors import UpgradeLockedError
from .events import RegistryEvents


logger = logging.getLogger(__name__)


@runtime_checkable
class UpgradeGated(Protocol):
    """Something whose implementation swaps are gated by a lock."""

    def is_locked(self) -> bool: ...


class UpgradeLock:
    """Monotonic administrative flag."""

    _locked: bool

    def __init__(self, access: AccessControl, events: RegistryEvents) -> None:
        self._locked = False
        self._access = access
        self._events = events

    def is_locked(self) -> bool:
        return self._locked

    def set_locked(self, caller: str) -> None:
        """Lock upgrades forever.

        Idempotent: locking again changes nothing but re-emits the event.

        Raises:
            NotAuthorizedError: If caller is not the principal
        """
        self._access.require_principal(caller, "set_locked")
        if not self._locked:
            self._locked = True
            self._events.journal.record(lambda: setattr(self, "_locked", False))
            logger.info("Upgrades locked by %s", caller)
        self._events.emit(EVENT_UPGRADES_LOCKED, by=caller)


class UpgradeDelegate:
    """Tracks the active implementation version and refuses swaps once locked."""

    _version: str
    _history: list[str]

    def __init__(
        self,
        lock: UpgradeGated,
        access: AccessControl,
        events: RegistryEvents,
        initial_version: str = "1",
    ) -> None:
        self._lock = lock
        self._access = access
        self._events = events
        self._version = initial_version
        self._history = [initial_version]

    @property
    def version(self) -> str:
        """Currently active implementation version."""
        return self._version

    @property
    def history(self) -> list[str]:
        return list(self._history)

    def upgrade_to(self, caller: str, version: str) -> None:
        """Swap the active implementation.

        Raises:
            NotAuthorizedError: If caller is not the principal
            UpgradeLockedError: If upgrades have been locked
        """
        self._access.require_principal(caller, "upgrade_to")
        if self._lock.is_locked():
            raise UpgradeLockedError(
                "Upgrades are permanently locked", requested_version=version
            )

        previous = self._version
        self._version = version
        self._history.append(version)

        def undo() -> None:
            self._version = previous
            self._history.pop()

        self._events.journal.record(undo)
        self._events.emit(EVENT_UPGRADED, version=version, previous=previous)
