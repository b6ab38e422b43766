"""Ownership/name ledger for color entries.

Tracks, per identifier, the owning principal and the human-chosen name.
An entry exists iff it has an owner; ``exists()`` is the single place that
decides this, separately from the data accessors.

All mutations record undo callbacks on the shared Journal so the registry
can roll an entire operation back.
"""

from __future__ import annotations

from dataclasses import dataclass

from .constants import ID_SPACE
from .errors import NotFoundError
from .journal import Journal


@dataclass(frozen=True)
class ColorEntry:
    """Snapshot of one entry."""

    token_id: int
    owner: str
    name: str

    def to_dict(self) -> dict[str, object]:
        return {"token_id": self.token_id, "owner": self.owner, "name": self.name}


class ColorLedger:
    """In-memory identifier -> (owner, name) store."""

    _owners: dict[int, str]
    _names: dict[int, str]
    _balances: dict[str, int]
    journal: Journal

    def __init__(self, journal: Journal | None = None) -> None:
        self._owners = {}
        self._names = {}
        self._balances = {}
        self.journal = journal if journal is not None else Journal()

    @staticmethod
    def _check_id(token_id: int) -> None:
        assert 0 <= token_id < ID_SPACE, f"identifier {token_id} outside 24-bit space"

    # ========== Reads ==========

    def exists(self, token_id: int) -> bool:
        """True if the entry was created and not yet destroyed."""
        return token_id in self._owners

    def owner_of(self, token_id: int) -> str:
        """Owner of an existing entry.

        Raises:
            NotFoundError: If the entry doesn't exist
        """
        owner = self._owners.get(token_id)
        if owner is None:
            raise NotFoundError(f"Color {token_id} does not exist", token_id=token_id)
        return owner

    def name_of(self, token_id: int) -> str:
        """Name of an existing entry.

        Raises:
            NotFoundError: If the entry doesn't exist
        """
        if not self.exists(token_id):
            raise NotFoundError(f"Color {token_id} does not exist", token_id=token_id)
        return self._names.get(token_id, "")

    def get_entry(self, token_id: int) -> ColorEntry | None:
        """Snapshot of an entry, or None if it doesn't exist."""
        if not self.exists(token_id):
            return None
        return ColorEntry(token_id, self._owners[token_id], self._names.get(token_id, ""))

    def balance_of(self, principal_id: str) -> int:
        """Number of entries owned by a principal."""
        return self._balances.get(principal_id, 0)

    def total_supply(self) -> int:
        """Number of existing entries."""
        return len(self._owners)

    def ids_owned_by(self, principal_id: str) -> list[int]:
        """All identifiers owned by a principal, ascending."""
        return sorted(tid for tid, owner in self._owners.items() if owner == principal_id)

    # ========== Mutations ==========

    def _adjust_balance(self, principal_id: str, delta: int) -> None:
        old = self._balances.get(principal_id, 0)
        new = old + delta
        if new:
            self._balances[principal_id] = new
        else:
            self._balances.pop(principal_id, None)

        def undo() -> None:
            if old:
                self._balances[principal_id] = old
            else:
                self._balances.pop(principal_id, None)

        self.journal.record(undo)

    def set_owner(self, token_id: int, owner: str) -> str | None:
        """Assign an owner, creating the entry if needed.

        Returns:
            The previous owner, or None if the entry was just created.
        """
        self._check_id(token_id)
        previous = self._owners.get(token_id)
        self._owners[token_id] = owner

        def undo() -> None:
            if previous is None:
                self._owners.pop(token_id, None)
            else:
                self._owners[token_id] = previous

        self.journal.record(undo)
        if previous is not None:
            self._adjust_balance(previous, -1)
        self._adjust_balance(owner, 1)
        return previous

    def clear_owner(self, token_id: int) -> str:
        """Remove the owner, ending the entry's existence.

        Returns:
            The owner that was removed.
        """
        self._check_id(token_id)
        previous = self.owner_of(token_id)
        del self._owners[token_id]
        self.journal.record(lambda: self._owners.__setitem__(token_id, previous))
        self._adjust_balance(previous, -1)
        return previous

    def set_name(self, token_id: int, name: str) -> str:
        """Set the name of an entry.

        Returns:
            The previous name ("" if none).
        """
        self._check_id(token_id)
        previous = self._names.get(token_id)
        self._names[token_id] = name

        def undo() -> None:
            if previous is None:
                self._names.pop(token_id, None)
            else:
                self._names[token_id] = previous

        self.journal.record(undo)
        return previous or ""

    def clear_name(self, token_id: int) -> str:
        """Reset an entry's name to empty.

        Returns:
            The name that was cleared.
        """
        self._check_id(token_id)
        previous = self._names.pop(token_id, None)
        if previous is not None:
            self.journal.record(lambda: self._names.__setitem__(token_id, previous))
        return previous or ""
