"""Undo journal giving registry operations all-or-nothing semantics.

Every state change made inside ``journal.transaction()`` records an undo
callback. If the block raises, undo callbacks recorded since the block was
entered run in reverse order and the exception propagates. Transactions
nest: a reentrant operation opens an inner transaction whose effects stay
in the outer one's undo log, so rolling back the outer operation also
undoes everything the reentrant call did.

Hooks registered with ``after_commit`` run only once the outermost
transaction commits, and are discarded on rollback. Event publication
uses this so rolled-back operations never reach the event log. A hook that
raises is logged and skipped; the committed operation still succeeds and
the remaining hooks still run.

Usage:
    journal = Journal()
    with journal.transaction():
        old = store.get(key)
        store[key] = new
        journal.record(lambda: store.__setitem__(key, old))
        raise SomeError()   # store[key] is restored
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Callable, Iterator


logger = logging.getLogger(__name__)


class Journal:
    """Nested-transaction undo log.

    Thread-safety: This class is NOT thread-safe. The registry runs one
    operation at a time; concurrent callers must serialize externally.
    """

    _undo: list[Callable[[], None]]
    _on_commit: list[Callable[[], None]]
    _depth: int

    def __init__(self) -> None:
        self._undo = []
        self._on_commit = []
        self._depth = 0

    @property
    def active(self) -> bool:
        """True while inside at least one transaction."""
        return self._depth > 0

    @property
    def depth(self) -> int:
        return self._depth

    def record(self, undo: Callable[[], None]) -> None:
        """Record how to reverse a change that was just applied.

        Outside a transaction there is nothing to roll back to, so the
        callback is dropped.
        """
        if self._depth:
            self._undo.append(undo)

    def after_commit(self, hook: Callable[[], None]) -> None:
        """Run hook when the outermost transaction commits (now if none)."""
        if self._depth:
            self._on_commit.append(hook)
        else:
            _run_hook(hook)

    @contextmanager
    def transaction(self) -> Iterator[None]:
        """Open a (possibly nested) transaction."""
        undo_mark = len(self._undo)
        commit_mark = len(self._on_commit)
        self._depth += 1
        try:
            yield
        except BaseException:
            while len(self._undo) > undo_mark:
                self._undo.pop()()
            del self._on_commit[commit_mark:]
            raise
        finally:
            self._depth -= 1

        if self._depth == 0:
            self._undo.clear()
            hooks = self._on_commit
            self._on_commit = []
            for hook in hooks:
                _run_hook(hook)


def _run_hook(hook: Callable[[], None]) -> None:
    try:
        hook()
    except Exception:
        logger.exception("After-commit hook %r failed", hook)
