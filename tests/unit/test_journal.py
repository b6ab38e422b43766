"""Unit tests for the undo journal."""

from __future__ import annotations

import pytest

from src.registry.journal import Journal


class Boom(Exception):
    pass


class TestTransaction:
    """Commit and rollback behavior."""

    def test_commit_keeps_changes(self) -> None:
        journal = Journal()
        store = {"a": 1}
        with journal.transaction():
            store["a"] = 2
            journal.record(lambda: store.__setitem__("a", 1))
        assert store == {"a": 2}
        assert not journal.active

    def test_rollback_restores_in_reverse_order(self) -> None:
        """Undo callbacks run newest first."""
        journal = Journal()
        order: list[int] = []
        with pytest.raises(Boom):
            with journal.transaction():
                journal.record(lambda: order.append(1))
                journal.record(lambda: order.append(2))
                raise Boom()
        assert order == [2, 1]
        assert journal.depth == 0

    def test_record_outside_transaction_is_dropped(self) -> None:
        journal = Journal()
        journal.record(lambda: pytest.fail("should never run"))
        with pytest.raises(Boom):
            with journal.transaction():
                raise Boom()


class TestNesting:
    """Inner transactions fold into the outer one."""

    def test_outer_rollback_undoes_committed_inner(self) -> None:
        journal = Journal()
        store: list[str] = []
        with pytest.raises(Boom):
            with journal.transaction():
                with journal.transaction():
                    store.append("inner")
                    journal.record(store.pop)
                assert store == ["inner"]
                raise Boom()
        assert store == []

    def test_inner_rollback_keeps_outer_changes(self) -> None:
        journal = Journal()
        store: list[str] = []
        with journal.transaction():
            store.append("outer")
            journal.record(store.pop)
            with pytest.raises(Boom):
                with journal.transaction():
                    store.append("inner")
                    journal.record(store.pop)
                    raise Boom()
        assert store == ["outer"]


class TestAfterCommit:
    """Hooks run once, at outermost commit."""

    def test_hooks_wait_for_outermost_commit(self) -> None:
        journal = Journal()
        ran: list[str] = []
        with journal.transaction():
            with journal.transaction():
                journal.after_commit(lambda: ran.append("hook"))
            assert ran == []
        assert ran == ["hook"]

    def test_hooks_discarded_on_rollback(self) -> None:
        journal = Journal()
        ran: list[str] = []
        with pytest.raises(Boom):
            with journal.transaction():
                journal.after_commit(lambda: ran.append("hook"))
                raise Boom()
        with journal.transaction():
            pass
        assert ran == []

    def test_hook_outside_transaction_runs_now(self) -> None:
        journal = Journal()
        ran: list[str] = []
        journal.after_commit(lambda: ran.append("now"))
        assert ran == ["now"]

    def test_failing_hook_does_not_fail_commit(self, caplog: pytest.LogCaptureFixture) -> None:
        """A raising hook is logged; later hooks and committed state survive."""
        journal = Journal()
        state = {"value": 0}
        ran: list[str] = []

        def broken() -> None:
            raise OSError("disk full")

        with caplog.at_level("ERROR", logger="src.registry.journal"):
            with journal.transaction():
                state["value"] = 1
                journal.after_commit(broken)
                journal.after_commit(lambda: ran.append("after"))

        assert state["value"] == 1
        assert ran == ["after"]
        assert not journal.active
        assert any("failed" in r.getMessage() for r in caplog.records)
