"""Transactional event buffer.

Events emitted during an operation become visible in ``history``
immediately, so reentrant callers can observe them, but are only
published (module logger + optional JSONL EventLogger) once the outermost
transaction commits. A rollback removes them from ``history`` and they are
never published.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from .journal import Journal

if TYPE_CHECKING:
    from .logger import EventLogger


logger = logging.getLogger(__name__)


class RegistryEvents:
    """Event history for one registry instance."""

    journal: Journal
    event_logger: EventLogger | None
    _history: list[dict[str, Any]]

    def __init__(self, journal: Journal, event_logger: EventLogger | None = None) -> None:
        self.journal = journal
        self.event_logger = event_logger
        self._history = []

    def emit(self, event_type: str, **data: Any) -> None:
        """Record an event, publishing it when the operation commits."""
        event: dict[str, Any] = {"event_type": event_type, **data}
        self._history.append(event)
        self.journal.record(self._history.pop)
        self.journal.after_commit(lambda: self._publish(event))

    def _publish(self, event: dict[str, Any]) -> None:
        data = {k: v for k, v in event.items() if k != "event_type"}
        logger.info("%s %s", event["event_type"], data)
        if self.event_logger is not None:
            self.event_logger.log(event["event_type"], data)

    @property
    def history(self) -> list[dict[str, Any]]:
        """Copy of all recorded events, oldest first."""
        return [dict(e) for e in self._history]

    def of_type(self, event_type: str) -> list[dict[str, Any]]:
        """Recorded events of one type, oldest first."""
        return [dict(e) for e in self._history if e["event_type"] == event_type]

    def __len__(self) -> int:
        return len(self._history)
