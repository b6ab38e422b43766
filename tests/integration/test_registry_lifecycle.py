"""End-to-end registry scenario: deploy, sell, trade, rename, lock, withdraw."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from src.config_schema import validate_config_dict
from src.registry import (
    ColorRegistry,
    EventLogger,
    InsufficientPaymentError,
    NotificationRejectedError,
    ReceiverDirectory,
    UpgradeLockedError,
)
from src.registry.renderer import decode_data_uri, render_svg
from tests.testing_utils import ALICE, BOB, RecordingReceiver

OWNER = "0x1B23c1D7"


@pytest.mark.feature("lifecycle")
def test_full_lifecycle(tmp_path: Path) -> None:
    """A realistic sequence touching every collaborator."""
    config = validate_config_dict({
        "registry": {"principal": OWNER},
        "pricing": {"unit_price": 1000},
    })
    receivers = ReceiverDirectory()
    event_logger = EventLogger(output_file=str(tmp_path / "events.jsonl"))
    registry = ColorRegistry.from_config(
        config, receivers=receivers, event_logger=event_logger
    )

    # Sales across all three tiers
    registry.create("ffffff", "White", caller=ALICE, payment=100_000)
    registry.create("FF0000", "Red", caller=ALICE, payment=10_000)
    with pytest.raises(InsufficientPaymentError):
        registry.create("00FF00", "Green", caller=BOB, payment=9_999)
    registry.create("00ff00", "Green", caller=BOB, payment=10_000)
    registry.create("123abc", "", caller=BOB, payment=1_000)
    assert registry.balance == 121_000
    assert registry.total_supply() == 4

    # A vault that refuses incoming colors
    vault = RecordingReceiver(accept=False)
    receivers.register("vault", vault)
    with pytest.raises(NotificationRejectedError):
        registry.transfer("FF0000", "vault", caller=ALICE)
    assert registry.owner_of("FF0000") == ALICE

    # Trade and rename
    registry.transfer("FF0000", BOB, caller=ALICE)
    registry.rename("FF0000", "Crimson", caller=BOB)
    registry.destroy("123ABC", caller=BOB)
    assert registry.colors_of(BOB) == ["00FF00", "FF0000"]
    assert registry.colors_of(ALICE) == ["FFFFFF"]

    # Metadata reflects the latest name
    _, payload = decode_data_uri(registry.render("ff0000"))
    document = json.loads(payload)
    assert document["name"] == "Crimson"
    _, svg = decode_data_uri(document["image"])
    assert svg.decode("utf-8") == render_svg("Crimson", "FF0000")

    # Administration
    registry.upgrade_to(OWNER, "6")
    registry.lock_upgrades(OWNER)
    with pytest.raises(UpgradeLockedError):
        registry.upgrade_to(OWNER, "7")
    assert registry.withdraw(OWNER) == 121_000
    assert registry.balance == 0

    # Only committed activity reached the event log, in order
    logged = event_logger.read_recent(100)
    assert [e["sequence"] for e in logged] == list(range(1, len(logged) + 1))
    assert [e["event_type"] for e in logged] == [
        "Transfer", "Transfer", "Transfer", "Transfer",   # four creates
        "Transfer", "ColorRenamed", "Transfer",           # trade, rename, destroy
        "Upgraded", "UpgradesLocked", "Withdrawn",
    ]
    assert len(registry.events) == len(logged)
