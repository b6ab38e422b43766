"""Pytest fixtures for color registry tests.

Common fixtures: config isolation, a fresh registry, an event logger in a
temp directory, and a helper that creates colors at their tier price.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Iterator

import pytest
from dotenv import load_dotenv

from src import config as config_module
from src.registry import ColorRegistry, EventLogger, ReceiverDirectory
from tests.testing_utils import ALICE, PRINCIPAL

# Load environment variables from .env before any tests run
load_dotenv()


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "feature(name): mark test as belonging to a feature. "
        "Usage: @pytest.mark.feature('reentrancy')"
    )


@pytest.fixture(autouse=True)
def isolated_config() -> Iterator[None]:
    """Each test starts from the default config file and leaves no overrides."""
    config_module.reset_config()
    yield
    config_module.reset_config()


@pytest.fixture
def event_logger(tmp_path: Path) -> EventLogger:
    """JSONL event logger writing into the test's temp directory."""
    return EventLogger(output_file=str(tmp_path / "events.jsonl"))


@pytest.fixture
def receivers() -> ReceiverDirectory:
    return ReceiverDirectory()


@pytest.fixture
def registry(receivers: ReceiverDirectory, event_logger: EventLogger) -> ColorRegistry:
    """Fresh registry administered by PRINCIPAL with default pricing."""
    return ColorRegistry(PRINCIPAL, receivers=receivers, event_logger=event_logger)


@pytest.fixture
def create(registry: ColorRegistry) -> Callable[..., int]:
    """Create a color paying exactly its required amount."""

    def _create(hex_text: str, name: str = "", caller: str = ALICE) -> int:
        return registry.create(
            hex_text, name, caller=caller, payment=registry.required_payment(hex_text)
        )

    return _create

