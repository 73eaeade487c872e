"""Pytest configuration and shared fixtures for Agenda Board tests.

This module provides common test fixtures and configuration
that can be used across all test modules.
"""

import logging
from pathlib import Path
from typing import Dict, Generator, List

import pytest
from _pytest.config import Config
from rich.logging import RichHandler

from agenda_board.agenda.grouping import group_items
from agenda_board.agenda.models import AgendaItem, Hierarchy, ItemStatus


def make_item(item_id, parent_id=None, status=ItemStatus.NOT_STARTED) -> AgendaItem:
    """Build an agenda item with a title derived from its id."""
    return AgendaItem(
        id=item_id, parent_id=parent_id, status=status, title=f"Item {item_id}"
    )


@pytest.fixture
def agenda_items() -> List[AgendaItem]:
    """Flat agenda with interleaved sections and children.

    Resulting outline::

        1 (not started):  11, 12 (in progress), 13 (completed)
        2 (in progress):  21 (completed)
        3 (completed):    31 (completed)
        4 (not started):  -
    """
    return [
        make_item(1),
        make_item(11, 1),
        make_item(2, status=ItemStatus.IN_PROGRESS),
        make_item(21, 2, ItemStatus.COMPLETED),
        make_item(12, 1, ItemStatus.IN_PROGRESS),
        make_item(3, status=ItemStatus.COMPLETED),
        make_item(31, 3, ItemStatus.COMPLETED),
        make_item(13, 1, ItemStatus.COMPLETED),
        make_item(4),
    ]


@pytest.fixture
def hierarchy(agenda_items: List[AgendaItem]) -> Hierarchy:
    """Hierarchy built from ``agenda_items``."""
    return group_items(agenda_items).hierarchy


@pytest.fixture
def raw_meeting_items() -> List[Dict]:
    """Item records as delivered by the meeting API."""
    return [
        {"id": 1, "parent_meeting_item_id": None, "status": "NOT_STARTED",
         "title_loc_key": "Opening", "description": "Welcome"},
        {"id": 2, "parent_meeting_item_id": 1, "status": "IN_PROGRESS",
         "title_loc_key": "Roll call", "description": None},
        {"id": 3, "parent_meeting_item_id": 1, "status": "COMPLETED",
         "title_loc_key": "Minutes", "description": None},
    ]


@pytest.fixture(autouse=True)
def isolate_tests(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[None, None, None]:
    """Isolate tests by changing to a temporary directory.

    Console and file handlers installed by setup_logging during a test
    are removed afterwards.
    """
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("AGENDA_BOARD_CONFIG", raising=False)
    monkeypatch.delenv("AGENDA_BOARD_LOG_LEVEL", raising=False)

    root = logging.getLogger()
    level = root.level
    yield
    for handler in list(root.handlers):
        if type(handler) in (RichHandler, logging.FileHandler):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


def pytest_configure(config: Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )


@pytest.fixture
def item_factory():
    """Factory for agenda items, see ``make_item``."""
    return make_item
