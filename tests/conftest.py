"""Shared pytest fixtures and configuration."""

from datetime import UTC, datetime

import pytest

from backlog_digest.board import BoardList, Card


# Register custom markers
def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: fast tests with no external dependencies")
    config.addinivalue_line("markers", "integration: component interaction tests")
    config.addinivalue_line("markers", "real: talks to the live Trello API (local only)")


# Shared fixtures


@pytest.fixture
def sample_cards() -> list[Card]:
    """A small backlog with one dated card."""
    return [
        Card(id="c1", name="Write onboarding doc", url="https://trello.com/c/aaa111"),
        Card(
            id="c2",
            name="Fix [urgent] login bug",
            url="https://trello.com/c/bbb222",
            due=datetime(2024, 3, 5, 10, 0, tzinfo=UTC),
        ),
    ]


@pytest.fixture
def sample_lists() -> list[BoardList]:
    """Board lists, two of which are backlogs."""
    return [
        BoardList(id="l1", name="Product Backlog"),
        BoardList(id="l2", name="In Progress"),
        BoardList(id="l3", name="backlog: tech debt"),
    ]
