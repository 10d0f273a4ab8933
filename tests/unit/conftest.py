"""
Unit Test Fixtures.

Fixtures for unit tests - all external dependencies are mocked.
Unit tests should be fast and isolated, never touching real databases.
"""

from datetime import datetime
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest


@pytest.fixture
def mock_db_session() -> AsyncMock:
    """
    Mock database session for unit tests.

    Usage:
        def test_service(mock_db_session: AsyncMock):
            service = NoteService(mock_db_session)
    """
    session = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.flush = AsyncMock()
    session.refresh = AsyncMock()
    session.execute = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def make_note():
    """
    Factory for note-like objects.

    Usage:
        note = make_note(id=3, favorite=True)
    """

    def _make(**overrides: Any) -> MagicMock:
        values = {
            "id": 1,
            "user_id": 1,
            "title": "Groceries",
            "description": "Milk, eggs",
            "favorite": False,
            "created_at": datetime(2024, 1, 15, 15, 30),
            "updated_at": datetime(2024, 1, 15, 15, 30),
        }
        values.update(overrides)
        note = MagicMock()
        for key, value in values.items():
            setattr(note, key, value)
        return note

    return _make
