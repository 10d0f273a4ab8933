"""
Unit Tests for FastAPI Dependencies.
"""

from unittest.mock import patch

import pytest
from fastapi.security import HTTPAuthorizationCredentials

from notekeeper.backend.core.dependencies import (
    get_note_id,
    get_request_id,
    parse_note_id,
    require_user_id,
)
from notekeeper.backend.core.exceptions import AuthenticationError, ValidationError


class TestParseNoteId:
    """Tests for note id parsing."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("1", 1), ("42", 42), ("007", 7), ("2147483647", 2147483647)],
    )
    def test_valid_ids(self, raw, expected):
        """Should parse base-10 integers."""
        assert parse_note_id(raw) == expected

    @pytest.mark.parametrize(
        "raw",
        [
            None, "", "abc", "1.5", "12abc", "0x10",
            "1_0", " 7", "7 ", "+5", "-1", "\u0663",
            "2147483648", "99999999999999999999",
        ],
    )
    def test_invalid_ids(self, raw):
        """Should reject anything but ASCII digits within the id column range."""
        with pytest.raises(ValidationError) as exc_info:
            parse_note_id(raw)

        assert exc_info.value.message == "Invalid note ID"

    @pytest.mark.asyncio
    async def test_path_dependency(self):
        """Path dependency should return the parsed id."""
        assert await get_note_id("15") == 15


class TestRequireUserId:
    """Tests for the authenticated user dependency."""

    @pytest.mark.asyncio
    async def test_missing_credentials(self):
        """Should raise AuthenticationError without a bearer token."""
        with pytest.raises(AuthenticationError):
            await require_user_id(None)

    @pytest.mark.asyncio
    async def test_resolves_user_id(self):
        """Should return the user id carried by the token."""
        credentials = HTTPAuthorizationCredentials(scheme="Bearer", credentials="token")

        with patch(
            "notekeeper.backend.core.dependencies.user_id_from_token",
            return_value=7,
        ) as mock_resolve:
            result = await require_user_id(credentials)

        mock_resolve.assert_called_once_with("token")
        assert result == 7


class TestGetRequestId:
    """Tests for request id extraction."""

    @pytest.mark.asyncio
    async def test_uses_header(self):
        """Should pass through an existing request id."""
        assert await get_request_id("req-123") == "req-123"

    @pytest.mark.asyncio
    async def test_generates_when_missing(self):
        """Should generate a request id when none is given."""
        result = await get_request_id(None)
        assert isinstance(result, str)
        assert len(result) == 36
