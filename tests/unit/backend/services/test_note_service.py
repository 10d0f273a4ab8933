"""
Unit Tests for Note Service.

Tests the NoteService business logic with a mocked repository.
"""

from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy.exc import OperationalError

from notekeeper.backend.core.exceptions import (
    AuthorizationError,
    DatabaseError,
    NotFoundError,
)
from notekeeper.backend.schemas.note import NoteCreate, NoteUpdate
from notekeeper.backend.services.note import NoteService


@pytest.fixture
def service(mock_db_session):
    """Create NoteService with mocked session."""
    return NoteService(mock_db_session)


class TestNoteServiceCreate:
    """Tests for note creation."""

    @pytest.mark.asyncio
    async def test_create_note_success(self, service, make_note):
        """Should create an unfavorited note owned by the user."""
        mock_note = make_note(id=5, user_id=3, title="Groceries")

        with patch.object(service.repo, "create", return_value=mock_note) as mock_create:
            data = NoteCreate(title="Groceries", description="Milk, eggs")
            result = await service.create_note(3, data)

            mock_create.assert_called_once_with(
                user_id=3,
                title="Groceries",
                description="Milk, eggs",
                favorite=False,
            )
            assert result.id == 5

    @pytest.mark.asyncio
    async def test_create_note_without_description(self, service, make_note):
        """Should create a note with only a title."""
        with patch.object(
            service.repo, "create", return_value=make_note(description=None)
        ) as mock_create:
            await service.create_note(1, NoteCreate(title="Title only"))

            assert mock_create.call_args.kwargs["description"] is None


class TestNoteServiceGet:
    """Tests for reading a single note."""

    @pytest.mark.asyncio
    async def test_get_own_note(self, service, make_note):
        """Should return the note when the user owns it."""
        with patch.object(
            service.repo, "get_by_id_or_none", return_value=make_note(id=2, user_id=1)
        ):
            result = await service.get_note(2, 1)

            assert result.id == 2

    @pytest.mark.asyncio
    async def test_get_missing_note(self, service):
        """Should raise NotFoundError when the note doesn't exist."""
        with patch.object(service.repo, "get_by_id_or_none", return_value=None):
            with pytest.raises(NotFoundError, match="Note not found"):
                await service.get_note(99, 1)

    @pytest.mark.asyncio
    async def test_get_foreign_note_is_forbidden(self, service, make_note):
        """Should raise AuthorizationError for another user's note."""
        with patch.object(
            service.repo, "get_by_id_or_none", return_value=make_note(user_id=2)
        ):
            with pytest.raises(AuthorizationError, match="Unauthorized"):
                await service.get_note(1, 1)

    @pytest.mark.asyncio
    async def test_get_foreign_note_hidden(self, service, make_note):
        """Should report another user's note as missing when hiding is on."""
        with patch.object(
            service.repo, "get_by_id_or_none", return_value=make_note(user_id=2)
        ):
            with pytest.raises(NotFoundError):
                await service.get_note(1, 1, hide_foreign=True)


class TestNoteServiceList:
    """Tests for listing notes."""

    @pytest.mark.asyncio
    async def test_list_first_page(self, service, make_note):
        """Should fetch the first page and the total count."""
        notes = [make_note(id=1), make_note(id=2)]

        with patch.object(
            service.repo, "list_for_user", return_value=notes
        ) as mock_list, patch.object(service.repo, "count_for_user", return_value=2):
            result, total = await service.list_notes(1)

            mock_list.assert_called_once_with(1, limit=20, offset=0)
            assert result == notes
            assert total == 2

    @pytest.mark.asyncio
    async def test_list_later_page_offset(self, service):
        """Should skip (page - 1) * per_page notes."""
        with patch.object(
            service.repo, "list_for_user", return_value=[]
        ) as mock_list, patch.object(service.repo, "count_for_user", return_value=45):
            result, total = await service.list_notes(1, page=3, per_page=20)

            mock_list.assert_called_once_with(1, limit=20, offset=40)
            assert result == []
            assert total == 45


class TestNoteServiceUpdate:
    """Tests for updating notes."""

    @pytest.mark.asyncio
    async def test_update_sends_only_set_fields(self, service, make_note):
        """Should pass only the fields present in the request."""
        with patch.object(
            service.repo, "update_owned", return_value=make_note(title="New")
        ) as mock_update:
            result = await service.update_note(1, 1, NoteUpdate(title="New"))

            mock_update.assert_called_once_with(1, 1, {"title": "New"})
            assert result.title == "New"

    @pytest.mark.asyncio
    async def test_update_can_clear_description(self, service, make_note):
        """An explicit null description should be written."""
        with patch.object(
            service.repo, "update_owned", return_value=make_note(description=None)
        ) as mock_update:
            await service.update_note(1, 1, NoteUpdate(description=None))

            mock_update.assert_called_once_with(1, 1, {"description": None})

    @pytest.mark.asyncio
    async def test_update_not_owned(self, service):
        """Should raise NotFoundError when no owned note matches."""
        with patch.object(service.repo, "update_owned", return_value=None):
            with pytest.raises(NotFoundError):
                await service.update_note(1, 2, NoteUpdate(title="New"))


class TestNoteServiceDelete:
    """Tests for deleting notes."""

    @pytest.mark.asyncio
    async def test_delete_success(self, service):
        """Should delete an owned note."""
        with patch.object(service.repo, "delete_owned", return_value=True) as mock_delete:
            await service.delete_note(4, 1)

            mock_delete.assert_called_once_with(4, 1)

    @pytest.mark.asyncio
    async def test_delete_not_owned(self, service):
        """Should raise NotFoundError when nothing was deleted."""
        with patch.object(service.repo, "delete_owned", return_value=False):
            with pytest.raises(NotFoundError):
                await service.delete_note(4, 2)


class TestNoteServiceToggleFavorite:
    """Tests for toggling the favorite flag."""

    @pytest.mark.asyncio
    async def test_toggle_success(self, service, make_note):
        """Should return the note with its new favorite flag."""
        with patch.object(
            service.repo, "toggle_favorite", return_value=make_note(favorite=True)
        ) as mock_toggle:
            result = await service.toggle_favorite(1, 1)

            mock_toggle.assert_called_once_with(1, 1)
            assert result.favorite is True

    @pytest.mark.asyncio
    async def test_toggle_foreign_or_missing(self, service):
        """Should raise NotFoundError when no owned note matches."""
        with patch.object(service.repo, "toggle_favorite", return_value=None):
            with pytest.raises(NotFoundError, match="Note not found"):
                await service.toggle_favorite(1, 2)


class TestNoteServiceDatabaseErrors:
    """Tests for database failure handling."""

    @pytest.mark.asyncio
    async def test_store_failure_becomes_database_error(self, service):
        """SQLAlchemy errors should surface as DatabaseError."""
        failure = AsyncMock(side_effect=OperationalError("SELECT", {}, Exception("down")))

        with patch.object(service.repo, "toggle_favorite", failure):
            with pytest.raises(DatabaseError) as exc_info:
                await service.toggle_favorite(1, 1)

        assert "toggle_favorite" in exc_info.value.message
        assert "down" not in exc_info.value.message
