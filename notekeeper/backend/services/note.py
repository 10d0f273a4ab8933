"""
Note Service.

Business logic layer for notes. Each method performs exactly one
repository operation and turns "no matching row" results into
application errors the API layer can render.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from notekeeper.backend.core.exceptions import AuthorizationError, NotFoundError
from notekeeper.backend.models.note import Note
from notekeeper.backend.repositories.note import NoteRepository
from notekeeper.backend.schemas.note import NoteCreate, NoteUpdate
from notekeeper.backend.services.base import BaseService

NOTE_NOT_FOUND = "Note not found"


class NoteService(BaseService):
    """
    Service for note business logic.

    Write paths rely on the repository's owner predicate, so a foreign
    note and a missing note both surface as NotFoundError. The read path
    checks ownership itself.
    """

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.repo = NoteRepository(session)

    async def create_note(self, user_id: int, data: NoteCreate) -> Note:
        """
        Create a new note owned by ``user_id``.

        Args:
            user_id: Owner of the new note
            data: Validated note fields

        Returns:
            Created note, with generated id and timestamps
        """
        self._log_operation("Creating note", user_id=user_id)

        note = await self._execute_db_operation(
            "create_note",
            self.repo.create(
                user_id=user_id,
                title=data.title,
                description=data.description,
                favorite=False,
            ),
        )

        self._log_debug("Note created", note_id=note.id)
        return note

    async def get_note(
        self,
        note_id: int,
        user_id: int,
        hide_foreign: bool = False,
    ) -> Note:
        """
        Get a note for display to ``user_id``.

        Args:
            note_id: Note ID
            user_id: Requesting user
            hide_foreign: Report foreign notes as missing instead of forbidden

        Returns:
            The note

        Raises:
            NotFoundError: If the note does not exist
            AuthorizationError: If it belongs to another user
        """
        note = await self._execute_db_operation(
            "get_note",
            self.repo.get_by_id_or_none(note_id),
        )

        if note is None:
            raise NotFoundError(NOTE_NOT_FOUND)

        if note.user_id != user_id:
            self._logger.warning(
                "Note requested by non-owner",
                extra={"note_id": note_id, "user_id": user_id},
            )
            if hide_foreign:
                raise NotFoundError(NOTE_NOT_FOUND)
            raise AuthorizationError("Unauthorized")

        return note

    async def list_notes(
        self,
        user_id: int,
        page: int = 1,
        per_page: int = 20,
    ) -> tuple[list[Note], int]:
        """
        List one page of a user's notes with the total count.

        Args:
            user_id: Owner of the notes
            page: 1-indexed page number
            per_page: Page size

        Returns:
            Tuple of (notes on the page, total notes owned by the user)
        """
        offset = (page - 1) * per_page

        notes = await self._execute_db_operation(
            "list_notes",
            self.repo.list_for_user(user_id, limit=per_page, offset=offset),
        )
        total = await self._execute_db_operation(
            "count_notes",
            self.repo.count_for_user(user_id),
        )

        return notes, total

    async def update_note(self, note_id: int, user_id: int, data: NoteUpdate) -> Note:
        """
        Update fields of a note the user owns.

        Only fields present in ``data`` are written.

        Raises:
            NotFoundError: If no note with that id is owned by the user
        """
        update_data = data.model_dump(exclude_unset=True)

        self._log_operation(
            "Updating note",
            note_id=note_id,
            user_id=user_id,
            fields=list(update_data.keys()),
        )

        note = await self._execute_db_operation(
            "update_note",
            self.repo.update_owned(note_id, user_id, update_data),
        )

        if note is None:
            raise NotFoundError(NOTE_NOT_FOUND)
        return note

    async def delete_note(self, note_id: int, user_id: int) -> None:
        """
        Delete a note the user owns.

        Raises:
            NotFoundError: If no note with that id is owned by the user
        """
        self._log_operation("Deleting note", note_id=note_id, user_id=user_id)

        deleted = await self._execute_db_operation(
            "delete_note",
            self.repo.delete_owned(note_id, user_id),
        )

        if not deleted:
            raise NotFoundError(NOTE_NOT_FOUND)

    async def toggle_favorite(self, note_id: int, user_id: int) -> Note:
        """
        Flip the favorite flag of a note the user owns.

        Raises:
            NotFoundError: If no note with that id is owned by the user
            DatabaseError: If the store fails
        """
        self._log_operation("Toggling favorite", note_id=note_id, user_id=user_id)

        note = await self._execute_db_operation(
            "toggle_favorite",
            self.repo.toggle_favorite(note_id, user_id),
        )

        if note is None:
            raise NotFoundError(NOTE_NOT_FOUND)
        return note
