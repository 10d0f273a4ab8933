"""
Note Repository.

Data access layer for notes. Every public method issues a single SQL
statement; writes that depend on ownership carry the owner predicate in
the same statement as the mutation.
"""

from typing import Any

from sqlalchemy import delete, func, not_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from notekeeper.backend.models.note import Note
from notekeeper.backend.repositories.base import BaseRepository

UPDATABLE_FIELDS = frozenset({"title", "description", "favorite"})


class NoteRepository(BaseRepository[Note]):
    """
    Repository for Note model.

    Owner-scoped methods return None (or False) when no row matches both
    the note id and the user id, whether the note is missing or belongs
    to someone else.
    """

    model = Note

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    async def list_for_user(
        self,
        user_id: int,
        limit: int = 20,
        offset: int = 0,
    ) -> list[Note]:
        """
        Get one page of a user's notes.

        Favorites come first, then newest first. An offset past the end
        yields an empty list.

        Args:
            user_id: Owner of the notes
            limit: Maximum number of notes to return
            offset: Number of notes to skip

        Returns:
            List of notes owned by the user
        """
        result = await self.session.execute(
            select(Note)
            .where(Note.user_id == user_id)
            .order_by(Note.favorite.desc(), Note.created_at.desc(), Note.id.desc())
            .limit(limit)
            .offset(offset)
        )
        return list(result.scalars().all())

    async def count_for_user(self, user_id: int) -> int:
        """Get count of all notes owned by a user, ignoring pagination."""
        result = await self.session.execute(
            select(func.count())
            .select_from(Note)
            .where(Note.user_id == user_id)
        )
        return result.scalar_one()

    async def update_owned(
        self,
        id: int,
        user_id: int,
        values: dict[str, Any],
    ) -> Note | None:
        """
        Apply a partial update to a note the user owns.

        Args:
            id: Note ID
            user_id: Expected owner
            values: Columns to set, limited to title, description, favorite.
                The owner, id and timestamps cannot be written here.

        Returns:
            The updated note, or None if no row matched
        """
        unknown = set(values) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update note fields: {sorted(unknown)}")

        return await self._update_returning(id, user_id, dict(values))

    async def toggle_favorite(self, id: int, user_id: int) -> Note | None:
        """
        Flip the favorite flag of a note the user owns.

        The flag is negated in SQL so concurrent toggles never read a
        stale value.

        Returns:
            The updated note, or None if no row matched
        """
        return await self._update_returning(
            id, user_id, {"favorite": not_(Note.favorite)}
        )

    async def delete_owned(self, id: int, user_id: int) -> bool:
        """
        Delete a note the user owns.

        Returns:
            True if a row was deleted
        """
        result = await self.session.execute(
            delete(Note)
            .where(Note.id == id, Note.user_id == user_id)
            .returning(Note.id)
        )
        return result.scalar_one_or_none() is not None

    async def _update_returning(
        self,
        id: int,
        user_id: int,
        values: dict[str, Any],
    ) -> Note | None:
        """Run an owner-scoped UPDATE ... RETURNING and load the fresh row."""
        if not values:
            result = await self.session.execute(
                select(Note).where(Note.id == id, Note.user_id == user_id)
            )
            return result.scalar_one_or_none()

        result = await self.session.execute(
            update(Note)
            .where(Note.id == id, Note.user_id == user_id)
            .values(**values)
            .returning(Note)
            .execution_options(synchronize_session=False)
        )
        note = result.scalar_one_or_none()
        if note is not None:
            # An instance already in the identity map keeps its old state
            await self.session.refresh(note)
        return note
