"""
Note Model.

Database model for notes, the only entity of the application.
"""

from sqlalchemy import Index, String, Text, false
from sqlalchemy.orm import Mapped, mapped_column

from notekeeper.backend.models.base import Base, IntegerIDMixin, TimestampMixin


class Note(IntegerIDMixin, TimestampMixin, Base):
    """
    Note database model.

    Every note belongs to exactly one user. The owner and the creation
    timestamp are set on insert and never change afterwards.
    """

    __tablename__ = "notes"
    __table_args__ = (
        # Serves the per-user listing: favorites first, newest first
        Index("ix_notes_user_favorite_created", "user_id", "favorite", "created_at"),
    )

    user_id: Mapped[int] = mapped_column(
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    description: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )
    favorite: Mapped[bool] = mapped_column(
        default=False,
        server_default=false(),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, user_id={self.user_id}, title={self.title!r})>"
