"""
Note Presentation.

View models for note cards (list) and note detail pages. They are built
from already-fetched notes and carry ready-to-display strings so clients
render without formatting logic of their own.
"""

from datetime import datetime

from pydantic import Field

from notekeeper.backend.core.dates import format_date, format_relative_time
from notekeeper.backend.core.utils import utc_now
from notekeeper.backend.schemas.note import NoteResponse

API_PREFIX = "/api/v1"


def note_path(note_id: int) -> str:
    return f"{API_PREFIX}/notes/{note_id}"


def favorite_path(note_id: int) -> str:
    return f"{API_PREFIX}/notes/{note_id}/favorite"


class NoteCard(NoteResponse):
    """A note as shown in the notes grid."""

    excerpt: str = Field(description="Description, or an empty string")
    created_label: str = Field(description="Relative creation time, e.g. '2 hours ago'")
    detail_path: str = Field(description="Route of the note detail")
    favorite_path: str = Field(description="Route that toggles the favorite flag")


class NoteDetail(NoteResponse):
    """A note as shown on its own page."""

    created_label: str = Field(description="Relative creation time")
    created_display: str = Field(description="Absolute creation time, e.g. 'Jan 15, 2024, 3:30 PM'")
    favorite_path: str = Field(description="Route that toggles the favorite flag")


def build_note_card(note: object, now: datetime | None = None) -> NoteCard:
    """Build a card from a Note model or any object with the note attributes."""
    base = NoteResponse.model_validate(note)
    return NoteCard(
        **base.model_dump(),
        excerpt=base.description or "",
        created_label=format_relative_time(base.created_at, now=now),
        detail_path=note_path(base.id),
        favorite_path=favorite_path(base.id),
    )


def build_note_cards(notes: list, now: datetime | None = None) -> list[NoteCard]:
    # One reference time for the whole page
    now = now or utc_now()
    return [build_note_card(note, now=now) for note in notes]


def build_note_detail(note: object, now: datetime | None = None) -> NoteDetail:
    base = NoteResponse.model_validate(note)
    return NoteDetail(
        **base.model_dump(),
        created_label=format_relative_time(base.created_at, now=now),
        created_display=format_date(base.created_at),
        favorite_path=favorite_path(base.id),
    )
