"""
Notes API Endpoints.

REST API endpoints for a user's notes. Every route requires a bearer
token; the authenticated user id scopes every repository call.
"""

from typing import Any

from fastapi import APIRouter, Depends, Form
from pydantic import ValidationError as PydanticValidationError

from notekeeper.backend.core.config import get_app_config
from notekeeper.backend.core.dependencies import CurrentUserId, DbSession, NoteId, RequestId
from notekeeper.backend.core.exceptions import ValidationError
from notekeeper.backend.core.pagination import (
    PageParams,
    create_paginated_response,
    get_page_params,
)
from notekeeper.backend.presentation.notes import (
    NoteCard,
    NoteDetail,
    build_note_cards,
    build_note_detail,
)
from notekeeper.backend.schemas.base import ApiResponse
from notekeeper.backend.schemas.note import NoteCreate, NoteResponse, NoteUpdate
from notekeeper.backend.services.note import NoteService

router = APIRouter()


def field_errors(exc: PydanticValidationError) -> dict[str, list[str]]:
    """Group pydantic error messages by top-level field name."""
    errors: dict[str, list[str]] = {}
    for err in exc.errors():
        loc = err.get("loc") or ("__root__",)
        errors.setdefault(str(loc[0]), []).append(err.get("msg", "Invalid value"))
    return errors


def parse_note_form(title: str | None, description: str | None) -> NoteCreate:
    """
    Validate submitted form fields.

    Raises:
        ValidationError: With ``details.field_errors`` on invalid input
    """
    submitted = {"title": title, "description": description}
    try:
        # Blank form fields arrive as None and count as not provided
        return NoteCreate.model_validate(
            {key: value for key, value in submitted.items() if value is not None}
        )
    except PydanticValidationError as e:
        raise ValidationError(
            "Invalid note",
            details={"field_errors": field_errors(e)},
        ) from e


@router.get(
    "",
    summary="List notes (paginated)",
    description="Get one page of the caller's notes, favorites first, newest first.",
)
async def list_notes(
    db: DbSession,
    user_id: CurrentUserId,
    request_id: RequestId,
    pagination: PageParams = Depends(get_page_params),
) -> dict[str, Any]:
    """List the caller's notes."""
    service = NoteService(db)

    notes, total = await service.list_notes(
        user_id,
        page=pagination.page,
        per_page=pagination.per_page,
    )

    return create_paginated_response(
        items=build_note_cards(notes),
        item_schema=NoteCard,
        total=total,
        params=pagination,
        request_id=request_id,
    )


@router.post(
    "",
    response_model=ApiResponse[NoteResponse],
    summary="Create a note",
    description="Create a note from form fields `title` and optional `description`.",
)
async def create_note(
    db: DbSession,
    user_id: CurrentUserId,
    request_id: RequestId,
    title: str | None = Form(default=None),
    description: str | None = Form(default=None),
) -> ApiResponse[NoteResponse]:
    """Create a new note."""
    data = parse_note_form(title, description)

    service = NoteService(db)
    note = await service.create_note(user_id, data)
    return ApiResponse(data=NoteResponse.model_validate(note))


@router.get(
    "/{note_id}",
    response_model=ApiResponse[NoteDetail],
    summary="Get a note",
    description="Get a single note owned by the caller.",
)
async def get_note(
    db: DbSession,
    user_id: CurrentUserId,
    note_id: NoteId,
    request_id: RequestId,
) -> ApiResponse[NoteDetail]:
    """Get a note by ID."""
    hide_foreign = get_app_config().features.notes_hide_foreign_existence

    service = NoteService(db)
    note = await service.get_note(note_id, user_id, hide_foreign=hide_foreign)
    return ApiResponse(data=build_note_detail(note))


@router.patch(
    "/{note_id}",
    response_model=ApiResponse[NoteResponse],
    summary="Update a note",
    description="Update a note owned by the caller. Only provided fields are updated.",
)
async def update_note(
    db: DbSession,
    user_id: CurrentUserId,
    note_id: NoteId,
    data: NoteUpdate,
    request_id: RequestId,
) -> ApiResponse[NoteResponse]:
    """Update a note."""
    service = NoteService(db)
    note = await service.update_note(note_id, user_id, data)
    return ApiResponse(data=NoteResponse.model_validate(note))


@router.delete(
    "/{note_id}",
    status_code=204,
    summary="Delete a note",
    description="Permanently delete a note owned by the caller.",
)
async def delete_note(
    db: DbSession,
    user_id: CurrentUserId,
    note_id: NoteId,
    request_id: RequestId,
) -> None:
    """Delete a note."""
    service = NoteService(db)
    await service.delete_note(note_id, user_id)


@router.post(
    "/{note_id}/favorite",
    response_model=ApiResponse[NoteResponse],
    summary="Toggle favorite",
    description="Flip the favorite flag of a note owned by the caller.",
)
async def toggle_favorite(
    db: DbSession,
    user_id: CurrentUserId,
    note_id: NoteId,
    request_id: RequestId,
) -> ApiResponse[NoteResponse]:
    """Toggle the favorite flag."""
    service = NoteService(db)
    note = await service.toggle_favorite(note_id, user_id)
    return ApiResponse(data=NoteResponse.model_validate(note))
