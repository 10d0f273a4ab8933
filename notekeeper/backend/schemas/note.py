"""
Note Schemas.

Pydantic schemas for note API request/response validation.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class NoteCreate(BaseModel):
    """Fields accepted when creating a note."""

    title: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Note title",
        examples=["Groceries"],
    )
    description: str | None = Field(
        default=None,
        max_length=10000,
        description="Note body",
        examples=["Milk, eggs, coffee"],
    )

    model_config = ConfigDict(str_strip_whitespace=True)


class NoteUpdate(BaseModel):
    """Schema for a partial update; only fields that are sent get written."""

    title: str | None = Field(
        default=None,
        min_length=1,
        max_length=255,
        description="Note title",
    )
    description: str | None = Field(
        default=None,
        max_length=10000,
        description="Note body",
    )
    favorite: bool | None = Field(
        default=None,
        description="Favorite flag",
    )

    model_config = ConfigDict(str_strip_whitespace=True)

    @field_validator("title", "favorite")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("Field cannot be null")
        return value


class NoteResponse(BaseModel):
    """Schema for note in API responses."""

    id: int = Field(description="Note identifier")
    user_id: int = Field(description="Owner identifier")
    title: str = Field(description="Note title")
    description: str | None = Field(description="Note body")
    favorite: bool = Field(description="Whether the note is a favorite")
    created_at: datetime = Field(description="Creation timestamp")
    updated_at: datetime = Field(description="Last update timestamp")

    model_config = ConfigDict(from_attributes=True)
