"""
FastAPI Dependencies.

Shared dependencies for request handling.
"""

import re
from typing import Annotated

from fastapi import Depends, Header
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from notekeeper.backend.core.database import get_db_session
from notekeeper.backend.core.exceptions import AuthenticationError, ValidationError
from notekeeper.backend.core.logging import get_logger
from notekeeper.backend.core.security import user_id_from_token

logger = get_logger(__name__)

# Ids are a 32-bit signed INTEGER column
MAX_NOTE_ID = 2**31 - 1
_NOTE_ID_PATTERN = re.compile(r"[0-9]+")

# Type alias for database session dependency
DbSession = Annotated[AsyncSession, Depends(get_db_session)]

_bearer = HTTPBearer(auto_error=False)


async def get_request_id(x_request_id: str | None = Header(None)) -> str:
    """
    Extract or generate request ID from headers.

    Used for request tracing and correlation.
    """
    import uuid

    return x_request_id or str(uuid.uuid4())


RequestId = Annotated[str, Depends(get_request_id)]


async def require_user_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
) -> int:
    """
    Resolve the authenticated user id from the bearer token.

    Raises:
        AuthenticationError: If no valid access token is present
    """
    if credentials is None:
        raise AuthenticationError("Authentication required")
    return user_id_from_token(credentials.credentials)


CurrentUserId = Annotated[int, Depends(require_user_id)]


def parse_note_id(raw: str | None) -> int:
    """
    Parse a note id taken from the URL path.

    Raises:
        ValidationError: If the value is not plain ASCII digits, or is
            larger than any id the notes table can hold
    """
    if raw is not None and _NOTE_ID_PATTERN.fullmatch(raw):
        note_id = int(raw)
        if note_id <= MAX_NOTE_ID:
            return note_id

    logger.warning("Invalid note id", extra={"note_id": raw})
    raise ValidationError("Invalid note ID")


async def get_note_id(note_id: str) -> int:
    """Path dependency returning the parsed note id."""
    return parse_note_id(note_id)


NoteId = Annotated[int, Depends(get_note_id)]
