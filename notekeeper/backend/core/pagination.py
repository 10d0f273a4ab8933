"""
Pagination Utilities.

Page-number pagination for list endpoints. Pages are 1-indexed and the
page size is fixed by configuration rather than chosen by the client.
"""

import math
from dataclasses import dataclass
from typing import Any

from fastapi import Query
from pydantic import BaseModel

from notekeeper.backend.core.config import get_app_config
from notekeeper.backend.schemas.base import PaginatedResponse, PaginationInfo, ResponseMetadata


# =============================================================================
# Pagination Parameters
# =============================================================================


@dataclass
class PageParams:
    """Pagination parameters extracted from the query string."""

    page: int
    per_page: int

    @property
    def offset(self) -> int:
        """Number of rows to skip for this page."""
        return (self.page - 1) * self.per_page


def parse_page(raw: str | None) -> int:
    """
    Parse the ``page`` query value.

    Missing, non-numeric and non-positive values all fall back to page 1.
    """
    try:
        page = int(raw or "")
    except ValueError:
        return 1
    return page if page >= 1 else 1


def get_page_params(
    page: str | None = Query(
        default=None,
        description="1-indexed page number; invalid values mean page 1",
    ),
) -> PageParams:
    """
    FastAPI dependency for pagination parameters.

    Usage:
        @router.get("/items")
        async def list_items(
            pagination: PageParams = Depends(get_page_params),
        ):
            ...
    """
    per_page = get_app_config().application.notes.per_page
    return PageParams(page=parse_page(page), per_page=per_page)


def total_pages(total: int, per_page: int) -> int:
    """Number of pages needed for ``total`` items, zero when empty."""
    return math.ceil(total / per_page)


# =============================================================================
# Paginated Response Builder
# =============================================================================


def create_paginated_response(
    items: list[Any],
    item_schema: type[BaseModel],
    total: int,
    params: PageParams,
    request_id: str | None = None,
) -> dict[str, Any]:
    """
    Create a standardized paginated response.

    Args:
        items: List of items (model instances, dicts or schema instances)
        item_schema: Pydantic schema to validate items
        total: Total count of items across all pages
        params: Page parameters used for the query
        request_id: Request ID for metadata

    Returns:
        Dict matching PaginatedResponse structure
    """
    validated_items = [
        item_schema.model_validate(item).model_dump(mode="json")
        for item in items
    ]

    pagination = PaginationInfo(
        total=total,
        per_page=params.per_page,
        total_pages=total_pages(total, params.per_page),
        current_page=params.page,
        has_more=(params.offset + len(items)) < total,
    )

    metadata = ResponseMetadata(request_id=request_id)

    response = PaginatedResponse(
        data=validated_items,
        pagination=pagination,
        metadata=metadata,
    )

    return response.model_dump(mode="json")
