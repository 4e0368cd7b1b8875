"""
Common Schemas

Response envelope shared by every endpoint:
`{success, message?, data?, pagination?}`.
"""

import math
from typing import Any, List, Optional

from pydantic import BaseModel


class Pagination(BaseModel):
    """Pagination metadata for list endpoints."""

    current_page: int
    total_pages: int
    total_posts: int
    has_next_page: bool
    has_previous_page: bool

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "Pagination":
        return cls(
            current_page=page,
            total_pages=math.ceil(total / limit) if limit else 0,
            total_posts=total,
            has_next_page=page * limit < total,
            has_previous_page=page > 1,
        )


class ApiResponse(BaseModel):
    """Standard response envelope."""

    success: bool = True
    message: Optional[str] = None
    data: Optional[Any] = None
    pagination: Optional[Pagination] = None


class FieldError(BaseModel):
    field: str
    message: str


class ErrorResponse(BaseModel):
    """Envelope returned for failed requests."""

    success: bool = False
    message: str
    errors: Optional[List[FieldError]] = None
