"""Pagination of listing pages (news, projects, recordings).

Query parameters come straight from the URL, so anything unparsable
falls back to the defaults instead of raising.
"""

from __future__ import annotations

import re

from pydantic import BaseModel

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 25
ALLOWED_LIMITS: tuple[int, ...] = (10, 25, 50)

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class PaginationParams(BaseModel):
    """Validated page number (>= 1) and page size (one of the allowed limits)."""

    model_config = {"frozen": True}

    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT


def _leading_int(raw: str | None) -> int | None:
    # "2abc" reads as 2, like a browser-side parseInt
    if raw is None:
        return None
    match = _LEADING_INT.match(raw)
    return int(match.group(1)) if match else None


def parse_pagination_params(
    page: str | None = None,
    limit: str | None = None,
    allowed_limits: tuple[int, ...] = ALLOWED_LIMITS,
) -> PaginationParams:
    """Parse raw ``page``/``limit`` query values.

    >>> parse_pagination_params("2", "25")
    PaginationParams(page=2, limit=25)
    >>> parse_pagination_params("invalid", "100")
    PaginationParams(page=1, limit=25)
    """
    parsed_page = _leading_int(page)
    parsed_limit = _leading_int(limit)
    return PaginationParams(
        page=max(1, parsed_page or DEFAULT_PAGE),
        limit=parsed_limit if parsed_limit in allowed_limits else DEFAULT_LIMIT,
    )


def should_redirect_to_last_page(current_page: int, total_pages: int) -> bool:
    """True when ``current_page`` lies past the last page of a non-empty listing."""
    return total_pages > 0 and current_page > total_pages
