"""
Catalog API — Identifier Parsing
==================================

Record ids are UUIDs, but they arrive as strings (path segments and
`{"id": ...}` references). These helpers turn them into UUIDs before
any query runs, so a malformed id never reaches the database.
"""

import uuid
from typing import Iterable, List, Optional, TypeVar

from catalog_api.exceptions import ValidationError

INVALID_ID = "Invalid ID"

T = TypeVar("T")


def try_parse_id(value: str) -> Optional[uuid.UUID]:
    """Returns the UUID for `value`, or None when it is not a valid id."""
    try:
        return uuid.UUID(str(value))
    except (ValueError, AttributeError, TypeError):
        return None


def parse_id(value: str, field: Optional[str] = None) -> uuid.UUID:
    """
    Parse an id or fail the request with 400 "Invalid ID".

    Raises:
        ValidationError: `value` is not a syntactically valid id.
    """
    parsed = try_parse_id(value)
    if parsed is None:
        raise ValidationError(message=INVALID_ID, field=field, context={"value": value})
    return parsed


def unique(values: Iterable[T]) -> List[T]:
    """Drops repeated values, keeping the first occurrence of each."""
    return list(dict.fromkeys(values))
