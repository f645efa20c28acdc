"""
Filtering, sorting and pagination over a snapshot of users.

``query_users`` is a pure function: it never mutates the list it is
given and always returns a fresh ``QueryResult``.  The steps run in a
fixed order (filter by role, stable sort, then slice) and ``total``
counts the filtered records before the slice is taken.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from ..models.user import UserRecord

DEFAULT_LIMIT = 10
MIN_LIMIT = 1
MAX_LIMIT = 100
DEFAULT_OFFSET = 0

ASC = "asc"
DESC = "desc"

# Sortable fields by their public name.  ``created_at`` is accepted as an
# alias so Python callers can use the attribute name.
SORT_KEYS: Dict[str, Callable[[UserRecord], object]] = {
    "name": lambda user: user.name,
    "createdAt": lambda user: user.created_at,
    "created_at": lambda user: user.created_at,
}


@dataclass
class QueryOptions:
    role: Optional[str] = None
    sort: Optional[Tuple[str, str]] = None
    limit: int = DEFAULT_LIMIT
    offset: int = DEFAULT_OFFSET


@dataclass
class QueryResult:
    items: List[UserRecord] = field(default_factory=list)
    total: int = 0


def clamp_limit(limit: Optional[int]) -> int:
    if limit is None:
        return DEFAULT_LIMIT
    return max(MIN_LIMIT, min(MAX_LIMIT, limit))


def clamp_offset(offset: Optional[int]) -> int:
    if offset is None:
        return DEFAULT_OFFSET
    return max(0, offset)


def parse_sort(value: Optional[str]) -> Optional[Tuple[str, str]]:
    """Parse ``"field:direction"`` into a ``(field, direction)`` pair.

    A missing direction, or any direction other than ``desc``, sorts
    ascending.  Empty input yields ``None``.
    """
    if not value:
        return None
    name, _, direction = value.partition(":")
    direction = DESC if direction.strip().lower() == DESC else ASC
    return name.strip(), direction


def sort_users(records: Sequence[UserRecord], sort: Optional[Tuple[str, str]]) -> List[UserRecord]:
    """Stable sort by a supported field; unknown fields leave order as is."""
    if sort is None:
        return list(records)
    name, direction = sort
    key = SORT_KEYS.get(name)
    if key is None:
        return list(records)
    # sorted(reverse=True) keeps ties in their original order.
    return sorted(records, key=key, reverse=direction == DESC)


def query_users(records: Sequence[UserRecord], options: Optional[QueryOptions] = None) -> QueryResult:
    """Return one page of ``records`` plus the number of matches."""
    options = options or QueryOptions()

    matches = list(records)
    if options.role is not None:
        matches = [user for user in matches if user.role.value == options.role]

    matches = sort_users(matches, options.sort)

    limit = clamp_limit(options.limit)
    offset = clamp_offset(options.offset)
    return QueryResult(items=matches[offset:offset + limit], total=len(matches))
