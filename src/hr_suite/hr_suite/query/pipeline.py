"""Filter -> sort -> paginate, shared by every list view.

The pipeline is a pure function over a snapshot of records; it never touches
the store and never mutates the records it is given.
"""
from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from functools import cmp_to_key
from typing import Any, Iterable, List, Mapping, Optional, TypeVar

from ..core.enums import SortOrder
from ..core.exceptions import InvalidArgumentError
from .model import ListQuery, Page, QueryProfile

T = TypeVar("T")


def _text(value: Any) -> str:
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def _collate(a: str, b: str) -> int:
    # Case-insensitive first, raw text breaks ties ("a" < "B" < "b").
    ka = (a.casefold(), a)
    kb = (b.casefold(), b)
    return (ka > kb) - (ka < kb)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


def compare_values(a: Any, b: Any) -> int:
    """Three-way compare of two defined sort keys, resolved by runtime type."""
    if isinstance(a, str) and isinstance(b, str):
        return _collate(_text(a), _text(b))
    if _is_number(a) and _is_number(b):
        return (a > b) - (a < b)
    if isinstance(a, datetime) and isinstance(b, datetime):
        return (a > b) - (a < b)
    if (
        isinstance(a, date)
        and isinstance(b, date)
        and not isinstance(a, datetime)
        and not isinstance(b, datetime)
    ):
        return (a > b) - (a < b)
    return _collate(_text(a), _text(b))


def _equals(actual: Any, expected: Any) -> bool:
    if isinstance(actual, bool) and isinstance(expected, str):
        return actual == (expected.strip().lower() in {"1", "true", "yes"})
    if isinstance(actual, Enum) and not isinstance(expected, Enum):
        return _text(actual) == _text(expected)
    return actual == expected


def _matches_filters(record: Any, filters: Mapping[str, Any]) -> bool:
    return all(_equals(getattr(record, name, None), expected) for name, expected in filters.items())


def _matches_search(record: Any, term: str, fields: Iterable[str]) -> bool:
    for name in fields:
        value = getattr(record, name, None)
        if value is not None and term in _text(value).casefold():
            return True
    return False


def sort_records(records: List[T], sort_by: str, order: SortOrder) -> List[T]:
    """Stable sort; records whose key is None always go last, in input order."""
    defined = []
    undefined = []
    for record in records:
        value = getattr(record, sort_by, None)
        if value is None:
            undefined.append(record)
        else:
            defined.append((value, record))

    defined.sort(key=cmp_to_key(lambda x, y: compare_values(x[0], y[0])), reverse=order == SortOrder.DESC)
    return [record for _, record in defined] + undefined


def run_query(records: Iterable[T], query: ListQuery, *, profile: QueryProfile) -> Page[T]:
    unknown = [name for name in query.filters if name not in profile.filterable]
    if unknown:
        raise InvalidArgumentError(f"Unsupported filter: {', '.join(sorted(unknown))}")

    sort_by = query.sort_by or profile.default_sort_by
    if profile.sortable is not None and sort_by not in profile.sortable:
        raise InvalidArgumentError(f"Unsupported sort field: {sort_by}")

    rows = [r for r in records if _matches_filters(r, query.filters)]

    term: Optional[str] = query.search.strip().casefold() if query.search else None
    if term:
        rows = [r for r in rows if _matches_search(r, term, profile.search_fields)]

    rows = sort_records(rows, sort_by, query.sort_order)

    total = len(rows)
    items = rows[query.offset : query.offset + query.limit]
    return Page(items=items, total=total, page=query.page, limit=query.limit)
