from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Generic, List, Mapping, Optional, Tuple, TypeVar

from ..core.constants import DEFAULT_PAGE, DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT
from ..core.enums import SortOrder
from ..core.exceptions import InvalidArgumentError

T = TypeVar("T")


@dataclass(frozen=True)
class QueryProfile:
    """Per-entity knobs for the list pipeline.

    ``param_aliases`` maps request parameter names (e.g. ``jobPostingId``) onto
    record field names. A ``sortable`` of None allows sorting by any field.
    """

    search_fields: Tuple[str, ...]
    default_sort_by: str
    filterable: Tuple[str, ...] = ("status",)
    sortable: Optional[Tuple[str, ...]] = None
    param_aliases: Mapping[str, str] = field(default_factory=dict)

    def field_for(self, name: str) -> str:
        return self.param_aliases.get(name, name)


@dataclass(frozen=True)
class ListQuery:
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_PAGE_LIMIT
    filters: Mapping[str, Any] = field(default_factory=dict)
    search: Optional[str] = None
    sort_by: Optional[str] = None
    sort_order: SortOrder = SortOrder.DESC
    max_limit: int = MAX_PAGE_LIMIT

    def __post_init__(self) -> None:
        if isinstance(self.page, bool) or not isinstance(self.page, int) or self.page < 1:
            raise InvalidArgumentError("page must be a positive integer")
        if isinstance(self.limit, bool) or not isinstance(self.limit, int) or self.limit < 1:
            raise InvalidArgumentError("limit must be a positive integer")
        if self.limit > self.max_limit:
            raise InvalidArgumentError(f"limit must not exceed {self.max_limit}")
        try:
            object.__setattr__(self, "sort_order", SortOrder(self.sort_order))
        except ValueError:
            raise InvalidArgumentError("sortOrder must be 'asc' or 'desc'")
        object.__setattr__(self, "filters", {k: v for k, v in dict(self.filters).items() if v is not None and v != ""})

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    @classmethod
    def from_args(
        cls,
        args: Mapping[str, Any],
        profile: QueryProfile,
        *,
        default_limit: int = DEFAULT_PAGE_LIMIT,
        max_limit: int = MAX_PAGE_LIMIT,
    ) -> "ListQuery":
        """Build a query from request parameters (``page``, ``limit``, ``search``,
        ``sortBy``, ``sortOrder`` and the profile's filter keys)."""

        page = _parse_int(args.get("page"), "page", DEFAULT_PAGE)
        limit = _parse_int(args.get("limit"), "limit", default_limit)

        filters: dict[str, Any] = {}
        for name, value in args.items():
            if name in _PAGING_PARAMS:
                continue
            field_name = profile.field_for(name)
            if field_name in profile.filterable:
                filters[field_name] = value

        return cls(
            page=page,
            limit=limit,
            filters=filters,
            search=args.get("search") or None,
            sort_by=args.get("sortBy") or args.get("sort_by") or None,
            sort_order=args.get("sortOrder") or args.get("sort_order") or SortOrder.DESC,
            max_limit=max_limit,
        )


_PAGING_PARAMS = frozenset({"page", "limit", "search", "sortBy", "sort_by", "sortOrder", "sort_order"})


def _parse_int(value: Any, name: str, default: int) -> int:
    if value is None or value == "":
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        raise InvalidArgumentError(f"{name} must be a positive integer")


@dataclass(frozen=True)
class Page(Generic[T]):
    items: List[T]
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0

    def pagination(self) -> dict:
        return {
            "page": self.page,
            "limit": self.limit,
            "total": self.total,
            "totalPages": self.total_pages,
        }
