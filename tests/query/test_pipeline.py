from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

import pytest

from src.hr_suite.hr_suite.core.enums import SortOrder
from src.hr_suite.hr_suite.core.exceptions import InvalidArgumentError
from src.hr_suite.hr_suite.query import ListQuery, QueryProfile, compare_values, run_query


@dataclass(frozen=True)
class Row:
    id: str
    title: str
    code: str
    status: str
    created_at: datetime
    score: Optional[int] = None
    active: bool = True


PROFILE = QueryProfile(
    search_fields=("title", "code"),
    default_sort_by="created_at",
    filterable=("status", "active"),
    param_aliases={"isActive": "active"},
)


def _rows():
    return [
        Row("1", "Backend Engineer", "JOB-2026-001", "published", datetime(2026, 1, 1), score=5),
        Row("2", "frontend engineer", "JOB-2026-002", "draft", datetime(2026, 1, 3), score=None),
        Row("3", "Accountant", "JOB-2026-003", "published", datetime(2026, 1, 2), score=9, active=False),
        Row("4", "Data Analyst", "JOB-2026-004", "closed", datetime(2026, 1, 5), score=5),
        Row("5", "Sales Lead", "ENG-2026-005", "published", datetime(2026, 1, 4), score=None),
    ]


def _ids(items):
    return [r.id for r in items]


def test_default_sort_is_created_at_descending():
    page = run_query(_rows(), ListQuery(), profile=PROFILE)

    assert _ids(page.items) == ["4", "5", "2", "3", "1"]
    assert page.total == 5


@pytest.mark.parametrize("page_no,limit", [(1, 1), (2, 2), (3, 2), (9, 3), (1, 100)])
def test_total_does_not_depend_on_paging(page_no, limit):
    page = run_query(_rows(), ListQuery(page=page_no, limit=limit, filters={"status": "published"}), profile=PROFILE)

    assert page.total == 3


@pytest.mark.parametrize("limit", [1, 2, 3, 4, 7])
def test_pages_concatenate_to_full_sequence(limit):
    full = run_query(_rows(), ListQuery(limit=100, sort_by="title", sort_order="asc"), profile=PROFILE).items

    collected = []
    pages = math.ceil(len(full) / limit)
    for n in range(1, pages + 1):
        collected.extend(run_query(_rows(), ListQuery(page=n, limit=limit, sort_by="title", sort_order="asc"), profile=PROFILE).items)

    assert _ids(collected) == _ids(full)
    assert len(set(_ids(collected))) == len(full)


def test_sorting_is_idempotent():
    query = ListQuery(limit=100, sort_by="score", sort_order="desc")
    once = run_query(_rows(), query, profile=PROFILE).items
    twice = run_query(once, query, profile=PROFILE).items

    assert _ids(once) == _ids(twice)


@pytest.mark.parametrize("order", ["asc", "desc"])
def test_missing_sort_values_always_go_last(order):
    page = run_query(_rows(), ListQuery(sort_by="score", sort_order=order), profile=PROFILE)

    assert _ids(page.items)[-2:] == ["2", "5"]


def test_equal_keys_keep_their_order_in_both_directions():
    asc = run_query(_rows(), ListQuery(sort_by="score", sort_order="asc"), profile=PROFILE)
    desc = run_query(_rows(), ListQuery(sort_by="score", sort_order="desc"), profile=PROFILE)

    assert _ids(asc.items) == ["1", "4", "3", "2", "5"]
    assert _ids(desc.items) == ["3", "1", "4", "2", "5"]


def test_string_sort_ignores_case():
    page = run_query(_rows(), ListQuery(sort_by="title", sort_order=SortOrder.ASC), profile=PROFILE)

    assert [r.title for r in page.items] == [
        "Accountant",
        "Backend Engineer",
        "Data Analyst",
        "frontend engineer",
        "Sales Lead",
    ]


def test_compare_values_by_runtime_type():
    assert compare_values("apple", "Banana") < 0
    assert compare_values(10, 9) > 0
    assert compare_values(2.5, 2.5) == 0
    assert compare_values(datetime(2026, 1, 1), datetime(2025, 12, 31)) > 0
    assert compare_values(date(2026, 1, 1), date(2026, 1, 2)) < 0
    # mixed types fall back to their text
    assert compare_values(10, "9") < 0


def test_search_matches_any_designated_field_case_insensitively():
    by_title = run_query(_rows(), ListQuery(search="ENGINEER"), profile=PROFILE)
    by_code = run_query(_rows(), ListQuery(search="eng-"), profile=PROFILE)

    assert sorted(_ids(by_title.items)) == ["1", "2"]
    assert _ids(by_code.items) == ["5"]


def test_filters_and_search_are_combined():
    page = run_query(_rows(), ListQuery(filters={"status": "published"}, search="engineer"), profile=PROFILE)

    assert _ids(page.items) == ["1"]
    assert page.total == 1


def test_boolean_filter_accepts_query_string_values():
    page = run_query(_rows(), ListQuery.from_args({"isActive": "false"}, PROFILE), profile=PROFILE)

    assert _ids(page.items) == ["3"]


def test_out_of_range_page_is_empty():
    page = run_query(_rows(), ListQuery(page=4, limit=2), profile=PROFILE)

    assert page.items == []
    assert page.total == 5
    assert page.total_pages == 3


@pytest.mark.parametrize("kwargs", [{"page": 0}, {"page": -1}, {"limit": 0}, {"limit": 101}])
def test_invalid_paging_is_rejected(kwargs):
    with pytest.raises(InvalidArgumentError):
        ListQuery(**kwargs)


def test_unknown_filter_is_rejected():
    with pytest.raises(InvalidArgumentError):
        run_query(_rows(), ListQuery(filters={"owner": "x"}), profile=PROFILE)


def test_sortable_allow_list_is_enforced():
    strict = QueryProfile(search_fields=("title",), default_sort_by="created_at", sortable=("created_at", "title"))

    with pytest.raises(InvalidArgumentError):
        run_query(_rows(), ListQuery(sort_by="score"), profile=strict)


def test_from_args_parses_request_parameters():
    query = ListQuery.from_args(
        {"page": "2", "limit": "3", "status": "draft", "search": "eng", "sortBy": "title", "sortOrder": "asc", "foo": "bar"},
        PROFILE,
    )

    assert query.page == 2
    assert query.limit == 3
    assert query.filters == {"status": "draft"}
    assert query.search == "eng"
    assert query.sort_by == "title"
    assert query.sort_order == SortOrder.ASC


@pytest.mark.parametrize("args", [{"page": "abc"}, {"limit": "1.5"}, {"sortOrder": "sideways"}, {"page": "0"}])
def test_from_args_rejects_bad_values(args):
    with pytest.raises(InvalidArgumentError):
        ListQuery.from_args(args, PROFILE)
