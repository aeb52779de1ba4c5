"""Tests for PaginationEngine."""

from __future__ import annotations

import pytest

from storefront_filtering.exceptions import InvalidPaginationError
from storefront_filtering.pagination import MAX_OFFSET, PageWindow, PaginationEngine


@pytest.fixture
def engine() -> PaginationEngine:
    return PaginationEngine(default_limit=10, max_limit=100)


def test_defaults(engine: PaginationEngine) -> None:
    assert engine.window() == PageWindow(page=1, limit=10, offset=0)


@pytest.mark.parametrize(
    ("page", "limit", "offset"),
    [("1", "10", 0), ("2", "10", 10), ("3", "7", 14), (" 4 ", "25", 75)],
)
def test_offset_is_page_minus_one_times_limit(
    engine: PaginationEngine, page: str, limit: str, offset: int
) -> None:
    window = engine.window(page, limit)

    assert window.offset == (window.page - 1) * window.limit == offset


def test_limit_is_clamped(engine: PaginationEngine) -> None:
    assert engine.window("1", "100000").limit == 100


@pytest.mark.parametrize("value", ["0", "-1", "abc", "1.5", "", "²"])
def test_invalid_page(engine: PaginationEngine, value: str) -> None:
    with pytest.raises(InvalidPaginationError) as exc_info:
        engine.window(page=value)

    assert exc_info.value.param == "page"


@pytest.mark.parametrize("value", ["0", "ten", 0, -5])
def test_invalid_limit(engine: PaginationEngine, value: object) -> None:
    with pytest.raises(InvalidPaginationError):
        engine.window(limit=value)


def test_page_beyond_storage_offset(engine: PaginationEngine) -> None:
    with pytest.raises(InvalidPaginationError) as exc_info:
        engine.window(page="99999999999999999999", limit="10")

    assert exc_info.value.param == "page"
    assert engine.window(page=str(MAX_OFFSET // 10 + 1), limit="10").offset <= MAX_OFFSET


def test_integer_input_accepted(engine: PaginationEngine) -> None:
    assert engine.window(2, 5) == PageWindow(page=2, limit=5, offset=5)


@pytest.mark.parametrize(
    ("page", "limit", "total", "pages", "has_next", "has_prev"),
    [
        (1, 10, 0, 0, False, False),
        (1, 10, 10, 1, False, False),
        (1, 10, 11, 2, True, False),
        (2, 10, 12, 2, False, True),
        (5, 10, 12, 2, False, True),
    ],
)
def test_meta(
    engine: PaginationEngine,
    page: int,
    limit: int,
    total: int,
    pages: int,
    has_next: bool,
    has_prev: bool,
) -> None:
    meta = engine.meta(engine.window(page, limit), total)

    assert meta.pages == pages
    assert meta.total == total
    assert meta.has_next is has_next
    assert meta.has_prev is has_prev


def test_meta_to_dict(engine: PaginationEngine) -> None:
    assert engine.meta(engine.window("2", "10"), 12).to_dict() == {
        "current": 2,
        "pages": 2,
        "total": 12,
        "hasNext": False,
        "hasPrev": True,
    }


def test_meta_is_idempotent(engine: PaginationEngine) -> None:
    first = engine.meta(engine.window("3", "4"), 30)
    second = engine.meta(engine.window("3", "4"), 30)

    assert first == second


def test_bad_configuration() -> None:
    with pytest.raises(ValueError):
        PaginationEngine(default_limit=200, max_limit=100)
