"""페이지네이션 유틸리티 단위 테스트.

Pagination utility unit tests — COUNT elision decisions, Page helpers,
PageRequest validation and sort parsing. No database required.
"""

from unittest.mock import AsyncMock

import pytest
from pydantic import ValidationError

from app.utils.exceptions import BadRequestError
from app.utils.pagination import (
    MAX_OFFSET,
    Page,
    PageRequest,
    SortOrder,
    TotalResolution,
    get_page,
    parse_sort,
    resolve_total,
)


class TestResolveTotal:
    """COUNT 쿼리 생략 판단 테스트."""

    def test_first_page_under_full(self):
        """첫 페이지가 덜 찼으면 total = 컨텐츠 수."""
        assert resolve_total(0, 10, 3) == TotalResolution(3, False)

    def test_first_page_empty(self):
        """첫 페이지가 비었으면 total = 0."""
        assert resolve_total(0, 10, 0) == TotalResolution(0, False)

    def test_last_page_under_full(self):
        """마지막 페이지가 덜 찼으면 total = offset + 컨텐츠 수."""
        assert resolve_total(2, 2, 1) == TotalResolution(3, False)

    def test_full_first_page_needs_count(self):
        """꽉 찬 페이지는 COUNT 필요."""
        assert resolve_total(0, 2, 2) == TotalResolution(None, True)

    def test_full_later_page_needs_count(self):
        assert resolve_total(40, 20, 20) == TotalResolution(None, True)

    def test_empty_page_past_end_needs_count(self):
        """범위를 벗어난 빈 페이지는 끝을 알 수 없으므로 COUNT 필요."""
        assert resolve_total(100, 20, 0) == TotalResolution(None, True)

    @pytest.mark.parametrize("limit", [1, 5, 50])
    def test_under_full_first_page_any_limit(self, limit):
        for size in range(limit):
            resolution = resolve_total(0, limit, size)
            assert resolution.total == size
            assert resolution.needs_count_query is False


class TestGetPage:
    """get_page — COUNT 콜백 호출 여부 테스트."""

    async def test_count_not_called_when_derivable(self):
        count_query = AsyncMock(return_value=999)
        page = await get_page(["a", "b"], PageRequest(offset=0, limit=5), count_query)

        count_query.assert_not_awaited()
        assert page.total == 2
        assert page.content == ["a", "b"]

    async def test_count_called_once_for_full_page(self):
        count_query = AsyncMock(return_value=7)
        page = await get_page(["a", "b"], PageRequest(offset=0, limit=2), count_query)

        count_query.assert_awaited_once()
        assert page.total == 7

    async def test_last_page_total_from_offset(self):
        count_query = AsyncMock(return_value=999)
        page = await get_page(["c"], PageRequest(offset=4, limit=2), count_query)

        count_query.assert_not_awaited()
        assert page.total == 5


class TestPage:
    """Page 파생 속성 테스트."""

    def test_helpers(self):
        page = Page[int](content=[1, 2], total=5, offset=2, limit=2)
        assert page.number == 1
        assert page.total_pages == 3
        assert page.has_next is True

    def test_last_page_has_no_next(self):
        page = Page[int](content=[5], total=5, offset=4, limit=2)
        assert page.has_next is False

    def test_empty(self):
        page = Page[int](content=[], total=0, offset=0, limit=20)
        assert page.total_pages == 0
        assert page.has_next is False

    def test_serializes_helpers(self):
        data = Page[int](content=[1], total=1, offset=0, limit=10).model_dump()
        assert data["total_pages"] == 1
        assert data["has_next"] is False


class TestPageRequest:
    """PageRequest 검증 테스트 — 잘못된 값은 거부."""

    def test_of_computes_offset(self):
        request = PageRequest.of(3, 20)
        assert request.offset == 60
        assert request.limit == 20
        assert request.sort == ()

    def test_negative_offset_rejected(self):
        with pytest.raises(ValidationError):
            PageRequest(offset=-1, limit=10)

    @pytest.mark.parametrize("limit", [0, -5])
    def test_non_positive_limit_rejected(self, limit):
        with pytest.raises(ValidationError):
            PageRequest(offset=0, limit=limit)

    def test_offset_beyond_64bit_rejected(self):
        with pytest.raises(ValidationError):
            PageRequest(offset=2**63, limit=10)

    def test_max_offset_accepted(self):
        assert PageRequest(offset=MAX_OFFSET, limit=10).offset == MAX_OFFSET

    def test_frozen(self):
        request = PageRequest(offset=0, limit=10)
        with pytest.raises(ValidationError):
            request.offset = 5


class TestParseSort:
    """정렬 문자열 해석 테스트."""

    def test_default_ascending(self):
        assert parse_sort(["age"], {"age"}) == (SortOrder(field="age"),)

    def test_descending(self):
        orders = parse_sort(["age,desc", "username,asc"], {"age", "username"})
        assert orders == (
            SortOrder(field="age", descending=True),
            SortOrder(field="username", descending=False),
        )

    def test_unknown_field(self):
        with pytest.raises(BadRequestError) as exc_info:
            parse_sort(["height"], {"age"})
        assert exc_info.value.status_code == 400

    def test_unknown_direction(self):
        with pytest.raises(BadRequestError):
            parse_sort(["age,sideways"], {"age"})
