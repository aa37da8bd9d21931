"""페이지네이션 유틸리티 모듈.

Pagination utility module for SQLAlchemy async queries.
Provides the offset/limit request model, the generic Page response model,
and the count-query elision used by the optimized search path.

Count-query elision rules (``resolve_total``):
    1. 첫 페이지이면서 컨텐츠 수가 페이지 크기보다 작을 때 → total = 컨텐츠 수
       (First page, under-full → total is the content size)
    2. 마지막 페이지이면서 컨텐츠 수가 페이지 크기보다 작을 때 → total = offset + 컨텐츠 수
       (Later page, under-full but not empty → total is offset + content size)
    3. 그 외 (꽉 찬 페이지, 범위를 벗어난 빈 페이지) → COUNT 쿼리 필요
       (Full page, or empty page past the end → count query required)
"""

import logging
import math
from collections.abc import Awaitable, Callable, Iterable, Sequence
from typing import Generic, NamedTuple, TypeVar

from pydantic import BaseModel, ConfigDict, Field, computed_field

from app.utils.exceptions import BadRequestError

T = TypeVar("T")

logger = logging.getLogger(__name__)

# 오프셋 상한 — DB 64비트 정수 범위 (Largest offset a 64-bit DB integer holds)
MAX_OFFSET = 2**63 - 1


class SortOrder(BaseModel):
    """정렬 조건 — 필드명과 방향.

    A single sort key. ``field`` names a projection field, not a column.
    """

    model_config = ConfigDict(frozen=True)

    field: str
    descending: bool = False


class PageRequest(BaseModel):
    """오프셋 기반 페이지 요청.

    Offset/limit page descriptor supplied by the caller.
    Negative offsets and non-positive limits are rejected at construction
    with ``pydantic.ValidationError``; nothing is clamped.

    Attributes:
        offset: 건너뛸 행 수, 0 ~ MAX_OFFSET (Rows to skip, 0..MAX_OFFSET)
        limit: 페이지 크기, 1 이상 (Page size, >= 1)
        sort: 정렬 조건 목록, 비어 있으면 DB 기본 순서 (Sort keys; empty means store order)
    """

    model_config = ConfigDict(frozen=True)

    offset: int = Field(0, ge=0, le=MAX_OFFSET)
    limit: int = Field(20, ge=1)
    sort: tuple[SortOrder, ...] = ()

    @classmethod
    def of(
        cls,
        page: int,
        size: int,
        sort: Iterable[SortOrder] = (),
    ) -> "PageRequest":
        """0부터 시작하는 페이지 번호로 요청을 만듭니다.

        Build a request from a zero-based page number and page size.
        """
        return cls(offset=page * size, limit=size, sort=tuple(sort))


class Page(BaseModel, Generic[T]):
    """페이지네이션 결과 모델.

    Pagination result model: the fetched slice plus the total count of all
    rows matching the filter, ignoring paging.

    Attributes:
        content: 현재 페이지 항목 목록 (Items for the current page)
        total: 전체 항목 수 (Total count across all pages)
        offset: 요청 오프셋 (Requested offset)
        limit: 요청 페이지 크기 (Requested page size)
    """

    content: list[T]
    total: int = Field(ge=0)
    offset: int
    limit: int

    @computed_field  # type: ignore[prop-decorator]
    @property
    def number(self) -> int:
        """현재 페이지 번호, 0부터 시작 (Zero-based page index)."""
        return self.offset // self.limit

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total_pages(self) -> int:
        """전체 페이지 수 (Total pages, ceil(total/limit))."""
        return math.ceil(self.total / self.limit)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def has_next(self) -> bool:
        """다음 페이지 존재 여부 (Whether rows remain after this page)."""
        return self.offset + len(self.content) < self.total


class TotalResolution(NamedTuple):
    """COUNT 쿼리 생략 판단 결과.

    ``total`` is None exactly when ``needs_count_query`` is True.
    """

    total: int | None
    needs_count_query: bool


def resolve_total(offset: int, limit: int, content_size: int) -> TotalResolution:
    """페이지 모양만으로 전체 개수를 구할 수 있는지 판단합니다.

    Decide from page geometry alone whether the total is known without a
    count query, and compute it when it is.

    Args:
        offset: 요청 오프셋 (Requested offset)
        limit: 요청 페이지 크기 (Requested page size)
        content_size: 실제로 조회된 행 수 (Rows returned by the bounded fetch)

    Returns:
        TotalResolution: (전체 개수 또는 None, COUNT 쿼리 필요 여부)
    """
    if content_size < limit:
        if offset == 0:
            return TotalResolution(content_size, False)
        if content_size > 0:
            return TotalResolution(offset + content_size, False)
    return TotalResolution(None, True)


async def get_page(
    content: Sequence[T],
    page_request: PageRequest,
    count_query: Callable[[], Awaitable[int]],
) -> Page[T]:
    """조회 결과로 Page를 만들고, 필요할 때만 COUNT 쿼리를 실행합니다.

    Build a Page from already fetched content, awaiting ``count_query`` only
    when the total cannot be derived from the page geometry.

    Args:
        content: 오프셋/리밋이 적용된 조회 결과 (Result of the bounded fetch)
        page_request: 페이지 요청 (Page request used for the fetch)
        count_query: 전체 개수를 반환하는 지연 호출 (Deferred count query)

    Returns:
        Page[T]: 페이지 결과 (Page result)
    """
    resolution = resolve_total(page_request.offset, page_request.limit, len(content))
    if resolution.needs_count_query:
        total: int = await count_query()
        logger.debug(
            "count query issued: offset=%d limit=%d content=%d total=%d",
            page_request.offset, page_request.limit, len(content), total,
        )
    else:
        total = resolution.total  # type: ignore[assignment]
        logger.debug(
            "count query elided: offset=%d limit=%d content=%d total=%d",
            page_request.offset, page_request.limit, len(content), total,
        )
    return Page(
        content=list(content),
        total=total,
        offset=page_request.offset,
        limit=page_request.limit,
    )


def parse_sort(values: Iterable[str], allowed: Iterable[str]) -> tuple[SortOrder, ...]:
    """``"field"`` / ``"field,desc"`` 형식의 정렬 문자열을 해석합니다.

    Parse sort strings of the form ``field`` or ``field,asc|desc``.

    Raises:
        BadRequestError: 허용되지 않은 필드나 방향 (Unknown field or direction)
    """
    allowed_fields: set[str] = set(allowed)
    orders: list[SortOrder] = []
    for value in values:
        field, _, direction = value.partition(",")
        field = field.strip()
        direction = direction.strip().lower() or "asc"
        if field not in allowed_fields:
            raise BadRequestError(f"Unsupported sort field: {field}")
        if direction not in ("asc", "desc"):
            raise BadRequestError(f"Unsupported sort direction: {direction}")
        orders.append(SortOrder(field=field, descending=direction == "desc"))
    return tuple(orders)
