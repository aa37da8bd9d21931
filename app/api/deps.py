"""FastAPI 의존성 주입 모듈 — 검색 조건 및 페이지 요청 추출.

FastAPI dependency injection module — Search condition and paging.
Provides reusable dependencies that read query-string parameters into
MemberSearchCondition and PageRequest.

Query Parameters:
    - username, teamName, ageGoe, ageLoe: 검색 조건, 모두 선택 (Optional filters)
    - page: 0부터 시작하는 페이지 번호, page * size가 64비트 범위 안 (Zero-based page, offset stays in 64-bit range)
    - size: 페이지 크기, 1 ~ MAX_PAGE_SIZE (Page size, 1..MAX_PAGE_SIZE)
    - sort: "field" 또는 "field,desc", 반복 가능 (Repeatable sort keys)
"""

from typing import Annotated

from fastapi import Depends, Query

from app.config import settings
from app.schemas.member import MemberSearchCondition
from app.services.member_service import member_service
from app.utils.pagination import MAX_OFFSET, PageRequest


def get_search_condition(
    username: Annotated[str | None, Query()] = None,
    team_name: Annotated[str | None, Query(alias="teamName")] = None,
    age_goe: Annotated[int | None, Query(alias="ageGoe")] = None,
    age_loe: Annotated[int | None, Query(alias="ageLoe")] = None,
) -> MemberSearchCondition:
    """쿼리 파라미터에서 회원 검색 조건을 만듭니다.

    Build a MemberSearchCondition from query parameters.
    """
    return MemberSearchCondition(
        username=username,
        team_name=team_name,
        age_goe=age_goe,
        age_loe=age_loe,
    )


def get_sort(
    sort: Annotated[list[str] | None, Query()] = None,
) -> list[str]:
    """반복 가능한 sort 쿼리 파라미터 (Repeatable ``sort`` parameter)."""
    return sort or []


def get_page_request(
    sort: Annotated[list[str], Depends(get_sort)],
    page: Annotated[int, Query(ge=0, le=MAX_OFFSET // settings.MAX_PAGE_SIZE)] = 0,
    size: Annotated[int, Query(ge=1, le=settings.MAX_PAGE_SIZE)] = settings.DEFAULT_PAGE_SIZE,
) -> PageRequest:
    """쿼리 파라미터에서 페이지 요청을 만듭니다.

    Build a PageRequest from ``page``/``size``/``sort``. Out-of-range values
    are rejected with 422 by query validation; unknown sort fields with 400.
    """
    return member_service.page_request(page, size, sort)
