"""회원 검색 서비스 — 검색 조건/페이지 요청 해석 및 검색 전략 선택.

Member Search Service — Turns request parameters into a PageRequest and
dispatches to the unpaged, simple, or count-eliding repository search.
"""

from collections.abc import Iterable

from sqlalchemy.ext.asyncio import AsyncSession

from app.repositories.member_repository import SORTABLE_COLUMNS, member_repository
from app.schemas.member import MemberSearchCondition, MemberTeamDto
from app.utils.pagination import Page, PageRequest, parse_sort


class MemberService:
    """회원 검색 비즈니스 로직을 처리하는 서비스.

    Service handling member search. Both paging strategies are exposed:
    ``search_page_simple`` always counts, ``search_page_complex`` counts
    only when the page geometry leaves the total unknown.
    """

    def page_request(
        self,
        page: int,
        size: int,
        sort: Iterable[str] = (),
    ) -> PageRequest:
        """페이지 번호/크기/정렬 문자열로 PageRequest를 만듭니다.

        Build a PageRequest from a zero-based page, a size and sort strings.

        Raises:
            BadRequestError: 지원하지 않는 정렬 필드 (Unsupported sort field)
        """
        return PageRequest.of(page, size, parse_sort(sort, SORTABLE_COLUMNS))

    async def search(
        self,
        db: AsyncSession,
        condition: MemberSearchCondition,
        sort: Iterable[str] = (),
    ) -> list[MemberTeamDto]:
        """조건에 맞는 회원 전체 목록을 조회합니다.

        List every member matching ``condition`` without paging.
        """
        return await member_repository.search(
            db, condition, parse_sort(sort, SORTABLE_COLUMNS)
        )

    async def search_page_simple(
        self,
        db: AsyncSession,
        condition: MemberSearchCondition,
        page_request: PageRequest,
    ) -> Page[MemberTeamDto]:
        """COUNT 쿼리를 항상 실행하는 페이지 검색.

        Paged search that always issues the count query.
        """
        return await member_repository.search_page_simple(db, condition, page_request)

    async def search_page_complex(
        self,
        db: AsyncSession,
        condition: MemberSearchCondition,
        page_request: PageRequest,
    ) -> Page[MemberTeamDto]:
        """가능하면 COUNT 쿼리를 생략하는 페이지 검색.

        Paged search that skips the count query when the total is derivable.
        """
        return await member_repository.search_page_complex(db, condition, page_request)


# 싱글턴 인스턴스 — Singleton instance
member_service: MemberService = MemberService()
