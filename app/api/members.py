"""회원 검색 라우터 — 조건 검색 및 페이지 검색 엔드포인트.

Member Search Router — Condition search and paged search endpoints.

Endpoints:
    - GET /v1/members: 페이지네이션 없는 조건 검색 (Unpaged search)
    - GET /v2/members: 단순 페이지 검색, COUNT 항상 실행 (Simple paging, always counts)
    - GET /v3/members: 최적화 페이지 검색, COUNT 생략 가능 (Paging with count elision)
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_page_request, get_search_condition, get_sort
from app.database import get_db
from app.schemas.member import MemberSearchCondition, MemberTeamDto
from app.services.member_service import member_service
from app.utils.pagination import Page, PageRequest

router: APIRouter = APIRouter()


@router.get("/v1/members", response_model=list[MemberTeamDto])
async def search_members(
    db: Annotated[AsyncSession, Depends(get_db)],
    condition: Annotated[MemberSearchCondition, Depends(get_search_condition)],
    sort: Annotated[list[str], Depends(get_sort)],
) -> list[MemberTeamDto]:
    """조건에 맞는 회원 전체 목록을 조회합니다.

    List every member matching the condition.
    """
    return await member_service.search(db, condition, sort)


@router.get("/v2/members", response_model=Page[MemberTeamDto])
async def search_members_page_simple(
    db: Annotated[AsyncSession, Depends(get_db)],
    condition: Annotated[MemberSearchCondition, Depends(get_search_condition)],
    page_request: Annotated[PageRequest, Depends(get_page_request)],
) -> Page[MemberTeamDto]:
    """회원 페이지 검색 — COUNT 쿼리를 항상 실행합니다.

    Paged member search that always runs the count query.
    """
    return await member_service.search_page_simple(db, condition, page_request)


@router.get("/v3/members", response_model=Page[MemberTeamDto])
async def search_members_page_complex(
    db: Annotated[AsyncSession, Depends(get_db)],
    condition: Annotated[MemberSearchCondition, Depends(get_search_condition)],
    page_request: Annotated[PageRequest, Depends(get_page_request)],
) -> Page[MemberTeamDto]:
    """회원 페이지 검색 — 첫/마지막 페이지에서는 COUNT 쿼리를 생략합니다.

    Paged member search that skips the count query when the page geometry
    already determines the total.
    """
    return await member_service.search_page_complex(db, condition, page_request)
