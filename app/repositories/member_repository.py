"""회원 레포지토리 — 동적 조건 검색 및 페이지네이션 쿼리.

Member Repository — Dynamic-condition search and pagination queries.
Every search left-joins members to teams, applies the predicates built from
a MemberSearchCondition, and projects rows onto MemberTeamDto.

Predicate helpers (``username_eq``, ``team_name_eq``, ``age_goe``,
``age_loe``) return ``None`` for an absent condition so callers can compose
any subset and drop the Nones before folding them with AND.
"""

from collections.abc import Sequence

from sqlalchemy import ColumnElement, Select, and_, func, select, true
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.member import Member, Team
from app.repositories.base import BaseRepository
from app.schemas.member import MemberSearchCondition, MemberTeamDto
from app.utils.pagination import Page, PageRequest, SortOrder, get_page

# 정렬 가능한 프로젝션 필드 → 컬럼 매핑 (Sortable projection field → column)
SORTABLE_COLUMNS = {
    "member_id": Member.id,
    "username": Member.username,
    "age": Member.age,
    "team_id": Team.id,
    "team_name": Team.name,
}


def _has_text(value: str | None) -> bool:
    """공백이 아닌 문자가 하나 이상 있는지 (At least one non-whitespace char)."""
    return value is not None and value.strip() != ""


def username_eq(username: str | None) -> ColumnElement[bool] | None:
    """사용자 이름 일치 조건, 빈 문자열이면 None."""
    return Member.username == username if _has_text(username) else None


def team_name_eq(team_name: str | None) -> ColumnElement[bool] | None:
    """팀 이름 일치 조건, 빈 문자열이면 None. teams 조인이 필요합니다."""
    return Team.name == team_name if _has_text(team_name) else None


def age_goe(age: int | None) -> ColumnElement[bool] | None:
    """나이 이상 조건 (age >= value)."""
    return Member.age >= age if age is not None else None


def age_loe(age: int | None) -> ColumnElement[bool] | None:
    """나이 이하 조건 (age <= value)."""
    return Member.age <= age if age is not None else None


def age_between(
    goe: int | None, loe: int | None
) -> ColumnElement[bool] | None:
    """나이 범위 조건 — 두 경계 중 있는 것만 AND로 묶습니다.

    Compose the age bounds; None only when both bounds are absent.
    """
    predicates = [p for p in (age_goe(goe), age_loe(loe)) if p is not None]
    if not predicates:
        return None
    return and_(*predicates)


def search_predicates(condition: MemberSearchCondition) -> list[ColumnElement[bool]]:
    """검색 조건에서 존재하는 조건식만 모아 반환합니다.

    Return one predicate per populated field of ``condition``.

    Args:
        condition: 회원 검색 조건 (Member search condition)

    Returns:
        list[ColumnElement[bool]]: 조건식 목록, 비어 있으면 전체 조회
                                   (Predicates; empty means match all rows)
    """
    candidates = (
        username_eq(condition.username),
        team_name_eq(condition.team_name),
        age_goe(condition.age_goe),
        age_loe(condition.age_loe),
    )
    return [p for p in candidates if p is not None]


def search_filter(condition: MemberSearchCondition) -> ColumnElement[bool]:
    """모든 조건식을 AND로 합친 단일 조건식. 조건이 없으면 TRUE."""
    predicates = search_predicates(condition)
    if not predicates:
        return true()
    return and_(*predicates)


class MemberRepository(BaseRepository[Member]):
    """회원 레포지토리.

    Member repository with condition-based search over the member/team join.

    Extends:
        BaseRepository[Member]
    """

    def __init__(self) -> None:
        super().__init__(Member)

    def _projection_query(self, condition: MemberSearchCondition) -> Select:
        """회원-팀 left join 프로젝션 쿼리 (Member/team left-join projection)."""
        return (
            select(
                Member.id.label("member_id"),
                Member.username,
                Member.age,
                Team.id.label("team_id"),
                Team.name.label("team_name"),
            )
            .select_from(Member)
            .outerjoin(Team, Member.team_id == Team.id)
            .where(search_filter(condition))
        )

    @staticmethod
    def _apply_sort(query: Select, sort: Sequence[SortOrder]) -> Select:
        """명시적 정렬 조건이 있을 때만 ORDER BY를 붙입니다."""
        for order in sort:
            column = SORTABLE_COLUMNS[order.field]
            query = query.order_by(column.desc() if order.descending else column.asc())
        return query

    async def _fetch(self, db: AsyncSession, query: Select) -> list[MemberTeamDto]:
        result = await db.execute(query)
        return [MemberTeamDto.model_validate(dict(row)) for row in result.mappings()]

    async def search(
        self,
        db: AsyncSession,
        condition: MemberSearchCondition,
        sort: Sequence[SortOrder] = (),
    ) -> list[MemberTeamDto]:
        """조건에 맞는 회원을 페이지네이션 없이 조회합니다.

        Retrieve every member matching ``condition``, unpaged.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            condition: 회원 검색 조건 (Member search condition)
            sort: 정렬 조건, 없으면 DB 기본 순서 (Sort keys; empty keeps store order)

        Returns:
            list[MemberTeamDto]: 조회된 프로젝션 목록 (Matching projections)
        """
        query = self._apply_sort(self._projection_query(condition), sort)
        return await self._fetch(db, query)

    async def count(
        self,
        db: AsyncSession,
        condition: MemberSearchCondition,
    ) -> int:
        """조건에 맞는 회원 수를 COUNT 집계로 조회합니다.

        Count members matching ``condition`` with a COUNT aggregate over the
        same join and filter, without paging or projection.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            condition: 회원 검색 조건 (Member search condition)

        Returns:
            int: 조건에 맞는 전체 회원 수 (Total matching members)
        """
        query: Select = (
            select(func.count(Member.id))
            .select_from(Member)
            .outerjoin(Team, Member.team_id == Team.id)
            .where(search_filter(condition))
        )
        return (await db.execute(query)).scalar() or 0

    async def _fetch_page(
        self,
        db: AsyncSession,
        condition: MemberSearchCondition,
        page_request: PageRequest,
    ) -> list[MemberTeamDto]:
        """오프셋/리밋이 적용된 컨텐츠 조회 (Bounded content fetch)."""
        query = self._apply_sort(self._projection_query(condition), page_request.sort)
        query = query.offset(page_request.offset).limit(page_request.limit)
        return await self._fetch(db, query)

    async def search_page_simple(
        self,
        db: AsyncSession,
        condition: MemberSearchCondition,
        page_request: PageRequest,
    ) -> Page[MemberTeamDto]:
        """컨텐츠 조회와 COUNT 쿼리를 항상 함께 실행합니다.

        Run the bounded fetch and the count query every time.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            condition: 회원 검색 조건 (Member search condition)
            page_request: 페이지 요청 (Page request)

        Returns:
            Page[MemberTeamDto]: 페이지 결과 (Page result)
        """
        content = await self._fetch_page(db, condition, page_request)
        total: int = await self.count(db, condition)
        return Page[MemberTeamDto](
            content=content,
            total=total,
            offset=page_request.offset,
            limit=page_request.limit,
        )

    async def search_page_complex(
        self,
        db: AsyncSession,
        condition: MemberSearchCondition,
        page_request: PageRequest,
    ) -> Page[MemberTeamDto]:
        """컨텐츠를 먼저 조회하고 필요할 때만 COUNT 쿼리를 실행합니다.

        Run the bounded fetch first and issue the count query only when the
        total cannot be derived from the page geometry.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            condition: 회원 검색 조건 (Member search condition)
            page_request: 페이지 요청 (Page request)

        Returns:
            Page[MemberTeamDto]: 페이지 결과 (Page result)
        """
        content = await self._fetch_page(db, condition, page_request)

        # count 쿼리 — 조건에 부합하는 전체 행 수이므로 페이징 미적용
        # Count query, deferred; skipped when first/last page geometry suffices
        async def count_query() -> int:
            return await self.count(db, condition)

        return await get_page(content, page_request, count_query)


class TeamRepository(BaseRepository[Team]):
    """팀 레포지토리 (Team repository)."""

    def __init__(self) -> None:
        super().__init__(Team)


# 싱글턴 인스턴스 — Singleton instances
member_repository: MemberRepository = MemberRepository()
team_repository: TeamRepository = TeamRepository()
