"""회원 검색 관련 Pydantic 스키마 정의.

Member search Pydantic schema definitions.
Includes the immutable search condition and the member/team projection
returned by the search queries.
"""

from pydantic import BaseModel, ConfigDict, Field


class MemberSearchCondition(BaseModel):
    """회원 검색 조건 — 모든 필드는 선택 사항.

    Member search condition. Every field is optional and an unset field
    adds no filter; blank strings are treated the same as unset ones.
    ``age_goe > age_loe`` is accepted and simply matches nothing.

    Attributes:
        username: 사용자 이름 일치 (Exact username match)
        team_name: 팀 이름 일치 (Exact team name match)
        age_goe: 나이 하한, 이상 (Inclusive lower age bound)
        age_loe: 나이 상한, 이하 (Inclusive upper age bound)
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    username: str | None = None
    team_name: str | None = Field(default=None, alias="teamName")
    age_goe: int | None = Field(default=None, alias="ageGoe")
    age_loe: int | None = Field(default=None, alias="ageLoe")


class MemberTeamDto(BaseModel):
    """회원-팀 조인 프로젝션.

    Flattened, read-only member/team projection produced by the left join.
    Team fields are None for members without a team.
    """

    model_config = ConfigDict(frozen=True)

    member_id: int  # 회원 ID (Member id)
    username: str | None  # 사용자 이름 (Username, nullable)
    age: int  # 나이 (Age)
    team_id: int | None  # 팀 ID, 팀 없으면 None (Team id, None without team)
    team_name: str | None  # 팀 이름, 팀 없으면 None (Team name, None without team)
