"""회원/팀 SQLAlchemy ORM 모델 정의.

Member/Team SQLAlchemy ORM model definitions.
A member optionally belongs to one team; a team has zero or more members.

Tables:
    - teams: 팀 (Team)
    - members: 회원, 팀 FK는 nullable (Member with an optional team reference)
"""

from __future__ import annotations

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


class Team(Base):
    """팀 모델.

    Team model. Members reference a team through ``members.team_id``.

    Attributes:
        id: 고유 식별자, 자동 생성 (Unique identifier, generated)
        name: 팀 이름 (Team name)

    Relationships:
        members: 소속 회원 목록 (Members belonging to this team)
    """

    __tablename__ = "teams"

    # 팀 고유 식별자 — Team unique identifier (auto-increment)
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # 팀 이름 — Team display name
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    members: Mapped[list[Member]] = relationship("Member", back_populates="team")

    def __repr__(self) -> str:
        return f"Team(id={self.id}, name={self.name!r})"


class Member(Base):
    """회원 모델 — 팀에 소속되지 않을 수도 있음.

    Member model. ``team_id`` is nullable, so a member may have no team.

    Attributes:
        id: 고유 식별자, 자동 생성 (Unique identifier, generated)
        username: 사용자 이름, nullable (Username, optional)
        age: 나이 (Age)
        team_id: 소속 팀 FK, nullable (Team foreign key, optional)

    Relationships:
        team: 소속 팀 (Owning team, may be None)
    """

    __tablename__ = "members"

    # 회원 고유 식별자 — Member unique identifier (auto-increment)
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # 사용자 이름 — Username (nullable)
    username: Mapped[str | None] = mapped_column(String(255), nullable=True)
    # 나이 — Age
    age: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    # 소속 팀 FK — Team reference (SET NULL: 팀 삭제 시 소속 해제)
    team_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("teams.id", ondelete="SET NULL"), nullable=True, index=True
    )

    team: Mapped[Team | None] = relationship("Team", back_populates="members")

    def change_team(self, team: Team) -> None:
        """소속 팀을 변경하고 양방향 관계를 맞춥니다.

        Move this member to ``team``. ``back_populates`` updates the old and
        new ``Team.members`` collections without loading them.
        """
        self.team = team

    def __repr__(self) -> str:
        return f"Member(id={self.id}, username={self.username!r}, age={self.age})"
