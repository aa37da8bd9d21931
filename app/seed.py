"""초기 데이터 시드 스크립트 — 팀 2개와 회원 100명 생성.

Seed script — Creates two teams and one hundred members for local use.

Usage:
    python -m app.seed

Creates:
    - 2개 팀: teamA, teamB (2 teams)
    - 100명 회원: member0 ~ member99, 나이 = 번호, 짝수는 teamA / 홀수는 teamB
      (100 members, age equals the index, even → teamA, odd → teamB)
"""

import asyncio

from sqlalchemy.ext.asyncio import AsyncSession

from app.database import Base, async_session, engine
from app.models import Team
from app.repositories.member_repository import member_repository, team_repository

MEMBER_COUNT = 100


async def seed_members(db: AsyncSession, member_count: int = MEMBER_COUNT) -> list[Team]:
    """팀과 회원을 생성합니다 (Insert the teams and members).

    Returns:
        list[Team]: 생성된 팀 목록 [teamA, teamB] (Created teams)
    """
    team_a: Team = await team_repository.create(db, {"name": "teamA"})
    team_b: Team = await team_repository.create(db, {"name": "teamB"})

    for i in range(member_count):
        selected: Team = team_a if i % 2 == 0 else team_b
        await member_repository.create(
            db, {"username": f"member{i}", "age": i, "team_id": selected.id}
        )
    return [team_a, team_b]


async def seed() -> None:
    """데이터베이스를 초기 데이터로 시드합니다.

    Seed the database with initial data.
    Creates tables if they don't exist, then inserts teams and members.

    Idempotent: 이미 시드된 경우 건너뜁니다 (Skips if already seeded).
    """
    # 테이블 생성 — DDL 실행 (Create all tables from ORM metadata)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session() as db:
        # 팀이 하나라도 있으면 건너뜀 (Skip when any team already exists)
        if await team_repository.get_all(db):
            print("Already seeded. Skipping.")
            return

        teams = await seed_members(db)
        await db.commit()
        print(f"Seeded: teams={[t.name for t in teams]}, members={MEMBER_COUNT}")


if __name__ == "__main__":
    asyncio.run(seed())
