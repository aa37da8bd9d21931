"""테스트 인프라 — 인메모리 SQLite DB, 세션, httpx 클라이언트 픽스처.

Test infrastructure — In-memory SQLite DB, session, and httpx client fixtures.
Each test gets a fresh schema on a StaticPool engine so every connection
sees the same in-memory database. A cursor-execute listener records the
SQL each test issues, which lets tests assert whether a COUNT ran.
"""

import os

# 앱 임포트 전에 테스트 환경 설정 — Set test env before importing the app
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["DEBUG"] = "false"
os.environ.setdefault("AXIOM_API_TOKEN", "")
os.environ.setdefault("AXIOM_DATASET", "")

from collections.abc import AsyncGenerator  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy import event  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.database import Base, get_db  # noqa: E402
from app.main import app  # noqa: E402
from app.models import *  # noqa: F401,F403,E402 — register all models with metadata
from app.models import Member, Team  # noqa: E402

TEST_DATABASE_URL = "sqlite+aiosqlite://"


# ---------------------------------------------------------------------------
# Function-scoped: 엔진, 세션, 클라이언트
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """테스트용 async 엔진. 매 테스트마다 스키마를 새로 만듭니다."""
    eng = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield eng
    await eng.dispose()


@pytest_asyncio.fixture
async def db(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """각 테스트에 격리된 DB 세션을 제공합니다."""
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with factory() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def client(db: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """FastAPI 테스트 클라이언트 — DB 세션을 오버라이드합니다."""
    async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    app.dependency_overrides[get_db] = _override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def statements(engine: AsyncEngine):
    """실행된 SQL 문을 기록합니다 (Records every SQL statement executed)."""
    recorded: list[str] = []

    def _record(conn, cursor, statement, parameters, context, executemany) -> None:
        recorded.append(statement)

    event.listen(engine.sync_engine, "before_cursor_execute", _record)
    yield recorded
    event.remove(engine.sync_engine, "before_cursor_execute", _record)


def count_queries(recorded: list[str]) -> list[str]:
    """기록된 SQL 중 COUNT 집계 쿼리만 추립니다."""
    return [s for s in recorded if "count(" in s.lower()]


# ---------------------------------------------------------------------------
# 헬퍼 픽스처: 테스트용 데이터 생성
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def teams(db: AsyncSession) -> dict[str, Team]:
    """teamA, teamB를 생성합니다."""
    result = {}
    for name in ("teamA", "teamB"):
        team = Team(name=name)
        db.add(team)
        await db.flush()
        await db.refresh(team)
        result[name] = team
    return result


@pytest_asyncio.fixture
async def members(db: AsyncSession, teams) -> list[Member]:
    """회원 4명 — teamA: 10, 20세 / teamB: 30, 40세."""
    rows = [
        ("member1", 10, teams["teamA"]),
        ("member2", 20, teams["teamA"]),
        ("member3", 30, teams["teamB"]),
        ("member4", 40, teams["teamB"]),
    ]
    result = []
    for username, age, team in rows:
        member = Member(username=username, age=age, team_id=team.id)
        db.add(member)
        result.append(member)
    await db.flush()
    return result


@pytest_asyncio.fixture
async def teamless_member(db: AsyncSession, members) -> Member:
    """팀이 없는 회원을 추가합니다."""
    member = Member(username="member5", age=50)
    db.add(member)
    await db.flush()
    return member
