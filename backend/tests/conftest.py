"""Shared fixtures: a throwaway SQLite database per test and an API client bound to it."""

import os

# Settings are read once; configure them before the app is imported
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("CLEANUP_ENABLED", "false")
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

from datetime import timedelta

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

import referral_board.models  # noqa: F401
from referral_board.auth import Principal, hash_password
from referral_board.database import Base, get_db
from referral_board.main import app
from referral_board.models import User, Job, Referral
from referral_board.timeutil import utcnow

ALICE = {
    "username": "alice",
    "name": "Alice",
    "email": "alice@example.com",
    "password": "secret123",
    "role": "jobseeker",
    "yearsOfExperience": 4,
    "currentCompany": "Initech",
    "linkedinProfile": "https://linkedin.com/in/alice",
}

BOB = {
    "username": "bob",
    "name": "Bob",
    "email": "bob@example.com",
    "password": "secret123",
    "role": "employer",
    "yearsOfExperience": 12,
    "currentCompany": "Globex",
    "linkedinProfile": "https://www.linkedin.com/in/bob-employer/",
}

JOB_PAYLOAD = {
    "company": "Hooli",
    "position": "Backend Engineer",
    "jobId": "HOOLI-42",
    "jobUrl": "https://careers.hooli.example/42",
    "location": "Remote",
    "skills": "python, sql, fastapi",
    "description": "Build referral pipelines",
}


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


# ==============================================================================
# Helpers
# ==============================================================================

async def register(client: AsyncClient, payload: dict, **overrides) -> str:
    response = await client.post("/api/users", json={**payload, **overrides})
    assert response.status_code == 200, response.text
    return response.json()["token"]


def auth_header(token: str) -> dict:
    return {"x-auth-token": token}


async def post_job(client: AsyncClient, token: str, **overrides) -> dict:
    response = await client.post("/api/jobs", json={**JOB_PAYLOAD, **overrides}, headers=auth_header(token))
    assert response.status_code == 200, response.text
    return response.json()


async def age_referral(session_factory, referral_id: str, hours: int) -> None:
    """Backdate a referral so it looks ``hours`` old."""
    async with session_factory() as session:
        await session.execute(
            update(Referral).where(Referral.id == referral_id).values(date=utcnow() - timedelta(hours=hours))
        )
        await session.commit()


async def make_user(db: AsyncSession, username: str, role: str, **fields) -> Principal:
    user = User(
        username=username,
        name=username.title(),
        email=f"{username}@example.com",
        password=hash_password("secret123"),
        role=role,
        years_of_experience=fields.get("years_of_experience", 3),
        current_company=fields.get("current_company", "Acme"),
        linkedin_profile=fields.get("linkedin_profile", f"https://linkedin.com/in/{username}"),
    )
    db.add(user)
    await db.commit()
    return Principal.from_user(user)


async def make_job(db: AsyncSession, owner: Principal, position: str = "Backend Engineer") -> Job:
    job = Job(
        user_id=owner.id,
        company="Hooli",
        position=position,
        job_id="HOOLI-42",
        job_url="https://careers.hooli.example/42",
        location="Remote",
        skills=["python"],
        description="Build things",
    )
    db.add(job)
    await db.commit()
    return job
