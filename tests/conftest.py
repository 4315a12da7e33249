"""Pytest configuration and fixtures for orgfinder.

Repository and HTTP tests run against a throwaway SQLite file (aiosqlite)
created under tmp_path and seeded with the records below. The app under test
is built with create_app(); its session factory dependency is overridden and
a TextIndex over the same store is placed on app.state (the lifespan does not
run under ASGITransport).

Seed data:

    id               name       category  country  tags
    acme.io          Acme       Travel    US       React, AWS, Stripe
    finlytics.com    Finlytics  Finance   US       React, Vue, AWS, GCP
    paybridge.co.uk  PayBridge  Finance   UK       AWS, Stripe
    lumen.de         Lumen      Energy    DE       Vue
    quietco.fr       QuietCo    Retail    FR       (none)
    nullland.org     NullLand   (null)    (null)   Django

Tag categories: React/Vue frontend, AWS/GCP cloud, Stripe payments,
Django backend.
"""

from collections.abc import AsyncIterator
from datetime import datetime, timezone

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from orgfinder.api.v1.dependencies import get_db_session_factory
from orgfinder.core.limiter import limiter
from orgfinder.infrastructure.persistence.database import Base, build_session_factory
from orgfinder.infrastructure.persistence.models import Record, RecordTag, Tag
from orgfinder.infrastructure.persistence.repositories import (
    FacetRepository,
    RecordRepository,
)
from orgfinder.infrastructure.search import TextIndex
from orgfinder.main import create_app

TAGS = {
    "React": "frontend",
    "Vue": "frontend",
    "AWS": "cloud",
    "GCP": "cloud",
    "Stripe": "payments",
    "Django": "backend",
}

RECORDS = [
    ("acme.io", "Acme", "Travel", "US", "Austin", ["React", "AWS", "Stripe"]),
    ("finlytics.com", "Finlytics", "Finance", "US", "New York", ["React", "Vue", "AWS", "GCP"]),
    ("paybridge.co.uk", "PayBridge", "Finance", "UK", "London", ["AWS", "Stripe"]),
    ("lumen.de", "Lumen", "Energy", "DE", "Berlin", ["Vue"]),
    ("quietco.fr", "QuietCo", "Retail", "FR", None, []),
    ("nullland.org", "NullLand", None, None, None, ["Django"]),
]

ALL_IDS = sorted(r[0] for r in RECORDS)

_SEEN = datetime(2024, 6, 1, tzinfo=timezone.utc)


async def _seed(session_factory: async_sessionmaker[AsyncSession]) -> None:
    async with session_factory() as session:
        session.add_all(Tag(name=name, category=cat) for name, cat in TAGS.items())
        for record_id, name, category, country, city, tags in RECORDS:
            session.add(
                Record(id=record_id, name=name, category=category, country=country, city=city)
            )
            session.add_all(
                RecordTag(
                    record_id=record_id,
                    tag_name=tag,
                    first_seen_at=_SEEN,
                    last_seen_at=_SEEN,
                )
                for tag in tags
            )
        await session.commit()


@pytest.fixture
async def session_factory(tmp_path) -> AsyncIterator[async_sessionmaker[AsyncSession]]:
    """Session factory bound to a freshly seeded SQLite file."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'records.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    factory = build_session_factory(engine)
    await _seed(factory)
    yield factory
    await engine.dispose()


@pytest.fixture
async def empty_session_factory(tmp_path) -> AsyncIterator[async_sessionmaker[AsyncSession]]:
    """Session factory over the schema with no rows."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'empty.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield build_session_factory(engine)
    await engine.dispose()


@pytest.fixture
def facet_repo(session_factory) -> FacetRepository:
    return FacetRepository(session_factory)


@pytest.fixture
def record_repo(session_factory) -> RecordRepository:
    return RecordRepository(session_factory)


@pytest.fixture
def text_index(record_repo) -> TextIndex:
    return TextIndex(record_repo)


@pytest.fixture
def app(session_factory, text_index):
    """FastAPI app wired to the seeded store."""
    application = create_app()
    application.dependency_overrides[get_db_session_factory] = lambda: session_factory
    application.state.text_index = text_index
    limiter.reset()
    return application


@pytest.fixture
async def client(app) -> AsyncIterator[AsyncClient]:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
