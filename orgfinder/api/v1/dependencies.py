"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for repositories, the shared text index, and the
search use cases. Routes depend only on these, never on infrastructure
directly. Repositories receive the session factory rather than a session so
concurrent facet resolvers each open their own session.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from orgfinder.application.use_cases.search import (
    CombinedSearchService,
    FacetSearchService,
)
from orgfinder.core.config import Settings, get_settings
from orgfinder.infrastructure.persistence.database import get_session_factory
from orgfinder.infrastructure.persistence.repositories import (
    FacetRepository,
    RecordRepository,
)
from orgfinder.infrastructure.search import TextIndex


def get_db_session_factory() -> async_sessionmaker[AsyncSession]:
    """Process-wide session factory. Tests override this to point at a temp DB."""
    return get_session_factory()


SessionFactory = Annotated[async_sessionmaker[AsyncSession], Depends(get_db_session_factory)]


def get_facet_repo(session_factory: SessionFactory) -> FacetRepository:
    return FacetRepository(session_factory)


def get_record_repo(session_factory: SessionFactory) -> RecordRepository:
    return RecordRepository(session_factory)


def get_text_index(request: Request) -> TextIndex:
    """The TextIndex created in the lifespan (one per process)."""
    return request.app.state.text_index


def get_facet_search_service(
    facet_repo: Annotated[FacetRepository, Depends(get_facet_repo)],
) -> FacetSearchService:
    return FacetSearchService(facet_repo)


def get_combined_search_service(
    facet_search: Annotated[FacetSearchService, Depends(get_facet_search_service)],
    text_index: Annotated[TextIndex, Depends(get_text_index)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> CombinedSearchService:
    """Text + structured search, using the configured default text limit."""
    return CombinedSearchService(
        facet_search, text_index, text_limit=settings.text_search_limit
    )
