"""Health check endpoints: liveness, record store status, text index status."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends

from orgfinder.api.v1.dependencies import get_record_repo, get_text_index
from orgfinder.application.interfaces.repositories import ILookupRepository
from orgfinder.domain.exceptions import StoreUnavailableException
from orgfinder.infrastructure.search import TextIndex
from orgfinder.schemas.health import (
    HealthResponse,
    IndexStatusResponse,
    StoreStatusResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return simple ok status for liveness."""
    return HealthResponse()


@router.get("/store", response_model=StoreStatusResponse)
async def store_status(
    repo: Annotated[ILookupRepository, Depends(get_record_repo)],
) -> StoreStatusResponse:
    """Whether the record store holds at least one record.

    An unreachable store reports has_data=false instead of an error, so the UI
    can prompt for a dataset.
    """
    try:
        has_data = await repo.has_data()
    except StoreUnavailableException as e:
        logger.warning("Store status check failed: %s", e.details)
        has_data = False
    return StoreStatusResponse(has_data=has_data)


@router.get("/index", response_model=IndexStatusResponse)
def index_status(
    text_index: Annotated[TextIndex, Depends(get_text_index)],
) -> IndexStatusResponse:
    return IndexStatusResponse(
        state=text_index.state, documents=text_index.document_count
    )
