"""Lookup endpoints: distinct values that populate the filter menus."""

from typing import Annotated

from fastapi import APIRouter, Depends

from orgfinder.api.v1.dependencies import get_record_repo
from orgfinder.application.interfaces.repositories import ILookupRepository
from orgfinder.domain.enums import Facet
from orgfinder.schemas.lookup import LookupOption

router = APIRouter()

LookupRepo = Annotated[ILookupRepository, Depends(get_record_repo)]


async def _options(repo: ILookupRepository, facet: Facet) -> list[LookupOption]:
    return [LookupOption(value=v, label=v) for v in await repo.distinct_values(facet)]


@router.get("/countries", response_model=list[LookupOption])
async def list_countries(repo: LookupRepo) -> list[LookupOption]:
    return await _options(repo, Facet.COUNTRY)


@router.get("/categories", response_model=list[LookupOption])
async def list_categories(repo: LookupRepo) -> list[LookupOption]:
    return await _options(repo, Facet.CATEGORY)


@router.get("/names", response_model=list[LookupOption])
async def list_names(repo: LookupRepo) -> list[LookupOption]:
    return await _options(repo, Facet.NAME)


@router.get("/domains", response_model=list[LookupOption])
async def list_domains(repo: LookupRepo) -> list[LookupOption]:
    return await _options(repo, Facet.DOMAIN)


@router.get("/tags", response_model=list[LookupOption])
async def list_tags(repo: LookupRepo) -> list[LookupOption]:
    """Every known tag (technology) name."""
    return await _options(repo, Facet.TAGS)
