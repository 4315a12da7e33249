"""RecordRepository integration tests: lookups, store status, index bulk load."""

from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from orgfinder.domain.enums import Facet
from orgfinder.domain.exceptions import StoreUnavailableException
from orgfinder.infrastructure.persistence.repositories import RecordRepository

pytestmark = pytest.mark.requires_db


async def test_distinct_countries_sorted_without_nulls(record_repo: RecordRepository) -> None:
    assert await record_repo.distinct_values(Facet.COUNTRY) == ["DE", "FR", "UK", "US"]


async def test_distinct_categories(record_repo: RecordRepository) -> None:
    assert await record_repo.distinct_values(Facet.CATEGORY) == [
        "Energy",
        "Finance",
        "Retail",
        "Travel",
    ]


async def test_distinct_tags_come_from_tag_table(record_repo: RecordRepository) -> None:
    assert await record_repo.distinct_values(Facet.TAGS) == [
        "AWS",
        "Django",
        "GCP",
        "React",
        "Stripe",
        "Vue",
    ]


async def test_distinct_domains(record_repo: RecordRepository) -> None:
    domains = await record_repo.distinct_values(Facet.DOMAIN)
    assert len(domains) == 6
    assert domains[0] == "acme.io"


async def test_has_data(record_repo: RecordRepository) -> None:
    assert await record_repo.has_data() is True


async def test_has_data_false_on_empty_store(empty_session_factory) -> None:
    assert await RecordRepository(empty_session_factory).has_data() is False


async def test_load_searchable_records_groups_tags(record_repo: RecordRepository) -> None:
    records = {r.id: r for r in await record_repo.load_searchable_records()}
    assert len(records) == 6
    assert records["finlytics.com"].tags == ("AWS", "GCP", "React", "Vue")
    assert records["quietco.fr"].tags == ()
    assert records["nullland.org"].category is None


async def test_driver_error_maps_to_store_unavailable() -> None:
    session = MagicMock()
    session.__aenter__.side_effect = OperationalError("SELECT 1", {}, Exception("db down"))
    repo = RecordRepository(MagicMock(return_value=session))
    with pytest.raises(StoreUnavailableException) as exc_info:
        await repo.has_data()
    assert exc_info.value.error_code == "STORE_UNAVAILABLE"
    assert exc_info.value.details["operation"] == "has_data"
