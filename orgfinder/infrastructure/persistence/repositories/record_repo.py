"""Record repository: lookup-menu values, store status, and text-index bulk load."""

from __future__ import annotations

from collections import defaultdict

from sqlalchemy import func, select

from orgfinder.application.dtos.search import SearchableRecord
from orgfinder.domain.enums import Facet
from orgfinder.infrastructure.persistence.models import Record, RecordTag, Tag
from orgfinder.infrastructure.persistence.repositories.base import ReadRepository
from orgfinder.infrastructure.persistence.repositories.facet_repo import (
    SIMPLE_FACET_COLUMNS,
)


class RecordRepository(ReadRepository):
    """Read-only record queries that are not part of facet resolution."""

    async def distinct_values(self, facet: Facet) -> list[str]:
        """Sorted distinct non-null values for a facet (tags come from the tag table)."""
        column = Tag.name if facet is Facet.TAGS else SIMPLE_FACET_COLUMNS[facet]
        stmt = select(column).distinct().where(column.is_not(None)).order_by(column)
        async with self._read(f"distinct_values:{facet.value}") as session:
            return await self._ids(session, stmt)

    async def has_data(self) -> bool:
        """True if the record table holds at least one row."""
        async with self._read("has_data") as session:
            result = await session.execute(select(func.count()).select_from(Record))
            return (result.scalar() or 0) > 0

    async def load_searchable_records(self) -> list[SearchableRecord]:
        """Every record with the names of its tags, for the text index.

        Only links whose tag exists in the tag table contribute names.
        """
        async with self._read("load_searchable_records") as session:
            records = (
                await session.execute(
                    select(
                        Record.id,
                        Record.name,
                        Record.category,
                        Record.country,
                        Record.city,
                    )
                )
            ).all()
            links = (
                await session.execute(
                    select(RecordTag.record_id, Tag.name)
                    .join(Tag, Tag.name == RecordTag.tag_name)
                    .order_by(RecordTag.record_id, Tag.name)
                )
            ).all()

        tags_by_record: dict[str, list[str]] = defaultdict(list)
        for record_id, tag_name in links:
            tags_by_record[record_id].append(tag_name)

        return [
            SearchableRecord(
                id=r.id,
                name=r.name,
                category=r.category,
                country=r.country,
                city=r.city,
                tags=tuple(tags_by_record.get(r.id, ())),
            )
            for r in records
        ]
