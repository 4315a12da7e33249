"""Facet resolution and result-row queries against the record store.

Each resolver turns one FacetFilterSpec into an ordered list of record IDs,
or UNRESTRICTED when the facet imposes no constraint. Resolvers open their
own session so the search service can run them concurrently.

INDIVIDUAL strategy runs one sub-query per value and concatenates the
results (a union, even for the AND list); dedupe drops repeated IDs.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from sqlalchemy import ColumnElement, Select, case, distinct, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import InstrumentedAttribute, aliased

from orgfinder.application.dtos.search import ResultRow
from orgfinder.application.services.set_algebra import merge_subsets
from orgfinder.domain.enums import CombineStrategy, Facet
from orgfinder.domain.filters import (
    EMPTY_FACET,
    UNRESTRICTED,
    FacetFilterSpec,
    IdSet,
    ThresholdSpec,
)
from orgfinder.infrastructure.persistence.models import Record, RecordTag, Tag
from orgfinder.infrastructure.persistence.repositories.base import ReadRepository
from orgfinder.infrastructure.persistence.repositories.thresholds import (
    apply_thresholds,
)
from orgfinder.shared.telemetry.tracing import add_span_attributes, traced

# Scalar-column facets. The domain facet filters on the record identity.
SIMPLE_FACET_COLUMNS: dict[Facet, InstrumentedAttribute[Any]] = {
    Facet.COUNTRY: Record.country,
    Facet.CATEGORY: Record.category,
    Facet.NAME: Record.name,
    Facet.DOMAIN: Record.id,
}


def _distinct_tag_matches(values: Iterable[str]) -> ColumnElement[int]:
    """COUNT of distinct joined tag names that are members of values."""
    return func.count(distinct(case((Tag.name.in_(sorted(values)), Tag.name))))


def _has_any_tag(values: Iterable[str]) -> ColumnElement[bool]:
    """EXISTS a record_tag row linking the outer Record to any of values."""
    rt = aliased(RecordTag)
    return (
        select(rt.record_id)
        .where(rt.record_id == Record.id, rt.tag_name.in_(sorted(values)))
        .correlate(Record)
        .exists()
    )


def _row_to_result(row: Any) -> ResultRow:
    return ResultRow(
        id=row.id,
        name=row.name,
        category=row.category,
        country=row.country,
        city=row.city,
        tag_count=int(row.tag_count),
    )


class FacetRepository(ReadRepository):
    """Read-only facet queries; one session per public call."""

    @traced("facet.resolve_simple")
    async def resolve_simple_facet(self, facet: Facet, spec: FacetFilterSpec) -> IdSet:
        """Resolve a country / category / name / domain facet.

        TOGETHER: column IN (and ∪ or) and column NOT IN none, conjunctively.
        INDIVIDUAL: column = v per included value, column != v per excluded
        value, concatenated. NULL column values never match either way.
        """
        if spec.is_empty:
            return UNRESTRICTED
        column = SIMPLE_FACET_COLUMNS[facet]
        add_span_attributes(facet=facet.value, strategy=spec.strategy.value)

        async with self._read(f"resolve_simple_facet:{facet.value}") as session:
            if spec.strategy is CombineStrategy.TOGETHER:
                stmt = select(Record.id)
                allowed = spec.included_values
                if allowed:
                    stmt = stmt.where(column.in_(allowed))
                if spec.none_values:
                    stmt = stmt.where(column.not_in(sorted(spec.none_values)))
                return await self._ids(session, stmt)

            subsets: list[list[str]] = []
            for value in spec.included_values:
                subsets.append(
                    await self._ids(session, select(Record.id).where(column == value))
                )
            for value in sorted(spec.none_values):
                subsets.append(
                    await self._ids(session, select(Record.id).where(column != value))
                )
            return merge_subsets(subsets, spec.dedupe)

    @traced("facet.resolve_tags")
    async def resolve_tag_facet(
        self, spec: FacetFilterSpec, thresholds: ThresholdSpec
    ) -> IdSet:
        """Resolve the tag facet together with the numeric thresholds.

        UNRESTRICTED only when spec is empty and no threshold is active.
        """
        if spec.is_empty and not thresholds.is_active:
            return UNRESTRICTED
        add_span_attributes(facet=Facet.TAGS.value, strategy=spec.strategy.value)

        async with self._read("resolve_tag_facet") as session:
            if spec.strategy is CombineStrategy.TOGETHER:
                return await self._ids(session, self._tags_together(spec, thresholds))
            return await self._tags_individual(session, spec, thresholds)

    @staticmethod
    def _tags_together(spec: FacetFilterSpec, thresholds: ThresholdSpec) -> Select[Any]:
        """One grouped query per record over its joined tags; all conditions ANDed.

        Records without any tag rows never appear (inner joins).
        """
        stmt = (
            select(Record.id)
            .join(RecordTag, RecordTag.record_id == Record.id)
            .join(Tag, Tag.name == RecordTag.tag_name)
            .group_by(Record.id)
        )
        if spec.and_values:
            stmt = stmt.having(
                _distinct_tag_matches(spec.and_values) >= len(spec.and_values)
            )
        if spec.or_values:
            stmt = stmt.having(_distinct_tag_matches(spec.or_values) >= 1)
        if spec.none_values:
            stmt = stmt.where(~_has_any_tag(spec.none_values))
        return apply_thresholds(stmt, thresholds, func.count(RecordTag.tag_name))

    async def _tags_individual(
        self,
        session: AsyncSession,
        spec: FacetFilterSpec,
        thresholds: ThresholdSpec,
    ) -> list[str]:
        subsets: list[list[str]] = []
        for value in spec.included_values:
            stmt = (
                select(RecordTag.record_id)
                .where(RecordTag.tag_name == value)
                .group_by(RecordTag.record_id)
            )
            subsets.append(await self._ids(session, stmt))
        for value in sorted(spec.none_values):
            stmt = select(Record.id).where(~_has_any_tag([value]))
            subsets.append(await self._ids(session, stmt))
        if not subsets and thresholds.is_active:
            subsets.append(
                await self._ids(session, self._tags_together(EMPTY_FACET, thresholds))
            )
        return merge_subsets(subsets, spec.dedupe)

    @staticmethod
    def _rows_stmt() -> tuple[Select[Any], ColumnElement[int]]:
        """Records outer-joined to their tag rows, grouped, with the tag count."""
        tag_count = func.count(RecordTag.tag_name)
        stmt = (
            select(
                Record.id,
                Record.name,
                Record.category,
                Record.country,
                Record.city,
                tag_count.label("tag_count"),
            )
            .outerjoin(RecordTag, RecordTag.record_id == Record.id)
            .group_by(
                Record.id,
                Record.name,
                Record.category,
                Record.country,
                Record.city,
            )
        )
        return stmt, tag_count

    @traced("facet.fetch_rows")
    async def fetch_rows(
        self, allowed_ids: IdSet, thresholds: ThresholdSpec
    ) -> list[ResultRow]:
        """Final assembly: restrict to allowed_ids, aggregate, apply thresholds."""
        stmt, tag_count = self._rows_stmt()
        if allowed_ids is not UNRESTRICTED:
            if not allowed_ids:
                return []
            stmt = stmt.where(Record.id.in_(allowed_ids))
        stmt = apply_thresholds(stmt, thresholds, tag_count)
        async with self._read("fetch_rows") as session:
            result = await session.execute(stmt)
            return [_row_to_result(row) for row in result.all()]

    @traced("facet.fetch_all_rows")
    async def fetch_all_rows(self) -> list[ResultRow]:
        """Every record with its tag count (no filters active)."""
        stmt, _ = self._rows_stmt()
        async with self._read("fetch_all_rows") as session:
            result = await session.execute(stmt)
            return [_row_to_result(row) for row in result.all()]
