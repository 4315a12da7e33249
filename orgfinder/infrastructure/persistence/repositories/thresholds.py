"""Tag-count thresholds shared by the tag facet query and final assembly.

Both stages must agree exactly, so there is one implementation:
- min_total_tags: HAVING <tag count> >= n on the record-grouped statement.
- min_tags_per_category: EXISTS some tag category in which the record holds
  at least n tags. Categories are counted independently of any and/or/none
  tag values.
"""

from typing import Any

from sqlalchemy import ColumnElement, Select, func, literal, select
from sqlalchemy.orm import aliased

from orgfinder.domain.filters import ThresholdSpec
from orgfinder.infrastructure.persistence.models import Record, RecordTag, Tag


def per_category_exists(min_tags_per_category: int) -> ColumnElement[bool]:
    """EXISTS clause correlated to the outer Record row.

    Aliases keep the subquery's record_tag/tag separate from any joins in
    the outer statement.
    """
    rt = aliased(RecordTag)
    t = aliased(Tag)
    return (
        select(literal(1))
        .select_from(rt)
        .join(t, t.name == rt.tag_name)
        .where(rt.record_id == Record.id)
        .group_by(t.category)
        .having(func.count(t.name) >= min_tags_per_category)
        .correlate(Record)
        .exists()
    )


def apply_thresholds(
    stmt: Select[Any],
    thresholds: ThresholdSpec,
    tag_count: ColumnElement[int],
) -> Select[Any]:
    """Add threshold conditions to a statement grouped by record.

    Args:
        stmt: SELECT over Record, grouped by record identity.
        thresholds: Minimums to enforce; zero values add nothing.
        tag_count: Aggregate counting the record's joined tag rows.

    Returns:
        The statement with HAVING / WHERE clauses appended.
    """
    if thresholds.min_total_tags > 0:
        stmt = stmt.having(tag_count >= thresholds.min_total_tags)
    if thresholds.min_tags_per_category > 0:
        stmt = stmt.where(per_category_exists(thresholds.min_tags_per_category))
    return stmt
