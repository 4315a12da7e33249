"""DTOs for search results and text-index documents (no dependency on ORM)."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ResultRow:
    """One matching record with its aggregate tag count (read-model).

    tag_count counts joined record_tag rows, not distinct tag names.
    """

    id: str
    name: str | None
    category: str | None
    country: str | None
    city: str | None
    tag_count: int


@dataclass(frozen=True)
class SearchableRecord:
    """Denormalized record + tag names, loaded in bulk to build the text index."""

    id: str
    name: str | None
    category: str | None
    country: str | None
    city: str | None
    tags: tuple[str, ...] = ()


@dataclass(frozen=True)
class StructuredSearchResult:
    """Rows from a structured search plus wall-clock time spent."""

    rows: list[ResultRow]
    execution_time_ms: int

    @property
    def total_results(self) -> int:
        return len(self.rows)
