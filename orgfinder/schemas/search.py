"""Search API schemas.

Request bodies accept the camelCase payload produced by the search builder UI
(technologyFilter, countryFilter, ..., and/or/none, removeDuplicates,
filteringType) as well as snake_case field names. Missing or null facets
normalize to fully empty filters.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from orgfinder.application.dtos.search import ResultRow
from orgfinder.domain.enums import CombineStrategy, Facet
from orgfinder.domain.filters import FacetFilterSpec, SearchRequest, ThresholdSpec


class FacetFilterRequest(BaseModel):
    """AND / OR / NONE values for one facet plus its combination strategy."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    and_values: list[str] = Field(default_factory=list, alias="and")
    or_values: list[str] = Field(default_factory=list, alias="or")
    none_values: list[str] = Field(default_factory=list, alias="none")
    remove_duplicates: bool = Field(default=False, alias="removeDuplicates")
    filtering_type: CombineStrategy = Field(
        default=CombineStrategy.TOGETHER,
        alias="filteringType",
        description="together | individual",
    )

    @field_validator("and_values", "or_values", "none_values", mode="before")
    @classmethod
    def null_to_empty(cls, v: Any) -> Any:
        return [] if v is None else v

    @field_validator("remove_duplicates", mode="before")
    @classmethod
    def null_to_false(cls, v: Any) -> Any:
        return False if v is None else v

    @field_validator("filtering_type", mode="before")
    @classmethod
    def normalize_filtering_type(cls, v: Any) -> Any:
        if v is None:
            return CombineStrategy.TOGETHER
        return v.lower() if isinstance(v, str) else v

    def to_domain(self) -> FacetFilterSpec:
        return FacetFilterSpec(
            and_values=frozenset(self.and_values),
            or_values=frozenset(self.or_values),
            none_values=frozenset(self.none_values),
            strategy=self.filtering_type,
            dedupe=self.remove_duplicates,
        )


class NumberFilterRequest(BaseModel):
    """Tag-count thresholds. Zero (or null) means no constraint."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    total_technologies: int = Field(default=0, ge=0, alias="totalTechnologies")
    technologies_per_category: int = Field(
        default=0, ge=0, alias="technologiesPerCategory"
    )

    @field_validator("total_technologies", "technologies_per_category", mode="before")
    @classmethod
    def null_to_zero(cls, v: Any) -> Any:
        return 0 if v is None else v

    def to_domain(self) -> ThresholdSpec:
        return ThresholdSpec(
            min_total_tags=self.total_technologies,
            min_tags_per_category=self.technologies_per_category,
        )


class SearchFiltersRequest(BaseModel):
    """Structured search body (POST /search).

    A body of the form ``{"searchObject": {...}}`` is unwrapped first.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    technology_filter: FacetFilterRequest | None = Field(
        default=None, alias="technologyFilter"
    )
    country_filter: FacetFilterRequest | None = Field(default=None, alias="countryFilter")
    category_filter: FacetFilterRequest | None = Field(
        default=None, alias="categoryFilter"
    )
    name_filter: FacetFilterRequest | None = Field(default=None, alias="nameFilter")
    domain_filter: FacetFilterRequest | None = Field(default=None, alias="domainFilter")
    number_filter: NumberFilterRequest | None = Field(default=None, alias="numberFilter")

    @model_validator(mode="before")
    @classmethod
    def unwrap_search_object(cls, data: Any) -> Any:
        if isinstance(data, dict) and isinstance(data.get("searchObject"), dict):
            return data["searchObject"]
        return data

    def to_domain(self, text_query: str | None = None) -> SearchRequest:
        """Convert to the immutable SearchRequest used by the search services."""
        by_facet = {
            Facet.TAGS: self.technology_filter,
            Facet.COUNTRY: self.country_filter,
            Facet.CATEGORY: self.category_filter,
            Facet.NAME: self.name_filter,
            Facet.DOMAIN: self.domain_filter,
        }
        return SearchRequest(
            facets={f: spec.to_domain() for f, spec in by_facet.items() if spec is not None},
            thresholds=(
                self.number_filter.to_domain()
                if self.number_filter is not None
                else ThresholdSpec()
            ),
            text_query=text_query,
        )


class CombinedSearchRequest(BaseModel):
    """Free text plus structured filters (POST /search/combined)."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    text_query: str | None = Field(default=None, alias="textQuery", max_length=500)
    filters: SearchFiltersRequest = Field(default_factory=SearchFiltersRequest)

    @field_validator("filters", mode="before")
    @classmethod
    def null_filters_to_empty(cls, v: Any) -> Any:
        return {} if v is None else v

    def to_domain(self) -> SearchRequest:
        return self.filters.to_domain(text_query=self.text_query)


class ResultRowResponse(BaseModel):
    """One matching record with its tag count."""

    id: str
    name: str | None = None
    category: str | None = None
    country: str | None = None
    city: str | None = None
    tag_count: int = 0

    @classmethod
    def from_row(cls, row: ResultRow) -> "ResultRowResponse":
        return cls(
            id=row.id,
            name=row.name,
            category=row.category,
            country=row.country,
            city=row.city,
            tag_count=row.tag_count,
        )


class SearchResponse(BaseModel):
    """Structured search response."""

    success: bool = True
    data: list[ResultRowResponse]
    total_results: int
    execution_time_ms: int = Field(..., description="Server-side search time")


class IdSearchResponse(BaseModel):
    """Record IDs from text or combined search, best match first for text."""

    results: list[str]
    total_results: int
