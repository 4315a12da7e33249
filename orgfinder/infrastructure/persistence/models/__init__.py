"""Persistence models: ORM entities for the record store."""

from orgfinder.infrastructure.persistence.models.record import Record
from orgfinder.infrastructure.persistence.models.record_tag import RecordTag
from orgfinder.infrastructure.persistence.models.tag import Tag

__all__ = [
    "Record",
    "RecordTag",
    "Tag",
]
