"""RecordTag ORM model. Many-to-many link between record and tag."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from orgfinder.infrastructure.persistence.database import Base


class RecordTag(Base):
    """Record-to-tag link. Table: record_tag. Primary key (record_id, tag_name).

    first_seen_at / last_seen_at are observation metadata kept by ingestion;
    the filter engine only checks that a link exists.
    """

    __tablename__ = "record_tag"

    record_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("record.id", ondelete="CASCADE"),
        primary_key=True,
    )
    tag_name: Mapped[str] = mapped_column(
        String,
        ForeignKey("tag.name", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    )
    first_seen_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    last_seen_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
