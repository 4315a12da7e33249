"""Record ORM model. One organization, identified by its domain."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from orgfinder.infrastructure.persistence.database import Base


class Record(Base):
    """Organization record. Table: record. Written by ingestion only."""

    __tablename__ = "record"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    name: Mapped[str | None] = mapped_column(String, nullable=True, index=True)
    category: Mapped[str | None] = mapped_column(String, nullable=True, index=True)
    country: Mapped[str | None] = mapped_column(String, nullable=True, index=True)
    city: Mapped[str | None] = mapped_column(String, nullable=True)
