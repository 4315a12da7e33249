"""Tag ORM model (e.g. a technology), optionally grouped by category."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from orgfinder.infrastructure.persistence.database import Base


class Tag(Base):
    """Tag. Table: tag. Unique by name."""

    __tablename__ = "tag"

    name: Mapped[str] = mapped_column(String, primary_key=True)
    category: Mapped[str | None] = mapped_column(String, nullable=True, index=True)
