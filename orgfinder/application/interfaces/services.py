"""Service interfaces (ports) for the application layer."""

from __future__ import annotations

from typing import Protocol


class ITextIndex(Protocol):
    """Lazily built full-text index over records and their tags."""

    async def ensure_ready(self) -> None:
        """Build the index once; concurrent callers wait for the same build.

        Raises IndexUnavailableException when the build fails.
        """

    def search(self, query: str, limit: int = 100) -> list[str]:
        """Return ranked record IDs; empty on blank query or unready index."""
