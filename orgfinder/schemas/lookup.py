"""Lookup (option menu) schemas."""

from pydantic import BaseModel


class LookupOption(BaseModel):
    """One selectable value; label mirrors value."""

    value: str
    label: str
