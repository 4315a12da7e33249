"""In-process full-text search over records."""

from orgfinder.infrastructure.search.inverted_index import InvertedIndex, tokenize
from orgfinder.infrastructure.search.text_index import TextIndex

__all__ = [
    "InvertedIndex",
    "TextIndex",
    "tokenize",
]
