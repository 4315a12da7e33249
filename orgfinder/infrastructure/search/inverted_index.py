"""In-memory inverted index with field boosts, prefix and typo-tolerant lookup.

Documents are SearchableRecords; each text field is tokenized separately so a
match in ``name`` outranks the same match in ``city``. Scoring is BM25 per
field, multiplied by the field boost and by how the term matched:

- exact term: weight 1.0
- prefix (indexed term starts with the query term): PREFIX_WEIGHT
- fuzzy (edit distance <= round(fuzzy * len(term))): FUZZY_WEIGHT, scaled
  down as the distance grows

Query terms are OR-combined; scores add up across terms and fields.
"""

from __future__ import annotations

import bisect
import math
import re
from collections import defaultdict
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field

from orgfinder.application.dtos.search import SearchableRecord

FIELD_BOOSTS: dict[str, float] = {
    "name": 3.0,
    "id": 2.0,
    "category": 1.5,
    "tags": 1.5,
    "country": 1.0,
    "city": 1.0,
}

PREFIX_WEIGHT = 0.375
FUZZY_WEIGHT = 0.45
MAX_FUZZY_DISTANCE = 6

BM25_K1 = 1.2
BM25_B = 0.7

_TOKEN_RE = re.compile(r"\w+", re.UNICODE)


def tokenize(text: str | None) -> list[str]:
    """Lowercased word tokens; punctuation and whitespace separate terms.

    >>> tokenize("Acme-Pay.io")
    ['acme', 'pay', 'io']
    """
    if not text:
        return []
    return [t.lower() for t in _TOKEN_RE.findall(text)]


def levenshtein_distance(s1: str, s2: str, max_distance: int | None = None) -> int:
    """Edit distance between two strings, with early exit past max_distance.

    If max_distance is set and exceeded, returns max_distance + 1.

    >>> levenshtein_distance("kitten", "sitting")
    3
    """
    if not s1:
        return len(s2)
    if not s2:
        return len(s1)
    if len(s1) > len(s2):
        s1, s2 = s2, s1
    m, n = len(s1), len(s2)
    if max_distance is not None and n - m > max_distance:
        return max_distance + 1

    prev_row = list(range(m + 1))
    curr_row = [0] * (m + 1)
    for j in range(1, n + 1):
        curr_row[0] = j
        row_min = j
        for i in range(1, m + 1):
            cost = 0 if s1[i - 1] == s2[j - 1] else 1
            curr_row[i] = min(
                prev_row[i] + 1,
                curr_row[i - 1] + 1,
                prev_row[i - 1] + cost,
            )
            row_min = min(row_min, curr_row[i])
        if max_distance is not None and row_min > max_distance:
            return max_distance + 1
        prev_row, curr_row = curr_row, prev_row
    return prev_row[m]


def _document_fields(record: SearchableRecord) -> dict[str, list[str]]:
    return {
        "name": tokenize(record.name),
        "id": tokenize(record.id),
        "category": tokenize(record.category),
        "tags": [t for tag in record.tags for t in tokenize(tag)],
        "country": tokenize(record.country),
        "city": tokenize(record.city),
    }


@dataclass
class InvertedIndex:
    """Immutable once built; safe to share between concurrent searches."""

    doc_ids: list[str] = field(default_factory=list)
    # term -> field -> doc index -> term frequency
    postings: dict[str, dict[str, dict[int, int]]] = field(default_factory=dict)
    # field -> doc index -> token count
    field_lengths: dict[str, dict[int, int]] = field(default_factory=dict)
    average_lengths: dict[str, float] = field(default_factory=dict)
    # term -> number of documents containing it in any field
    doc_freq: dict[str, int] = field(default_factory=dict)
    vocabulary: list[str] = field(default_factory=list)
    # term length -> terms of that length, for fuzzy candidate lookup
    terms_by_length: dict[int, list[str]] = field(default_factory=dict)

    @classmethod
    def build(cls, records: Sequence[SearchableRecord]) -> InvertedIndex:
        postings: dict[str, dict[str, dict[int, int]]] = defaultdict(
            lambda: defaultdict(lambda: defaultdict(int))
        )
        field_lengths: dict[str, dict[int, int]] = {f: {} for f in FIELD_BOOSTS}
        doc_ids: list[str] = []

        for doc_index, record in enumerate(records):
            doc_ids.append(record.id)
            for field_name, tokens in _document_fields(record).items():
                field_lengths[field_name][doc_index] = len(tokens)
                for token in tokens:
                    postings[token][field_name][doc_index] += 1

        doc_count = len(doc_ids)
        average_lengths = {
            f: (sum(lengths.values()) / doc_count if doc_count else 0.0)
            for f, lengths in field_lengths.items()
        }
        frozen = {
            term: {f: dict(docs) for f, docs in by_field.items()}
            for term, by_field in postings.items()
        }
        terms_by_length: dict[int, list[str]] = defaultdict(list)
        for term in frozen:
            terms_by_length[len(term)].append(term)
        return cls(
            doc_ids=doc_ids,
            postings=frozen,
            field_lengths=field_lengths,
            average_lengths=average_lengths,
            doc_freq={
                term: len({d for docs in by_field.values() for d in docs})
                for term, by_field in frozen.items()
            },
            vocabulary=sorted(frozen),
            terms_by_length=dict(terms_by_length),
        )

    def __len__(self) -> int:
        return len(self.doc_ids)

    def _prefix_terms(self, prefix: str) -> Iterator[str]:
        start = bisect.bisect_left(self.vocabulary, prefix)
        for term in self.vocabulary[start:]:
            if not term.startswith(prefix):
                break
            yield term

    def _fuzzy_terms(self, query_term: str, max_distance: int) -> Iterator[tuple[str, int]]:
        # Terms whose length differs by more than max_distance cannot match.
        length = len(query_term)
        for candidate_length in range(length - max_distance, length + max_distance + 1):
            for term in self.terms_by_length.get(candidate_length, ()):
                distance = levenshtein_distance(query_term, term, max_distance)
                if 0 < distance <= max_distance:
                    yield term, distance

    def expand_term(self, query_term: str, fuzzy: float, prefix: bool) -> dict[str, float]:
        """Indexed terms matching query_term, each with its match weight."""
        matches: dict[str, float] = {}
        if query_term in self.postings:
            matches[query_term] = 1.0
        if prefix:
            for term in self._prefix_terms(query_term):
                if term != query_term:
                    matches[term] = max(matches.get(term, 0.0), PREFIX_WEIGHT)
        max_distance = min(round(fuzzy * len(query_term)), MAX_FUZZY_DISTANCE)
        if max_distance > 0:
            for term, distance in self._fuzzy_terms(query_term, max_distance):
                weight = FUZZY_WEIGHT * len(query_term) / (len(query_term) + distance)
                matches[term] = max(matches.get(term, 0.0), weight)
        return matches

    def _bm25(self, term: str, field_name: str, doc_index: int, tf: int) -> float:
        doc_count = len(self.doc_ids)
        df = self.doc_freq[term]
        idf = math.log(1 + (doc_count - df + 0.5) / (df + 0.5))
        length = self.field_lengths[field_name].get(doc_index, 0)
        avg = self.average_lengths.get(field_name) or 1.0
        norm = tf + BM25_K1 * (1 - BM25_B + BM25_B * length / avg)
        return idf * tf * (BM25_K1 + 1) / norm

    def search(self, query: str, limit: int, fuzzy: float, prefix: bool) -> list[str]:
        """Ranked record IDs for query, truncated to limit."""
        scores: dict[int, float] = defaultdict(float)
        for query_term in dict.fromkeys(tokenize(query)):
            for term, weight in self.expand_term(query_term, fuzzy, prefix).items():
                for field_name, docs in self.postings[term].items():
                    boost = FIELD_BOOSTS[field_name]
                    for doc_index, tf in docs.items():
                        scores[doc_index] += (
                            boost * weight * self._bm25(term, field_name, doc_index, tf)
                        )
        ranked = sorted(scores.items(), key=lambda kv: (-kv[1], self.doc_ids[kv[0]]))
        return [self.doc_ids[doc_index] for doc_index, _ in ranked[:limit]]
