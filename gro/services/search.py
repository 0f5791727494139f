"""Point name search (substring or exact, optionally punctuation-blind)."""

from __future__ import annotations

import re
from enum import Enum
from typing import Sequence

from gro.services.records import Record

# Separators that vary between spellings of the same name: "P.12-A" ≡ "P12A".
_SEPARATORS = re.compile(r"[._,\-]")


class SearchMode(str, Enum):
    CONTAINS = "contains"
    EXACT = "exact"


def normalize_name(value: str) -> str:
    """Lower-case and drop ``. _ , -``."""
    return _SEPARATORS.sub("", value.lower())


class TextSearchService:
    """Case-insensitive name matching; results keep input order."""

    def search(
        self,
        records: Sequence[Record],
        term: str,
        mode: SearchMode | str = SearchMode.CONTAINS,
        normalize: bool = False,
    ) -> list[Record]:
        mode = SearchMode(mode)
        query = self._prepare(term, normalize)
        # An empty query means "no search", not "match everything".
        if not query:
            return []

        matches = []
        for record in records:
            if not record.name:
                continue
            name = self._prepare(record.name, normalize)
            if mode is SearchMode.EXACT:
                hit = name == query
            else:
                hit = query in name
            if hit:
                matches.append(record)
        return matches

    @staticmethod
    def _prepare(value: str, normalize: bool) -> str:
        return normalize_name(value) if normalize else value.lower()
