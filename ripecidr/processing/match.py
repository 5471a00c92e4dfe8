# ripecidr/processing/match.py
from __future__ import annotations

from typing import Iterable, Optional, Sequence, Tuple

from ripecidr.models import Record


def _normalize_keywords(keywords: Optional[Iterable[str]]) -> Tuple[str, ...]:
    if not keywords:
        return ()
    return tuple(k.lower() for k in keywords if k and k.strip())


class Matcher:
    """
    Record filter on country code and keywords.

    Both criteria are optional and combined with AND. Keywords are OR'ed:
    any one of them appearing anywhere in the block text is enough.
    """

    def __init__(self, country: Optional[str] = None, keywords: Optional[Sequence[str]] = None):
        self.country = country.strip().upper() if country and country.strip() else None
        self.keywords = _normalize_keywords(keywords)

    def country_matches(self, record: Record) -> bool:
        if self.country is None:
            return True
        return record.country == self.country

    def keywords_match(self, record: Record) -> bool:
        if not self.keywords:
            return True
        text = record.text.lower()
        return any(k in text for k in self.keywords)

    def __call__(self, record: Record) -> bool:
        return self.country_matches(record) and self.keywords_match(record)

    def describe(self) -> str:
        parts = []
        if self.country:
            parts.append(f"country={self.country}")
        if self.keywords:
            parts.append("keywords=" + "|".join(self.keywords))
        return ", ".join(parts) or "all records"


def matches(
        record: Record,
        country: Optional[str] = None,
        keywords: Optional[Sequence[str]] = None,
) -> bool:
    """Match a single record; build a Matcher once when filtering many."""
    return Matcher(country, keywords)(record)
