"""Domain service: part search.

Stateless filter used by the sales view. It never touches the network
or the cache; the caller decides which collection to search and must
reject blank queries before calling.
"""

from __future__ import annotations

from collections.abc import Iterable

from partstock.domain.model.part import Part


def matches(query: str, part: Part) -> bool:
    """True iff *query* is the part's id or part of its name (any case)."""
    needle = query.strip()
    return str(part.id) == needle or needle.lower() in part.name.lower()


def search(query: str, collection: Iterable[Part]) -> list[Part]:
    """Return the parts in *collection* matching *query*, in source order."""
    return [part for part in collection if matches(query, part)]
