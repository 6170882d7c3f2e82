"""Application service: List Parts use case (query)."""

from __future__ import annotations

from partstock.application.dto import PartDTO
from partstock.application.inventory_cache import InventoryCache


class ListPartsHandler:

    def __init__(self, cache: InventoryCache) -> None:
        self._cache = cache

    def handle(self) -> list[PartDTO]:
        """Refresh the cache and return every part in backend order."""
        return [PartDTO.from_part(part) for part in self._cache.refresh()]
