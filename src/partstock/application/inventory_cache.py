"""Inventory cache: the client-side mirror of the backend's parts.

The cache is the only writer-owned state in the core. It changes in
exactly two ways:

- ``refresh()`` replaces everything with a fresh fetch (all-or-nothing)
- ``apply_transition()`` swaps one record for its transitioned version
"""

from __future__ import annotations

import logging

from partstock.domain.exceptions import (
    CacheDesync,
    DataContractViolation,
    DomainException,
)
from partstock.domain.model.part import Part
from partstock.domain.repository.part_gateway import PartGateway

logger = logging.getLogger(__name__)


class InventoryCache:

    def __init__(self, gateway: PartGateway) -> None:
        self._gateway = gateway
        self._parts: dict[int, Part] = {}
        self._loaded = False
        self._last_error: DomainException | None = None
        self._violations: tuple[int, ...] = ()

    # --- Writers --------------------------------------------------------------

    def refresh(self) -> list[Part]:
        """Fetch the full collection and replace the cache atomically.

        On failure the previous contents are kept, the error is recorded
        in ``last_error`` and re-raised.
        """
        try:
            fetched = self._gateway.fetch_all()
            snapshot = self._index(fetched)
        except DomainException as exc:
            logger.warning("Inventory refresh failed: %s", exc)
            self._last_error = exc
            raise

        violations = tuple(pid for pid, part in snapshot.items() if not part.is_consistent)
        for pid in violations:
            part = snapshot[pid]
            logger.warning(
                "Part #%s (%s) is %s but sold_date=%s, sold_price=%s",
                pid, part.name, part.stock_status.value, part.sold_date, part.sold_price,
            )

        self._parts = snapshot
        self._violations = violations
        self._loaded = True
        self._last_error = None
        logger.info("Inventory refreshed: %d parts", len(snapshot))
        return list(snapshot.values())

    def apply_transition(self, part_id: int, updated: Part) -> None:
        """Replace one cached record in place, keeping its position.

        Raises CacheDesync if the part is no longer cached, which means a
        refresh dropped it between selection and confirmation.
        """
        if part_id not in self._parts:
            logger.warning("Cannot update part #%s: not in the inventory cache", part_id)
            raise CacheDesync(
                f"Part #{part_id} is no longer in the inventory; search again to refresh"
            )
        if updated.id != part_id:
            raise CacheDesync(
                f"Updated record #{updated.id} does not match cached part #{part_id}"
            )
        self._parts[part_id] = updated

    # --- Readers --------------------------------------------------------------

    def get(self, part_id: int) -> Part | None:
        return self._parts.get(part_id)

    def parts(self) -> list[Part]:
        return list(self._parts.values())

    def __len__(self) -> int:
        return len(self._parts)

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    @property
    def last_error(self) -> DomainException | None:
        return self._last_error

    @property
    def contract_violations(self) -> tuple[int, ...]:
        """Ids of cached parts whose sold fields disagree with their status."""
        return self._violations

    # --- Internal helpers -----------------------------------------------------

    @staticmethod
    def _index(parts: list[Part]) -> dict[int, Part]:
        snapshot: dict[int, Part] = {}
        for part in parts:
            if part.id in snapshot:
                raise DataContractViolation(f"Backend returned part #{part.id} twice")
            snapshot[part.id] = part
        return snapshot
