"""Part aggregate: a single car part tracked through its stock lifecycle.

Parts are created and numbered by the backend. On the client they are
immutable snapshots: every status change produces a new Part (see
``partstock.domain.model.lifecycle``), which the inventory cache then
swaps in for the old one.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum

from partstock.domain.model.value_objects import Money


class StockStatus(Enum):
    AVAILABLE = "available"
    RESERVED = "reserved"
    SOLD = "sold"

    @property
    def label(self) -> str:
        return self.value.capitalize()


SELLABLE_STATUSES = frozenset({StockStatus.AVAILABLE, StockStatus.RESERVED})


@dataclass(frozen=True)
class Part:
    """Snapshot of a part as last reported by the backend.

    Invariants (checked by ``is_consistent``, not enforced on
    construction, so inconsistent backend records can still be
    represented and flagged):
    - ``sold_date`` and ``sold_price`` are both None unless SOLD
    - both are set once SOLD
    """

    id: int
    name: str
    manufacturer: str
    stock_status: StockStatus = StockStatus.AVAILABLE
    available_from: date | None = None
    sold_date: date | None = None
    recommended_price: Money | None = None
    sold_price: Money | None = None

    @property
    def is_sellable(self) -> bool:
        return is_sellable(self)

    @property
    def is_consistent(self) -> bool:
        return is_consistent(self)

    @property
    def is_sold(self) -> bool:
        return self.stock_status == StockStatus.SOLD


def is_sellable(part: Part) -> bool:
    """True iff the part may still be sold (available or reserved)."""
    return part.stock_status in SELLABLE_STATUSES


def is_consistent(part: Part) -> bool:
    """True iff the sold date and price agree with the stock status."""
    if part.stock_status == StockStatus.SOLD:
        return part.sold_date is not None and part.sold_price is not None
    return part.sold_date is None and part.sold_price is None
