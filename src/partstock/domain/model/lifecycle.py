"""Stock lifecycle state machine.

    AVAILABLE <-> RESERVED
        \\          /
         +-> SOLD <+        (terminal)

Every transition goes through ``_check`` against the single table below,
so the stock-management operations (reserve/release) and the sale share
the same legality rules. Transitions never mutate a Part; they return a
new one.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import date
from decimal import Decimal, InvalidOperation

from partstock.domain.exceptions import InvalidTransition, ValidationError
from partstock.domain.model.part import Part, StockStatus
from partstock.domain.model.value_objects import Money

TRANSITIONS: dict[StockStatus, frozenset[StockStatus]] = {
    StockStatus.AVAILABLE: frozenset({StockStatus.RESERVED, StockStatus.SOLD}),
    StockStatus.RESERVED: frozenset({StockStatus.AVAILABLE, StockStatus.SOLD}),
    StockStatus.SOLD: frozenset(),
}


def can_transition(current: StockStatus, target: StockStatus) -> bool:
    return target in TRANSITIONS[current]


def _check(part: Part, target: StockStatus) -> None:
    if not can_transition(part.stock_status, target):
        raise InvalidTransition(
            f"Cannot mark part #{part.id} ({part.name}) as {target.value} "
            f"(current status is {part.stock_status.value})"
        )


def sale_price(raw: str | float | int | Decimal | Money | None) -> Money:
    """Parse user input into a sale price.

    Unparseable text is a ValidationError; a missing, zero or negative
    amount is an InvalidTransition because no sale may happen at that
    price.
    """
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        raise InvalidTransition("A sale price is required")
    if isinstance(raw, Money):
        price = raw
    else:
        try:
            amount = Decimal(raw.strip() if isinstance(raw, str) else str(raw))
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid sale price: {raw!r}") from exc
        if not amount.is_finite():
            raise ValidationError(f"Invalid sale price: {raw!r}")
        if amount <= 0:
            raise InvalidTransition(f"Sale price must be greater than zero, got {amount}")
        price = Money(amount)
    if not price.is_positive:
        raise InvalidTransition(f"Sale price must be greater than zero, got {price.amount}")
    return price


def sell(part: Part, sold_price: Money | None, on: date | None = None) -> Part:
    """Transition AVAILABLE|RESERVED -> SOLD.

    Stamps ``sold_date`` (today unless *on* is given) and ``sold_price``.
    All other fields are carried over unchanged.
    """
    _check(part, StockStatus.SOLD)
    if sold_price is None or not sold_price.is_positive:
        raise InvalidTransition("Sale price must be greater than zero")
    return replace(
        part,
        stock_status=StockStatus.SOLD,
        sold_date=on or date.today(),
        sold_price=sold_price,
    )


def reserve(part: Part) -> Part:
    """Transition AVAILABLE -> RESERVED."""
    _check(part, StockStatus.RESERVED)
    return replace(part, stock_status=StockStatus.RESERVED)


def release(part: Part) -> Part:
    """Transition RESERVED -> AVAILABLE."""
    _check(part, StockStatus.AVAILABLE)
    return replace(part, stock_status=StockStatus.AVAILABLE)
