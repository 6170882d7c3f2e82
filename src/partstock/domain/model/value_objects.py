"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from partstock.domain.exceptions import ValidationError

CURRENCY_SYMBOL = "₹"
_CENTS = Decimal("0.01")


@dataclass(frozen=True)
class Money:
    """Monetary amount in the single operating currency.

    Uses Decimal to avoid floating-point rounding errors. Prices coming
    from the backend are opaque decimal amounts; there is no currency
    conversion, so unlike a multi-currency Money there is no currency
    field to compare.
    """

    amount: Decimal

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if not self.amount.is_finite():
            raise ValidationError(f"Money amount must be finite, got {self.amount}")
        if self.amount < Decimal("0"):
            raise ValidationError(
                f"Money amount cannot be negative, got {self.amount}"
            )

    @property
    def is_positive(self) -> bool:
        return self.amount > Decimal("0")

    # --- Display --------------------------------------------------------------

    def __str__(self) -> str:
        return f"{CURRENCY_SYMBOL}{self.grouped()}"

    def grouped(self) -> str:
        """Two decimals with Indian digit grouping, e.g. ``1,23,456.00``."""
        text = f"{self.amount.quantize(_CENTS, rounding=ROUND_HALF_UP):.2f}"
        whole, cents = text.split(".")
        if len(whole) > 3:
            head, tail = whole[:-3], whole[-3:]
            pairs = []
            while len(head) > 2:
                pairs.insert(0, head[-2:])
                head = head[:-2]
            if head:
                pairs.insert(0, head)
            whole = ",".join(pairs + [tail])
        return f"{whole}.{cents}"

    def to_wire(self) -> str:
        """Plain decimal text as sent to the backend."""
        return f"{self.amount.quantize(_CENTS, rounding=ROUND_HALF_UP):.2f}"

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def of(amount: str | float | int | Decimal) -> Money:
        """Convenient factory that coerces to Decimal safely."""
        if isinstance(amount, bool):
            raise ValidationError(f"Invalid money amount: {amount!r}")
        try:
            text = amount.strip() if isinstance(amount, str) else str(amount)
            return Money(Decimal(text))
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc
