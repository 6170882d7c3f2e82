"""Application service: Register Part use case.

New parts enter the inventory as AVAILABLE or RESERVED only. A part can
become SOLD solely through the sale transition, which is what stamps the
sold date and price; registering a part as already sold would create a
record that breaks that invariant from the start.
"""

from __future__ import annotations

from datetime import date

from partstock.domain.exceptions import ValidationError
from partstock.domain.model.part import SELLABLE_STATUSES, Part, StockStatus
from partstock.domain.repository.part_gateway import PartGateway


class RegisterPartHandler:

    def __init__(self, gateway: PartGateway, token: str | None = None) -> None:
        self._gateway = gateway
        self._token = token

    def handle(
        self,
        name: str,
        manufacturer: str,
        stock_status: StockStatus = StockStatus.AVAILABLE,
        available_from: date | None = None,
    ) -> Part | None:
        if not name or not name.strip():
            raise ValidationError("Part name is required")
        if not manufacturer or not manufacturer.strip():
            raise ValidationError("Manufacturer is required")
        if stock_status not in SELLABLE_STATUSES:
            raise ValidationError(
                f"New parts must be available or reserved, not {stock_status.value}"
            )

        return self._gateway.register(
            name=name.strip(),
            manufacturer=manufacturer.strip(),
            stock_status=stock_status,
            available_from=available_from,
            token=self._token or None,
        )
