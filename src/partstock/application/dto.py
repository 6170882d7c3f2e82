"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry display-ready text from the application layer to the CLI
without exposing domain internals.
"""

from __future__ import annotations

from dataclasses import dataclass

from partstock.domain.model.part import Part


@dataclass(frozen=True)
class PartDTO:
    """Output: one row of the parts / sales table."""

    id: int
    name: str
    manufacturer: str
    status: str  # capitalised, e.g. "Available"
    available_from: str
    sold_date: str
    recommended_price: str  # formatted, e.g. "₹1,250.00", or ""
    sold_price: str
    sellable: bool

    @staticmethod
    def from_part(part: Part) -> PartDTO:
        return PartDTO(
            id=part.id,
            name=part.name,
            manufacturer=part.manufacturer,
            status=part.stock_status.label,
            available_from=part.available_from.isoformat() if part.available_from else "",
            sold_date=part.sold_date.isoformat() if part.sold_date else "",
            recommended_price=str(part.recommended_price) if part.recommended_price else "",
            sold_price=str(part.sold_price) if part.sold_price else "",
            sellable=part.is_sellable,
        )
