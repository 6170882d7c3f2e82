"""Abstract gateway to the parts backend.

Defined in the domain layer so the core never depends on the transport.
The HTTP implementation lives in the infrastructure layer; tests use an
in-memory fake.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date

from partstock.domain.model.part import Part, StockStatus
from partstock.domain.model.value_objects import Money


class PartGateway(ABC):

    @abstractmethod
    def fetch_all(self) -> list[Part]:
        """Return every part the backend knows about, in backend order.

        Raises TransportError if the backend cannot be reached and
        DataContractViolation if a record cannot be represented.
        """

    @abstractmethod
    def sell(self, part_id: int, sold_price: Money, token: str) -> Part | None:
        """Record the sale of a part.

        Returns the updated record if the backend sends one back, or None
        when it only acknowledges. Raises TransportError on failure.
        """

    @abstractmethod
    def register(
        self,
        name: str,
        manufacturer: str,
        stock_status: StockStatus,
        available_from: date | None,
        token: str | None,
    ) -> Part | None:
        """Create a new part. Returns the created record if echoed back."""
