"""Application service: the search-then-sell workflow.

This is the object the presentation layer drives. Selling is split in
two so that price entry can be abandoned without side effects:

1. ``select_for_sale(id)`` stages the part (no I/O)
2. ``confirm_sale(price)`` validates, asks the backend to record the
   sale, then patches the cache and the displayed results

The staged part and draft price live in an explicit ``SaleState`` value
rather than loose attributes. Every DomainException is turned into a
message at this boundary; nothing raised by the core escapes to the UI.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from partstock.application.inventory_cache import InventoryCache
from partstock.domain.exceptions import (
    AuthenticationRequired,
    CacheDesync,
    DomainException,
    EntityNotFoundError,
    TransportError,
    ValidationError,
)
from partstock.domain.model import lifecycle
from partstock.domain.model.part import Part
from partstock.domain.model.value_objects import Money
from partstock.domain.repository.part_gateway import PartGateway
from partstock.domain.service.part_search import search

logger = logging.getLogger(__name__)

SEARCH_FAILED = "Failed to search parts."
SELL_FAILED = "Failed to sell part."
NO_MATCHES = "No matching parts found."
SOLD_OK = "Part sold successfully!"


# ---------------------------------------------------------------------------
# Staged state
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Idle:
    """Nothing staged."""


@dataclass(frozen=True)
class Selecting:
    """A part has been picked; no price entered yet."""

    part_id: int


@dataclass(frozen=True)
class Confirming:
    """A price was submitted for the selected part.

    The workflow stays here after a failed confirmation so the user can
    correct the price and retry, or cancel.
    """

    part_id: int
    draft_price: str


SaleState = Idle | Selecting | Confirming

IDLE = Idle()


class SaleWorkflow:

    def __init__(
        self,
        cache: InventoryCache,
        gateway: PartGateway,
        token: str | None = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._cache = cache
        self._gateway = gateway
        self._token = token
        self._today = today

        self._state: SaleState = IDLE
        self._results: list[Part] = []
        self._loading = False
        self._in_flight = False
        self._last_error: DomainException | None = None
        self._error_message = ""
        self._info_message = ""
        self._success_message = ""

    # --- Read accessors -------------------------------------------------------

    @property
    def state(self) -> SaleState:
        return self._state

    @property
    def sell_id(self) -> int | None:
        if isinstance(self._state, (Selecting, Confirming)):
            return self._state.part_id
        return None

    @property
    def results(self) -> list[Part]:
        return list(self._results)

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    @property
    def last_error(self) -> DomainException | None:
        return self._last_error

    @property
    def error_message(self) -> str:
        return self._error_message

    @property
    def info_message(self) -> str:
        return self._info_message

    @property
    def success_message(self) -> str:
        return self._success_message

    # --- Search ---------------------------------------------------------------

    def search(self, query: str) -> list[Part]:
        """Refresh from the backend and filter by id or name.

        A failed refresh leaves the current results on screen.
        """
        self._clear_messages()
        if not query or not query.strip():
            self._fail(ValidationError("Enter a part ID or name to search."))
            return self.results

        self._loading = True
        try:
            self._cache.refresh()
        except DomainException as exc:
            self._fail(exc, SEARCH_FAILED)
            return self.results
        finally:
            self._loading = False

        self._results = search(query, self._cache.parts())
        if not self._results:
            self._info_message = NO_MATCHES
        return self.results

    # --- Sale -----------------------------------------------------------------

    def select_for_sale(self, part_id: int) -> SaleState:
        """Phase 1: stage *part_id*, discarding any draft price."""
        if self._in_flight:
            logger.warning("Ignoring selection of part #%s: a sale is in flight", part_id)
            return self._state
        self._state = Selecting(part_id)
        self._clear_messages()
        return self._state

    def confirm_sale(self, price: str | Decimal | Money | None) -> Part | None:
        """Phase 2: sell the staged part at *price*.

        Returns the sold record on success. On failure returns None, keeps
        the staged part and draft price, and sets ``error_message``.
        """
        if self._in_flight:
            logger.warning("Ignoring repeated confirmation: a sale is already in flight")
            return None

        self._clear_messages()
        if isinstance(self._state, Idle):
            self._fail(ValidationError("Select a part to sell first."))
            return None

        part_id = self._state.part_id
        self._state = Confirming(part_id, "" if price is None else str(price))

        self._in_flight = True
        try:
            sold = self._commit(part_id, price)
        except TransportError as exc:
            self._fail(exc, SELL_FAILED)
            return None
        except DomainException as exc:
            self._fail(exc)
            return None
        finally:
            self._in_flight = False

        self._finish(part_id, sold)
        return sold

    def cancel_sale(self) -> SaleState:
        """Drop the staged part and price. Safe to call at any time."""
        if self._in_flight:
            logger.warning("Ignoring cancel: a sale is in flight")
            return self._state
        self._state = IDLE
        return self._state

    # --- Internal helpers -----------------------------------------------------

    def _commit(self, part_id: int, raw_price: str | Decimal | Money | None) -> Part:
        price = lifecycle.sale_price(raw_price)

        part = self._cache.get(part_id)
        if part is None:
            raise EntityNotFoundError(
                f"Part #{part_id} is not in the inventory; search again"
            )

        local = lifecycle.sell(part, price, on=self._today())

        if not self._token:
            raise AuthenticationRequired("Log in before selling parts")

        logger.debug("Selling part #%s for %s", part_id, price)
        acknowledged = self._gateway.sell(part_id, price, self._token)
        if acknowledged is None:
            return local
        if (
            acknowledged.id != part_id
            or not acknowledged.is_sold
            or not acknowledged.is_consistent
        ):
            # The sale was recorded (2xx); only the echoed record is unusable.
            logger.warning(
                "Backend acknowledged sale of part #%s with an unusable record "
                "(id=%s, status=%s); using the local transition",
                part_id, acknowledged.id, acknowledged.stock_status.value,
            )
            return local
        return acknowledged

    def _finish(self, part_id: int, sold: Part) -> None:
        try:
            self._cache.apply_transition(part_id, sold)
        except CacheDesync as exc:
            self._last_error = exc
            self._info_message = str(exc)

        self._results = [sold if p.id == part_id else p for p in self._results]
        self._state = IDLE
        self._success_message = SOLD_OK
        logger.info("Part #%s sold for %s", part_id, sold.sold_price)

    def _fail(self, exc: DomainException, message: str | None = None) -> None:
        logger.warning("%s: %s", type(exc).__name__, exc)
        self._last_error = exc
        self._error_message = str(exc) if message is None else message

    def _clear_messages(self) -> None:
        self._last_error = None
        self._error_message = ""
        self._info_message = ""
        self._success_message = ""
