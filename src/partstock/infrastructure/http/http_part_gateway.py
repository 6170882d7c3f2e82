"""HTTP implementation of PartGateway, backed by a requests Session."""

from __future__ import annotations

import logging
from datetime import date
from typing import Any

import requests

from partstock.domain.exceptions import (
    DataContractViolation,
    DomainException,
    TransportError,
)
from partstock.domain.model.part import Part, StockStatus
from partstock.domain.model.value_objects import Money
from partstock.domain.repository.part_gateway import PartGateway

logger = logging.getLogger(__name__)


class HttpPartGateway(PartGateway):

    DEFAULT_HEADERS = {
        "Accept": "application/json",
        "Content-Type": "application/json",
    }

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        session: requests.Session | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session = session if session is not None else requests.Session()
        self._session.headers.update(self.DEFAULT_HEADERS)

    # --- PartGateway interface ------------------------------------------------

    def fetch_all(self) -> list[Part]:
        data = self._request("GET", "/parts")
        if not isinstance(data, list):
            raise DataContractViolation(
                f"Expected a list of parts, got {type(data).__name__}"
            )
        return [self._to_domain(raw) for raw in data]

    def sell(self, part_id: int, sold_price: Money, token: str) -> Part | None:
        data = self._request(
            "PATCH",
            f"/parts/{part_id}/sell",
            json={"sold_price": sold_price.to_wire()},
            token=token,
        )
        # Any 2xx means the sale was recorded, even a bare {"message": ...}.
        if not _is_record(data):
            return None
        try:
            return self._to_domain(data)
        except DataContractViolation as exc:
            logger.warning(
                "Ignoring unreadable sale acknowledgement for part #%s: %s", part_id, exc
            )
            return None

    def register(
        self,
        name: str,
        manufacturer: str,
        stock_status: StockStatus,
        available_from: date | None,
        token: str | None,
    ) -> Part | None:
        payload = {
            "name": name,
            "manufacturer": manufacturer,
            "stock_status": stock_status.value,
            "available_from": available_from.isoformat() if available_from else None,
            "sold_date": None,
        }
        data = self._request("POST", "/parts", json=payload, token=token)
        # Some backends answer with just {"id": ...}; only a full record is a Part.
        return self._to_domain(data) if _is_record(data) else None

    # --- Transport ------------------------------------------------------------

    def _request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        token: str | None = None,
    ) -> Any:
        url = f"{self._base_url}{path}"
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        logger.debug("%s %s", method, url)
        try:
            resp = self._session.request(
                method, url, json=json, headers=headers, timeout=self._timeout
            )
        except requests.RequestException as exc:
            raise TransportError(f"{method} {path} failed: {exc}") from exc

        logger.debug("%s %s -> %s", method, url, resp.status_code)
        if not 200 <= resp.status_code < 300:
            raise TransportError(f"{method} {path} failed ({resp.status_code}): {resp.text}")

        if resp.status_code == 204 or not resp.content:
            return None
        try:
            return resp.json()
        except ValueError as exc:
            raise TransportError(f"{method} {path} returned invalid JSON") from exc

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_domain(raw: dict) -> Part:
        try:
            return Part(
                id=int(raw["id"]),
                name=str(raw["name"]),
                manufacturer=str(raw.get("manufacturer") or ""),
                stock_status=StockStatus(raw.get("stock_status") or "available"),
                available_from=_parse_date(raw.get("available_from")),
                sold_date=_parse_date(raw.get("sold_date")),
                recommended_price=_parse_money(raw.get("recommended_price")),
                sold_price=_parse_money(raw.get("sold_price")),
            )
        except (KeyError, TypeError, ValueError, DomainException) as exc:
            raise DataContractViolation(f"Malformed part record {raw!r}: {exc}") from exc


def _is_record(data: Any) -> bool:
    return isinstance(data, dict) and {"id", "name", "manufacturer"} <= data.keys()


def _parse_date(raw: Any) -> date | None:
    """Accept ``YYYY-MM-DD`` or a full ISO timestamp; keep the date part."""
    if raw is None or raw == "":
        return None
    return date.fromisoformat(str(raw)[:10])


def _parse_money(raw: Any) -> Money | None:
    if raw is None or raw == "":
        return None
    return Money.of(raw)
