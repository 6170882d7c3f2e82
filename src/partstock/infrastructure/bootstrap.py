"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from partstock.application.inventory_cache import InventoryCache
from partstock.application.sale_workflow import SaleWorkflow
from partstock.infrastructure.config import settings
from partstock.infrastructure.http.http_part_gateway import HttpPartGateway


def part_gateway(api_url: str | None = None) -> HttpPartGateway:
    return HttpPartGateway(api_url or settings.api_url, timeout=settings.timeout)


def inventory_cache(gateway: HttpPartGateway) -> InventoryCache:
    return InventoryCache(gateway)


def sale_workflow(api_url: str | None = None, token: str | None = None) -> SaleWorkflow:
    gateway = part_gateway(api_url)
    return SaleWorkflow(
        cache=inventory_cache(gateway),
        gateway=gateway,
        token=token if token is not None else settings.token,
    )
