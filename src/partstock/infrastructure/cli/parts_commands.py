"""CLI commands for browsing and registering parts."""

from __future__ import annotations

from datetime import datetime

import click

from partstock.application.list_parts import ListPartsHandler
from partstock.application.register_part import RegisterPartHandler
from partstock.domain.exceptions import DomainException
from partstock.domain.model.part import StockStatus
from partstock.infrastructure.bootstrap import inventory_cache, part_gateway
from partstock.infrastructure.cli.display import display_parts
from partstock.infrastructure.config import settings


@click.command("list")
@click.pass_obj
def parts_list(obj: dict) -> None:
    """Show every part in the inventory."""
    handler = ListPartsHandler(cache=inventory_cache(part_gateway(obj["api_url"])))

    try:
        rows = handler.handle()
    except DomainException as exc:
        raise click.ClickException(f"Failed to fetch car parts: {exc}")

    if not rows:
        click.echo("No parts found.")
        return
    display_parts(rows)


@click.command("add")
@click.option("--name", required=True, help="Part name.")
@click.option("--manufacturer", required=True, help="Manufacturer name.")
@click.option(
    "--status",
    type=click.Choice([StockStatus.AVAILABLE.value, StockStatus.RESERVED.value]),
    default=StockStatus.AVAILABLE.value,
    show_default=True,
    help="Initial stock status.",
)
@click.option("--available-from", type=click.DateTime(formats=["%Y-%m-%d"]), default=None, help="Date the part becomes available (YYYY-MM-DD).")
@click.pass_obj
def parts_add(
    obj: dict,
    name: str,
    manufacturer: str,
    status: str,
    available_from: datetime | None,
) -> None:
    """Register a new part."""
    token = obj["token"] if obj["token"] is not None else settings.token
    handler = RegisterPartHandler(gateway=part_gateway(obj["api_url"]), token=token)

    try:
        created = handler.handle(
            name=name,
            manufacturer=manufacturer,
            stock_status=StockStatus(status),
            available_from=available_from.date() if available_from else None,
        )
    except DomainException as exc:
        raise click.ClickException(f"Failed to add car part: {exc}")

    if created is not None:
        click.echo(f"Part #{created.id} '{created.name}' added  (status={created.stock_status.value})")
    else:
        click.echo(f"Part '{name.strip()}' added.")
