"""CLI commands for the sales view."""

from __future__ import annotations

import click

from partstock.application.dto import PartDTO
from partstock.application.sale_workflow import SaleWorkflow
from partstock.infrastructure.bootstrap import sale_workflow
from partstock.infrastructure.cli.display import display_parts


def _show_results(workflow: SaleWorkflow) -> None:
    display_parts([PartDTO.from_part(p) for p in workflow.results], with_prices=True)


@click.command("search")
@click.argument("query")
@click.pass_obj
def sales_search(obj: dict, query: str) -> None:
    """Find parts by ID or (part of) name."""
    workflow = sale_workflow(obj["api_url"], obj["token"])
    workflow.search(query)

    if workflow.error_message:
        raise click.ClickException(workflow.error_message)
    if workflow.info_message:
        click.echo(workflow.info_message)
        return
    _show_results(workflow)


@click.command("sell")
@click.argument("part_id", type=int)
@click.option("--price", default=None, help="Selling price; prompted for when omitted.")
@click.option("--yes", is_flag=True, default=False, help="Do not ask for confirmation.")
@click.pass_obj
def sales_sell(obj: dict, part_id: int, price: str | None, yes: bool) -> None:
    """Sell a part at a given price."""
    workflow = sale_workflow(obj["api_url"], obj["token"])
    workflow.search(str(part_id))
    if workflow.error_message:
        raise click.ClickException(workflow.error_message)

    part = next((p for p in workflow.results if p.id == part_id), None)
    if part is None:
        raise click.ClickException(f"Part #{part_id} not found")
    _show_results(workflow)
    if part.recommended_price is not None:
        click.echo(f"Recommended price: {part.recommended_price}")

    workflow.select_for_sale(part_id)
    if price is None:
        price = click.prompt("Selling price", type=str)
    if not yes and not click.confirm(f"Sell part #{part_id} ({part.name}) for {price}?"):
        workflow.cancel_sale()
        click.echo("Sale cancelled.")
        return

    sold = workflow.confirm_sale(price)
    if sold is None:
        raise click.ClickException(workflow.error_message)

    click.echo(workflow.success_message)
    click.echo(f"Part #{sold.id} sold on {sold.sold_date} for {sold.sold_price}")
    if workflow.info_message:
        click.echo(workflow.info_message)
