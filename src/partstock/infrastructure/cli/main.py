import logging

import click

from partstock.infrastructure.cli.parts_commands import parts_add, parts_list
from partstock.infrastructure.cli.sales_commands import sales_search, sales_sell
from partstock.infrastructure.config import settings


@click.group()
@click.option("--api-url", default=None, help="Parts backend URL (default: PARTSTOCK_API_URL).")
@click.option("--token", default=None, help="Bearer token for mutating requests (default: PARTSTOCK_TOKEN).")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log requests and decisions.")
@click.pass_context
def cli(ctx: click.Context, api_url: str | None, token: str | None, verbose: bool) -> None:
    """partstock: car parts inventory and sales"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else getattr(logging, settings.log_level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = {"api_url": api_url, "token": token}


@cli.group()
def parts() -> None:
    """Browse and register parts."""


@cli.group()
def sales() -> None:
    """Search parts and record sales."""


# Register subcommands
parts.add_command(parts_add)
parts.add_command(parts_list)
sales.add_command(sales_search)
sales.add_command(sales_sell)
