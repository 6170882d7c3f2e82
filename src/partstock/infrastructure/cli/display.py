"""Plain-text table rendering shared by the CLI commands."""

from __future__ import annotations

import click

from partstock.application.dto import PartDTO


def display_parts(rows: list[PartDTO], with_prices: bool = False) -> None:
    header = f"  {'ID':>5} {'Name':<24} {'Manufacturer':<16} {'Status':<10} {'Avail. From':<11} {'Sold Date':<10}"
    if with_prices:
        header += f" {'Recommended':>14} {'Sold Price':>14}"
    click.echo(header)
    click.echo(f"  {'-' * (len(header) - 2)}")
    for row in rows:
        line = (
            f"  {row.id:>5} {row.name:<24} {row.manufacturer:<16} {row.status:<10} "
            f"{row.available_from:<11} {row.sold_date:<10}"
        )
        if with_prices:
            line += f" {row.recommended_price:>14} {row.sold_price:>14}"
        click.echo(line)
