import click

from sales.infrastructure.bootstrap import configure_logging
from sales.infrastructure.cli.sale_commands import (
    sale_cancel,
    sale_create,
    sale_delete,
    sale_show,
    sale_update,
)


@click.group()
def cli() -> None:
    """Sales: sale records with tiered item discounts"""
    configure_logging()


@cli.group()
def sale() -> None:
    """Manage sales."""


# Register subcommands
sale.add_command(sale_cancel)
sale.add_command(sale_create)
sale.add_command(sale_delete)
sale.add_command(sale_show)
sale.add_command(sale_update)
