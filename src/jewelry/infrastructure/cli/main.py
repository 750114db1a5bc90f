import logging

import click
from dotenv import load_dotenv

from jewelry.infrastructure.cli.material_commands import material_add, material_list
from jewelry.infrastructure.cli.pricing_commands import (
    pricing_history,
    pricing_preview,
    pricing_sync,
)
from jewelry.infrastructure.cli.product_commands import (
    product_add,
    product_list,
    product_show,
    product_update,
)
from jewelry.infrastructure.config import get_settings


@click.group()
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Override JEWELRY_LOG_LEVEL.",
)
def cli(log_level: str | None) -> None:
    """Jewelry pricing: materials, products and price synchronization"""
    load_dotenv()
    level = (log_level or get_settings().log_level).upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@cli.group()
def material() -> None:
    """Manage metals and gemstones."""


@cli.group()
def product() -> None:
    """Manage products."""


@cli.group()
def pricing() -> None:
    """Preview and apply variant price changes."""


# Register subcommands
material.add_command(material_add)
material.add_command(material_list)
product.add_command(product_add)
product.add_command(product_list)
product.add_command(product_show)
product.add_command(product_update)
pricing.add_command(pricing_preview)
pricing.add_command(pricing_sync)
pricing.add_command(pricing_history)
