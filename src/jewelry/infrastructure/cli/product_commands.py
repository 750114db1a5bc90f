"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from jewelry.application.add_product import AddProductHandler
from jewelry.application.dto import ProductDTO
from jewelry.application.show_product import ShowProductHandler
from jewelry.application.update_product import UpdateProductHandler
from jewelry.domain.exceptions import DomainException
from jewelry.infrastructure.bootstrap import material_repository, product_repository
from jewelry.infrastructure.cli.parsing import (
    format_inr,
    parse_gemstone_line,
    parse_metal_line,
    parse_other_charge,
)
from jewelry.infrastructure.config import get_settings

_PRICE_LABELS = [
    ("metal_total", "Metal"),
    ("gemstone_total", "Gemstones"),
    ("making_charge_amount", "Making charges"),
    ("wastage_charge_amount", "Wastage"),
    ("other_charges_total", "Other charges"),
    ("subtotal", "Subtotal"),
    ("gst_amount", "GST"),
    ("total_price", "Total"),
]


def _display_product(dto: ProductDTO) -> None:
    click.echo(f"Product #{dto.id}  {dto.name}  ({dto.product_code})")
    if dto.last_price_sync is not None:
        click.echo(f"Last priced: {dto.last_price_sync.strftime('%Y-%m-%d %H:%M UTC')}")
    click.echo()

    if dto.lines:
        click.echo(f"  {'Kind':<9} {'Variant':<18} {'Weight':>8} {'Qty':>4} {'Rate':>12} {'Subtotal':>14} {'Wastage':>8}")
        click.echo(f"  {'-'*79}")
        for line in dto.lines:
            click.echo(
                f"  {line.kind:<9} {line.variant_name:<18} {line.weight:>8} {line.quantity:>4} "
                f"{format_inr(line.unit_price):>12} {format_inr(line.subtotal):>14} {line.wastage or '-':>8}"
            )
        click.echo()

    wastage_mode = "per line" if dto.per_line_wastage else f"global {dto.wastage_charges or '-'}"
    click.echo(f"  Making: {dto.making_charges}   Wastage: {wastage_mode}   GST: {dto.gst_percentage}%")
    for name, amount in dto.other_charges:
        click.echo(f"  Other: {name} {format_inr(amount)}")
    click.echo()
    for key, label in _PRICE_LABELS:
        click.echo(f"  {label:<16} {format_inr(dto.prices[key]):>16}")


def _pricing_options(func):
    options = [
        click.option("--metal", "metals", multiple=True, help="Metal line 'MaterialId:VariantId:Grams[:Wastage]'."),
        click.option("--gemstone", "gemstones", multiple=True, help="Gemstone line 'MaterialId:VariantId:Carats[:Qty[:Wastage]]'."),
        click.option("--making", default=None, help="Making charge, '5000' or '12%'."),
        click.option("--wastage", default=None, help="Product-wide wastage, '2000' or '3%'."),
        click.option("--gst", default=None, help="GST percentage."),
        click.option("--other", "others", multiple=True, help="Other charge 'Name:Amount'."),
    ]
    for option in reversed(options):
        func = option(func)
    return func


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--code", default=None, help="Product code (generated when omitted).")
@_pricing_options
def product_add(
    name: str,
    code: str | None,
    metals: tuple[str, ...],
    gemstones: tuple[str, ...],
    making: str | None,
    wastage: str | None,
    gst: str | None,
    others: tuple[str, ...],
) -> None:
    """Add a new product; prices are computed from its composition."""
    settings = get_settings()
    handler = AddProductHandler(
        product_repo=product_repository(),
        material_repo=material_repository(),
        code_prefix=settings.product_code_prefix,
        default_gst=settings.default_gst_percentage,
    )

    try:
        dto = handler.handle(
            name=name,
            metals=[parse_metal_line(m) for m in metals],
            gemstones=[parse_gemstone_line(g) for g in gemstones],
            making=making,
            wastage=wastage,
            gst=gst,
            others=[parse_other_charge(o) for o in others],
            product_code=code,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{dto.id} '{dto.name}' added at {format_inr(dto.total_price)}")


@click.command("list")
def product_list() -> None:
    """List all products in the catalog."""
    products = ShowProductHandler(product_repo=product_repository()).list_all()

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Code':<10} {'Name':<24} {'Total':>14}")
    click.echo("-" * 57)
    for p in products:
        click.echo(f"{p.id:<6} {p.product_code:<10} {p.name:<24} {format_inr(p.total_price):>14}")


@click.command("show")
@click.option("--id", "product_id", required=True, help="Product ID.")
def product_show(product_id: str) -> None:
    """Show a product with its full price breakdown."""
    handler = ShowProductHandler(product_repo=product_repository())

    try:
        dto = handler.handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_product(dto)


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--name", default=None, help="New product name.")
@click.option("--clear-gemstones", is_flag=True, default=False, help="Remove all gemstone lines.")
@_pricing_options
def product_update(
    product_id: str,
    name: str | None,
    clear_gemstones: bool,
    metals: tuple[str, ...],
    gemstones: tuple[str, ...],
    making: str | None,
    wastage: str | None,
    gst: str | None,
    others: tuple[str, ...],
) -> None:
    """Edit a product's composition or charges and reprice it.

    Repeated --metal / --gemstone / --other options replace that whole list.
    """
    handler = UpdateProductHandler(
        product_repo=product_repository(),
        material_repo=material_repository(),
    )

    gemstone_specs = [parse_gemstone_line(g) for g in gemstones] or None
    if clear_gemstones:
        gemstone_specs = []

    try:
        dto = handler.handle(
            product_id=product_id,
            name=name,
            metals=[parse_metal_line(m) for m in metals] or None,
            gemstones=gemstone_specs,
            making=making,
            wastage=wastage,
            gst=gst,
            others=[parse_other_charge(o) for o in others] or None,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{dto.id} updated, total {format_inr(dto.total_price)}")
