"""CLI commands for variant price changes and their history."""

from __future__ import annotations

import click

from jewelry.application.dto import PriceImpactDTO
from jewelry.application.preview_price_change import PreviewPriceChangeHandler
from jewelry.application.show_price_history import ShowPriceHistoryHandler
from jewelry.application.sync_variant_price import SyncVariantPriceHandler
from jewelry.domain.exceptions import DomainException
from jewelry.infrastructure.bootstrap import (
    material_repository,
    price_history_repository,
    product_repository,
)
from jewelry.infrastructure.cli.parsing import format_inr


def _variant_options(func):
    options = [
        click.option("--type", "entity_type", required=True, type=click.Choice(["metal", "gemstone"]), help="Material kind."),
        click.option("--entity", "entity_id", required=True, help="Metal or gemstone ID."),
        click.option("--variant", "variant_id", required=True, help="Variant ID."),
        click.option("--price", "new_price", required=True, help="New price per gram/carat."),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _impact_table(products: list[PriceImpactDTO]) -> None:
    click.echo(f"  {'Code':<10} {'Product':<24} {'Current':>14} {'New':>14} {'Change':>14}")
    click.echo(f"  {'-'*80}")
    for p in products:
        click.echo(
            f"  {p.product_code:<10} {p.name:<24} {format_inr(p.old_total_price):>14} "
            f"{format_inr(p.new_total_price):>14} {format_inr(p.price_difference):>14}"
        )


@click.command("preview")
@_variant_options
def pricing_preview(entity_type: str, entity_id: str, variant_id: str, new_price: str) -> None:
    """Show which products a price change would affect, without saving."""
    handler = PreviewPriceChangeHandler(
        material_repo=material_repository(),
        product_repo=product_repository(),
        history_repo=price_history_repository(),
    )

    try:
        dto = handler.handle(entity_type, entity_id, variant_id, new_price)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"{dto.entity_name} {dto.variant_name}: "
        f"{format_inr(dto.old_price)} -> {format_inr(dto.new_price)}"
    )
    if not dto.products:
        click.echo("No products use this variant.")
        return
    click.echo(f"{dto.affected_count} product(s) affected:")
    click.echo()
    _impact_table(dto.products)


@click.command("sync")
@_variant_options
@click.option("--yes", is_flag=True, default=False, help="Skip the confirmation prompt.")
def pricing_sync(entity_type: str, entity_id: str, variant_id: str, new_price: str, yes: bool) -> None:
    """Set a variant's price and reprice every product that uses it."""
    if not yes:
        click.confirm(
            f"Update {entity_type} {entity_id} variant {variant_id} to {new_price} "
            "and reprice all affected products?",
            abort=True,
        )

    handler = SyncVariantPriceHandler(
        material_repo=material_repository(),
        product_repo=product_repository(),
        history_repo=price_history_repository(),
    )

    try:
        dto = handler.handle(entity_type, entity_id, variant_id, new_price)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    plural = "" if dto.synced_products == 1 else "s"
    click.echo(
        f"{dto.entity_name} {dto.variant_name}: {format_inr(dto.old_price)} -> "
        f"{format_inr(dto.new_price)} per {dto.unit}"
    )
    click.echo(f"Price updated and {dto.synced_products} product{plural} synced successfully")
    if dto.products:
        click.echo()
        _impact_table(dto.products)

    if dto.failed:
        click.echo()
        for failure in dto.failed:
            click.echo(f"  FAILED product #{failure.product_id}: {failure.reason}", err=True)
        try:
            dto.raise_for_failures()
        except DomainException as exc:
            raise click.ClickException(str(exc))


@click.command("history")
@click.option("--limit", default=50, type=int, show_default=True, help="Number of entries.")
@click.option("--type", "entity_type", type=click.Choice(["metal", "gemstone"]), default=None, help="Only this kind.")
@click.option("--entity", "entity_id", default=None, help="Only this metal or gemstone ID.")
def pricing_history(limit: int, entity_type: str | None, entity_id: str | None) -> None:
    """Show recent variant price changes, newest first."""
    handler = ShowPriceHistoryHandler(history_repo=price_history_repository())

    try:
        entries = handler.handle(limit=limit, entity_type=entity_type, entity_id=entity_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not entries:
        click.echo("No price changes recorded.")
        return

    click.echo(f"{'When':<17} {'Kind':<9} {'Variant':<22} {'Old':>12} {'New':>12} {'Unit':<6} {'Products':>8}")
    click.echo("-" * 92)
    for e in entries:
        click.echo(
            f"{e.created_at.strftime('%Y-%m-%d %H:%M'):<17} {e.entity_type:<9} {e.variant_name:<22} "
            f"{format_inr(e.old_price):>12} {format_inr(e.new_price):>12} {e.unit:<6} {e.affected_products:>8}"
        )
