"""CLI commands for metals and gemstones."""

from __future__ import annotations

import click

from jewelry.application.add_material import AddMaterialHandler
from jewelry.application.list_materials import ListMaterialsHandler
from jewelry.domain.exceptions import DomainException
from jewelry.infrastructure.bootstrap import material_repository
from jewelry.infrastructure.cli.parsing import format_inr, parse_variant


@click.command("add")
@click.option("--kind", required=True, type=click.Choice(["metal", "gemstone"]), help="Material kind.")
@click.option("--name", required=True, help="Material name (e.g. Gold).")
@click.option(
    "--variant",
    "variants",
    multiple=True,
    required=True,
    help="Variant as 'Name:Price[:Purity]' (metal) or 'Name:Price[:Cut[:Clarity[:Color]]]' (gemstone).",
)
def material_add(kind: str, name: str, variants: tuple[str, ...]) -> None:
    """Add a metal or gemstone with its priced variants."""
    specs = [parse_variant(v, kind) for v in variants]
    handler = AddMaterialHandler(material_repo=material_repository())

    try:
        dto = handler.handle(kind=kind, name=name, variants=specs)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"{dto.kind.capitalize()} #{dto.id} '{dto.name}' added with {len(dto.variants)} variant(s)")


@click.command("list")
@click.option("--kind", type=click.Choice(["metal", "gemstone"]), default=None, help="Only this kind.")
def material_list(kind: str | None) -> None:
    """List materials and their current variant prices."""
    handler = ListMaterialsHandler(material_repo=material_repository())
    materials = handler.handle(kind)

    if not materials:
        click.echo("No materials found.")
        return

    click.echo(f"{'ID':<5} {'Kind':<9} {'Material':<14} {'Var':<5} {'Variant':<16} {'Price':>14} {'Unit':<6}")
    click.echo("-" * 75)
    for m in materials:
        for v in m.variants:
            click.echo(
                f"{m.id:<5} {m.kind:<9} {m.name:<14} {v.id:<5} {v.name:<16} "
                f"{format_inr(v.unit_price):>14} {v.unit:<6}"
            )
