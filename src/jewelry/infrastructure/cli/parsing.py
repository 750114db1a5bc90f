"""Parsers for the colon-separated option values the CLI accepts."""

from __future__ import annotations

from decimal import Decimal

import click

from jewelry.application.dto import (
    GemstoneLineSpec,
    MetalLineSpec,
    OtherChargeSpec,
    VariantSpec,
)


def format_inr(amount: Decimal) -> str:
    sign = "-" if amount < 0 else ""
    return f"{sign}₹{abs(amount):,.2f}"


def _split(raw: str, minimum: int, maximum: int, expected: str) -> list[str]:
    parts = [p.strip() for p in raw.split(":")]
    if not minimum <= len(parts) <= maximum or not all(parts[:minimum]):
        raise click.BadParameter(f"Invalid value '{raw}'. Expected '{expected}'.")
    return parts


def parse_variant(raw: str, kind: str) -> VariantSpec:
    """Metal: 'Name:Price[:Purity]'. Gemstone: 'Name:Price[:Cut[:Clarity[:Color]]]'."""
    if kind == "metal":
        parts = _split(raw, 2, 3, "Name:Price[:Purity]")
        return VariantSpec(name=parts[0], price=parts[1], purity=parts[2] if len(parts) > 2 else "0")
    parts = _split(raw, 2, 5, "Name:Price[:Cut[:Clarity[:Color]]]")
    parts += [""] * (5 - len(parts))
    return VariantSpec(
        name=parts[0], price=parts[1], cut=parts[2], clarity=parts[3], color=parts[4]
    )


def parse_metal_line(raw: str) -> MetalLineSpec:
    """'MaterialId:VariantId:Grams[:Wastage]' where wastage is '500' or '8%'."""
    parts = _split(raw, 3, 4, "MaterialId:VariantId:Grams[:Wastage]")
    return MetalLineSpec(
        material_id=parts[0],
        variant_id=parts[1],
        weight=parts[2],
        wastage=parts[3] if len(parts) > 3 and parts[3] else None,
    )


def parse_gemstone_line(raw: str) -> GemstoneLineSpec:
    """'MaterialId:VariantId:Carats[:Qty[:Wastage]]'."""
    parts = _split(raw, 3, 5, "MaterialId:VariantId:Carats[:Qty[:Wastage]]")
    quantity = 1
    if len(parts) > 3 and parts[3]:
        try:
            quantity = int(parts[3])
        except ValueError:
            raise click.BadParameter(f"Invalid quantity '{parts[3]}' in '{raw}'.")
    return GemstoneLineSpec(
        material_id=parts[0],
        variant_id=parts[1],
        weight=parts[2],
        quantity=quantity,
        wastage=parts[4] if len(parts) > 4 and parts[4] else None,
    )


def parse_other_charge(raw: str) -> OtherChargeSpec:
    if ":" not in raw:
        raise click.BadParameter(f"Invalid charge '{raw}'. Expected 'Name:Amount'.")
    name, amount = raw.rsplit(":", 1)
    return OtherChargeSpec(name=name.strip(), amount=amount.strip())
