"""Turns composition specs into priced composition lines.

Each line copies the variant's name and current unit price so the product
can be priced without touching the material again. Lines keep a populated
``MaterialSummary`` reference.
"""

from __future__ import annotations

from jewelry.application.dto import GemstoneLineSpec, MetalLineSpec, OtherChargeSpec
from jewelry.domain.exceptions import NotFoundError
from jewelry.domain.model.composition import GemstoneLine, MaterialSummary, MetalLine
from jewelry.domain.model.material import Material, MaterialKind, Variant
from jewelry.domain.model.value_objects import Charge, OtherCharge, to_decimal
from jewelry.domain.repository.material_repository import MaterialRepository


class CompositionBuilder:

    def __init__(self, material_repo: MaterialRepository) -> None:
        self._material_repo = material_repo

    def metal_lines(self, specs: list[MetalLineSpec]) -> list[MetalLine]:
        lines: list[MetalLine] = []
        for spec in specs:
            material, variant = self._lookup(MaterialKind.METAL, spec.material_id, spec.variant_id)
            price = (
                to_decimal(spec.price, "price per gram")
                if spec.price is not None
                else variant.unit_price
            )
            lines.append(
                MetalLine(
                    metal=MaterialSummary(id=material.id, name=material.name),
                    variant_id=variant.id,
                    variant_name=variant.name,
                    weight_in_grams=to_decimal(spec.weight, "weight in grams"),
                    price_per_gram=price,
                    wastage_charges=_optional_charge(spec.wastage),
                )
            )
        return lines

    def gemstone_lines(self, specs: list[GemstoneLineSpec]) -> list[GemstoneLine]:
        lines: list[GemstoneLine] = []
        for spec in specs:
            material, variant = self._lookup(
                MaterialKind.GEMSTONE, spec.material_id, spec.variant_id
            )
            price = (
                to_decimal(spec.price, "price per carat")
                if spec.price is not None
                else variant.unit_price
            )
            lines.append(
                GemstoneLine(
                    gemstone=MaterialSummary(id=material.id, name=material.name),
                    variant_id=variant.id,
                    variant_name=variant.name,
                    weight_in_carats=to_decimal(spec.weight, "weight in carats"),
                    quantity=spec.quantity,
                    price_per_carat=price,
                    wastage_charges=_optional_charge(spec.wastage),
                )
            )
        return lines

    def _lookup(
        self, kind: MaterialKind, material_id: str, variant_id: str
    ) -> tuple[Material, Variant]:
        material = self._material_repo.get_by_id(material_id)
        if material is None or material.kind is not kind:
            raise NotFoundError(f"{kind.value.capitalize()} '{material_id}' not found")
        variant = material.find_variant(variant_id)
        if variant is None:
            raise NotFoundError(
                f"Variant '{variant_id}' not found in {kind.value} '{material.name}'"
            )
        return material, variant


def _optional_charge(raw: str | None) -> Charge | None:
    if raw is None or not raw.strip():
        return None
    return Charge.parse(raw)


def other_charges(specs: list[OtherChargeSpec]) -> list[OtherCharge]:
    return [OtherCharge.of(spec.name, spec.amount) for spec in specs]
