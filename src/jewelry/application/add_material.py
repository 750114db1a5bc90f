"""Application service: Add Material use case."""

from __future__ import annotations

from jewelry.application.dto import MaterialDTO, VariantSpec
from jewelry.application.list_materials import material_to_dto
from jewelry.domain.exceptions import ValidationError
from jewelry.domain.model.material import (
    GemstoneVariant,
    Material,
    MaterialKind,
    MetalVariant,
    Variant,
)
from jewelry.domain.model.value_objects import to_decimal
from jewelry.domain.repository.material_repository import MaterialRepository


class AddMaterialHandler:

    def __init__(self, material_repo: MaterialRepository) -> None:
        self._material_repo = material_repo

    def handle(self, kind: str, name: str, variants: list[VariantSpec]) -> MaterialDTO:
        """Add a new metal or gemstone with its priced variants."""
        material_kind = MaterialKind.parse(kind)

        if name and self._material_repo.get_by_name(material_kind, name.strip()) is not None:
            raise ValidationError(
                f"{material_kind.value.capitalize()} '{name.strip()}' already exists"
            )

        built = [
            self._build_variant(material_kind, str(i), spec)
            for i, spec in enumerate(variants, start=1)
        ]
        material = Material.create(
            material_id=self._material_repo.next_id(),
            kind=material_kind,
            name=name,
            variants=built,
        )
        self._material_repo.save(material)
        return material_to_dto(material)

    @staticmethod
    def _build_variant(kind: MaterialKind, variant_id: str, spec: VariantSpec) -> Variant:
        price = to_decimal(spec.price, f"price for variant '{spec.name}'")
        if kind is MaterialKind.METAL:
            return MetalVariant(
                id=variant_id,
                name=spec.name.strip(),
                purity=to_decimal(spec.purity, "purity"),
                price_per_gram=price,
                unit=spec.unit or kind.default_unit,
            )
        return GemstoneVariant(
            id=variant_id,
            name=spec.name.strip(),
            price_per_carat=price,
            cut=spec.cut.strip(),
            clarity=spec.clarity.strip(),
            color=spec.color.strip(),
            unit=spec.unit or kind.default_unit,
        )
