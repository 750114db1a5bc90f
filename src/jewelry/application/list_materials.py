"""Application service: List Materials use case (query)."""

from __future__ import annotations

from jewelry.application.dto import MaterialDTO, VariantDTO
from jewelry.domain.model.material import Material, MaterialKind
from jewelry.domain.repository.material_repository import MaterialRepository


def material_to_dto(material: Material) -> MaterialDTO:
    return MaterialDTO(
        id=material.id,
        kind=material.kind.value,
        name=material.name,
        slug=material.slug,
        variants=[
            VariantDTO(
                id=v.id,
                name=v.name,
                unit_price=v.unit_price,
                unit=v.unit,
                last_updated=v.last_updated,
            )
            for v in material.variants
        ],
    )


class ListMaterialsHandler:

    def __init__(self, material_repo: MaterialRepository) -> None:
        self._material_repo = material_repo

    def handle(self, kind: str | None = None) -> list[MaterialDTO]:
        material_kind = MaterialKind.parse(kind) if kind else None
        materials = self._material_repo.list_all(material_kind)
        return [material_to_dto(m) for m in sorted(materials, key=lambda m: m.name.lower())]
