"""JSON-file-backed implementation of MaterialRepository."""

from __future__ import annotations

import json
from datetime import datetime
from decimal import Decimal
from pathlib import Path

from jewelry.domain.model.material import (
    GemstoneVariant,
    Material,
    MaterialKind,
    MetalVariant,
    Variant,
)
from jewelry.domain.repository.material_repository import MaterialRepository


class JsonMaterialRepository(MaterialRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    # --- MaterialRepository interface -----------------------------------------

    def next_id(self) -> str:
        raw = self._load_raw()
        if not raw:
            return "1"
        return str(max(int(m["id"]) for m in raw) + 1)

    def get_by_id(self, material_id: str) -> Material | None:
        for raw in self._load_raw():
            if raw["id"] == material_id:
                return self._to_domain(raw)
        return None

    def get_by_name(self, kind: MaterialKind, name: str) -> Material | None:
        for raw in self._load_raw():
            if raw["kind"] == kind.value and raw["name"].lower() == name.lower():
                return self._to_domain(raw)
        return None

    def list_all(self, kind: MaterialKind | None = None) -> list[Material]:
        return [
            self._to_domain(raw)
            for raw in self._load_raw()
            if kind is None or raw["kind"] == kind.value
        ]

    def save(self, material: Material) -> None:
        materials = self._load_raw()

        # Upsert: replace if exists, otherwise append
        replaced = False
        for i, raw in enumerate(materials):
            if raw["id"] == material.id:
                materials[i] = self._to_raw(material)
                replaced = True
                break
        if not replaced:
            materials.append(self._to_raw(material))

        self._persist_raw(materials)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _variant_to_raw(variant: Variant) -> dict:
        if isinstance(variant, MetalVariant):
            return {
                "id": variant.id,
                "name": variant.name,
                "purity": str(variant.purity),
                "price_per_gram": str(variant.price_per_gram),
                "unit": variant.unit,
                "last_updated": variant.last_updated.isoformat(),
            }
        return {
            "id": variant.id,
            "name": variant.name,
            "cut": variant.cut,
            "clarity": variant.clarity,
            "color": variant.color,
            "price_per_carat": str(variant.price_per_carat),
            "unit": variant.unit,
            "last_updated": variant.last_updated.isoformat(),
        }

    @staticmethod
    def _variant_to_domain(kind: MaterialKind, raw: dict) -> Variant:
        if kind is MaterialKind.METAL:
            return MetalVariant(
                id=raw["id"],
                name=raw["name"],
                purity=Decimal(raw.get("purity", "0")),
                price_per_gram=Decimal(raw["price_per_gram"]),
                unit=raw.get("unit") or kind.default_unit,
                last_updated=datetime.fromisoformat(raw["last_updated"]),
            )
        return GemstoneVariant(
            id=raw["id"],
            name=raw["name"],
            price_per_carat=Decimal(raw["price_per_carat"]),
            cut=raw.get("cut", ""),
            clarity=raw.get("clarity", ""),
            color=raw.get("color", ""),
            unit=raw.get("unit") or kind.default_unit,
            last_updated=datetime.fromisoformat(raw["last_updated"]),
        )

    @classmethod
    def _to_raw(cls, material: Material) -> dict:
        return {
            "id": material.id,
            "kind": material.kind.value,
            "name": material.name,
            "slug": material.slug,
            "is_active": material.is_active,
            "variants": [cls._variant_to_raw(v) for v in material.variants],
        }

    @classmethod
    def _to_domain(cls, raw: dict) -> Material:
        kind = MaterialKind(raw["kind"])
        return Material(
            id=raw["id"],
            kind=kind,
            name=raw["name"],
            slug=raw.get("slug", ""),
            is_active=raw.get("is_active", True),
            variants=[cls._variant_to_domain(kind, v) for v in raw["variants"]],
        )

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _persist_raw(self, materials: list[dict]) -> None:
        self._file_path.write_text(
            json.dumps(materials, indent=2, ensure_ascii=False) + "\n", encoding="utf-8"
        )

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
