"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

import json
from datetime import datetime
from decimal import Decimal
from pathlib import Path

from jewelry.domain.model.composition import (
    GemstoneLine,
    MaterialRef,
    MaterialSummary,
    MetalLine,
)
from jewelry.domain.model.material import MaterialKind
from jewelry.domain.model.pricing import DEFAULT_GST_PERCENTAGE, PriceBreakdown
from jewelry.domain.model.product import Product
from jewelry.domain.model.value_objects import Charge, ChargeType, OtherCharge
from jewelry.domain.repository.product_repository import ProductRepository


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    # --- ProductRepository interface ------------------------------------------

    def next_id(self) -> str:
        raw = self._load_raw()
        if not raw:
            return "1"
        return str(max(int(p["id"]) for p in raw) + 1)

    def get_by_id(self, product_id: str) -> Product | None:
        for raw in self._load_raw():
            if raw["id"] == product_id:
                return self._to_domain(raw)
        return None

    def get_by_code(self, product_code: str) -> Product | None:
        for raw in self._load_raw():
            if raw["product_code"] == product_code:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Product]:
        return [self._to_domain(raw) for raw in self._load_raw()]

    def find_by_variant(
        self, kind: MaterialKind, material_id: str, variant_id: str
    ) -> list[Product]:
        products = [self._to_domain(raw) for raw in self._load_raw()]
        return [
            p for p in products if p.references_variant(kind, material_id, variant_id)
        ]

    def save(self, product: Product) -> None:
        products = self._load_raw()

        replaced = False
        for i, raw in enumerate(products):
            if raw["id"] == product.id:
                products[i] = self._to_raw(product)
                replaced = True
                break
        if not replaced:
            products.append(self._to_raw(product))

        self._persist_raw(products)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _ref_to_raw(ref: MaterialRef) -> str | dict:
        if isinstance(ref, MaterialSummary):
            return {"id": ref.id, "name": ref.name}
        return ref

    @staticmethod
    def _ref_to_domain(raw: str | dict) -> MaterialRef:
        if isinstance(raw, dict):
            return MaterialSummary(id=raw["id"], name=raw.get("name", ""))
        return raw

    @staticmethod
    def _charge_to_raw(charge: Charge | None) -> dict | None:
        if charge is None:
            return None
        return {"type": charge.type.value, "value": str(charge.value)}

    @staticmethod
    def _charge_to_domain(raw: dict | None) -> Charge | None:
        if raw is None:
            return None
        return Charge(ChargeType(raw["type"]), Decimal(str(raw["value"])))

    @classmethod
    def _to_raw(cls, product: Product) -> dict:
        return {
            "id": product.id,
            "name": product.name,
            "product_code": product.product_code,
            "metal_composition": [
                {
                    "metal": cls._ref_to_raw(line.metal),
                    "variant_id": line.variant_id,
                    "variant_name": line.variant_name,
                    "weight_in_grams": str(line.weight_in_grams),
                    "price_per_gram": str(line.price_per_gram),
                    "subtotal": str(line.subtotal),
                    "wastage_charges": cls._charge_to_raw(line.wastage_charges),
                }
                for line in product.metal_composition
            ],
            "gemstone_composition": [
                {
                    "gemstone": cls._ref_to_raw(line.gemstone),
                    "variant_id": line.variant_id,
                    "variant_name": line.variant_name,
                    "weight_in_carats": str(line.weight_in_carats),
                    "quantity": line.quantity,
                    "price_per_carat": str(line.price_per_carat),
                    "subtotal": str(line.subtotal),
                    "wastage_charges": cls._charge_to_raw(line.wastage_charges),
                }
                for line in product.gemstone_composition
            ],
            "making_charges": cls._charge_to_raw(product.making_charges),
            "wastage_charges": cls._charge_to_raw(product.wastage_charges),
            "gst_percentage": str(product.gst_percentage),
            "other_charges": [
                {"name": c.name, "amount": str(c.amount)} for c in product.other_charges
            ],
            "prices": {k: str(v) for k, v in product.prices.as_dict().items()},
            "last_price_sync": (
                product.last_price_sync.isoformat() if product.last_price_sync else None
            ),
        }

    @classmethod
    def _to_domain(cls, raw: dict) -> Product:
        # Stored line subtotals are derived data and are not read back.
        metals = [
            MetalLine(
                metal=cls._ref_to_domain(m["metal"]),
                variant_id=m["variant_id"],
                variant_name=m["variant_name"],
                weight_in_grams=Decimal(m["weight_in_grams"]),
                price_per_gram=Decimal(m.get("price_per_gram", "0")),
                wastage_charges=cls._charge_to_domain(m.get("wastage_charges")),
            )
            for m in raw.get("metal_composition", [])
        ]
        gemstones = [
            GemstoneLine(
                gemstone=cls._ref_to_domain(g["gemstone"]),
                variant_id=g["variant_id"],
                variant_name=g["variant_name"],
                weight_in_carats=Decimal(g["weight_in_carats"]),
                quantity=int(g.get("quantity", 1)),
                price_per_carat=Decimal(g.get("price_per_carat", "0")),
                wastage_charges=cls._charge_to_domain(g.get("wastage_charges")),
            )
            for g in raw.get("gemstone_composition", [])
        ]
        prices = raw.get("prices", {})
        last_sync = raw.get("last_price_sync")
        return Product(
            id=raw["id"],
            name=raw["name"],
            product_code=raw["product_code"],
            metal_composition=metals,
            gemstone_composition=gemstones,
            making_charges=cls._charge_to_domain(raw.get("making_charges")) or Charge.none(),
            wastage_charges=cls._charge_to_domain(raw.get("wastage_charges")),
            gst_percentage=Decimal(raw.get("gst_percentage", str(DEFAULT_GST_PERCENTAGE))),
            other_charges=[
                OtherCharge(name=c["name"], amount=Decimal(c["amount"]))
                for c in raw.get("other_charges", [])
            ],
            prices=PriceBreakdown(**{k: Decimal(v) for k, v in prices.items()}),
            last_price_sync=datetime.fromisoformat(last_sync) if last_sync else None,
        )

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _persist_raw(self, products: list[dict]) -> None:
        self._file_path.write_text(
            json.dumps(products, indent=2, ensure_ascii=False) + "\n", encoding="utf-8"
        )

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
