"""Plain data containers passed between the CLI and the use-case handlers.

Inputs arrive as raw strings from the command line; outputs hold Decimal
amounts ready for display. Domain objects never leave the application layer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from jewelry.domain.exceptions import PartialSyncFailure


# --- Inputs -------------------------------------------------------------------


@dataclass(frozen=True)
class VariantSpec:
    """Input: one variant of a new material.

    ``purity`` applies to metals; ``cut``/``clarity``/``color`` to gemstones.
    """

    name: str
    price: str
    unit: str | None = None
    purity: str = "0"
    cut: str = ""
    clarity: str = ""
    color: str = ""


@dataclass(frozen=True)
class MetalLineSpec:
    """Input: a metal variant to put in a product (weight in grams).

    ``price`` overrides the variant's current price per gram when given.
    ``wastage`` is a charge string such as "500" or "8%".
    """

    material_id: str
    variant_id: str
    weight: str
    wastage: str | None = None
    price: str | None = None


@dataclass(frozen=True)
class GemstoneLineSpec:
    """Input: a gemstone variant to put in a product (carats per stone)."""

    material_id: str
    variant_id: str
    weight: str
    quantity: int = 1
    wastage: str | None = None
    price: str | None = None


@dataclass(frozen=True)
class OtherChargeSpec:
    name: str
    amount: str


# --- Outputs ------------------------------------------------------------------


@dataclass(frozen=True)
class VariantDTO:
    id: str
    name: str
    unit_price: Decimal
    unit: str
    last_updated: datetime


@dataclass(frozen=True)
class MaterialDTO:
    id: str
    kind: str
    name: str
    slug: str
    variants: list[VariantDTO]


@dataclass(frozen=True)
class CompositionLineDTO:
    kind: str
    material_id: str
    variant_id: str
    variant_name: str
    weight: Decimal
    quantity: int
    unit_price: Decimal
    subtotal: Decimal
    wastage: str | None


@dataclass(frozen=True)
class ProductDTO:
    id: str
    name: str
    product_code: str
    lines: list[CompositionLineDTO]
    making_charges: str
    wastage_charges: str | None
    gst_percentage: Decimal
    other_charges: list[tuple[str, Decimal]]
    prices: dict[str, Decimal]
    per_line_wastage: bool
    last_price_sync: datetime | None

    @property
    def total_price(self) -> Decimal:
        return self.prices["total_price"]


@dataclass(frozen=True)
class PriceImpactDTO:
    """Output: one product's total before and after a price change."""

    product_id: str
    name: str
    product_code: str
    old_total_price: Decimal
    new_total_price: Decimal
    price_difference: Decimal


@dataclass(frozen=True)
class PreviewDTO:
    entity_type: str
    entity_name: str
    variant_name: str
    old_price: Decimal
    new_price: Decimal
    products: list[PriceImpactDTO]

    @property
    def affected_count(self) -> int:
        return len(self.products)


@dataclass(frozen=True)
class FailedProductDTO:
    product_id: str
    reason: str


@dataclass(frozen=True)
class SyncResultDTO:
    """Output: what a committed price synchronization did.

    ``synced_products`` counts only products whose stored price now
    reflects ``new_price``; anything else is listed in ``failed``.
    """

    entity_type: str
    entity_name: str
    variant_name: str
    old_price: Decimal
    new_price: Decimal
    unit: str
    synced_products: int
    products: list[PriceImpactDTO] = field(default_factory=list)
    failed: list[FailedProductDTO] = field(default_factory=list)

    @property
    def failed_product_ids(self) -> list[str]:
        return [f.product_id for f in self.failed]

    def raise_for_failures(self) -> None:
        if self.failed:
            raise PartialSyncFailure(self.synced_products, self.failed_product_ids)


@dataclass(frozen=True)
class PriceHistoryDTO:
    id: str | None
    entity_type: str
    entity_id: str
    entity_name: str
    variant_name: str
    old_price: Decimal
    new_price: Decimal
    unit: str
    affected_products: int
    created_at: datetime
