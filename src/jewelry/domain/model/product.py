"""Product aggregate.

A product owns its metal and gemstone composition lines, its charge
configuration and the derived price fields. The derived fields are only
ever written through ``apply_prices()`` with the output of the price
calculator, so they stay consistent with the composition.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal

from jewelry.domain.exceptions import ValidationError
from jewelry.domain.model.composition import GemstoneLine, MetalLine
from jewelry.domain.model.material import MaterialKind
from jewelry.domain.model.pricing import (
    DEFAULT_GST_PERCENTAGE,
    PriceBreakdown,
    PricingInput,
)
from jewelry.domain.model.value_objects import ZERO, Charge, OtherCharge

MAX_GST_PERCENTAGE = Decimal("100")


@dataclass
class Product:
    """Aggregate root for a catalog item.

    The ``__init__`` is intentionally permissive so the repository can
    reconstitute persisted products; use ``Product.create()`` for new ones.
    """

    id: str
    name: str
    product_code: str
    metal_composition: list[MetalLine] = field(default_factory=list)
    gemstone_composition: list[GemstoneLine] = field(default_factory=list)
    making_charges: Charge = field(default_factory=Charge.none)
    wastage_charges: Charge | None = None
    gst_percentage: Decimal = DEFAULT_GST_PERCENTAGE
    other_charges: list[OtherCharge] = field(default_factory=list)
    prices: PriceBreakdown = field(default_factory=PriceBreakdown)
    last_price_sync: datetime | None = None

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def create(
        product_id: str,
        name: str,
        product_code: str,
        metal_composition: list[MetalLine],
        gemstone_composition: list[GemstoneLine],
        making_charges: Charge,
        wastage_charges: Charge | None,
        gst_percentage: Decimal,
        other_charges: list[OtherCharge],
    ) -> Product:
        if not name or not name.strip():
            raise ValidationError("Product name is required")
        if len(name.strip()) > 200:
            raise ValidationError("Product name cannot exceed 200 characters")
        if not product_code:
            raise ValidationError("Product code is required")
        product = Product(
            id=product_id,
            name=name.strip(),
            product_code=product_code,
        )
        product.change_pricing(
            metal_composition=metal_composition,
            gemstone_composition=gemstone_composition,
            making_charges=making_charges,
            wastage_charges=wastage_charges,
            gst_percentage=gst_percentage,
            other_charges=other_charges,
        )
        return product

    # --- Pricing inputs -------------------------------------------------------

    def change_pricing(
        self,
        metal_composition: list[MetalLine] | None = None,
        gemstone_composition: list[GemstoneLine] | None = None,
        making_charges: Charge | None = None,
        wastage_charges: Charge | None = None,
        gst_percentage: Decimal | None = None,
        other_charges: list[OtherCharge] | None = None,
    ) -> None:
        """Replace any subset of the pricing inputs.

        ``None`` always means "keep the stored value". The product-wide
        wastage charge therefore cannot be removed once set; pass
        ``Charge.none()`` to zero it out. A zero charge resolves to nothing
        and never switches the product into per-line wastage mode.

        Callers must re-run the calculator and ``apply_prices()`` afterwards.
        """
        if gst_percentage is not None:
            if not ZERO <= gst_percentage <= MAX_GST_PERCENTAGE:
                raise ValidationError("GST percentage must be between 0 and 100")
            self.gst_percentage = gst_percentage
        if metal_composition is not None:
            self.metal_composition = list(metal_composition)
        if gemstone_composition is not None:
            self.gemstone_composition = list(gemstone_composition)
        if making_charges is not None:
            self.making_charges = making_charges
        if wastage_charges is not None:
            self.wastage_charges = wastage_charges
        if other_charges is not None:
            self.other_charges = list(other_charges)

    def pricing_input(self) -> PricingInput:
        return PricingInput(
            metal_composition=tuple(self.metal_composition),
            gemstone_composition=tuple(self.gemstone_composition),
            making_charges=self.making_charges,
            wastage_charges=self.wastage_charges,
            gst_percentage=self.gst_percentage,
            other_charges=tuple(self.other_charges),
        )

    def apply_prices(self, prices: PriceBreakdown, synced_at: datetime | None = None) -> None:
        self.prices = prices
        self.last_price_sync = synced_at or datetime.now(timezone.utc)

    @property
    def total_price(self) -> Decimal:
        return self.prices.total_price

    # --- Variant references ---------------------------------------------------

    def lines_for(
        self, kind: MaterialKind
    ) -> list[MetalLine] | list[GemstoneLine]:
        if kind is MaterialKind.METAL:
            return self.metal_composition
        return self.gemstone_composition

    def references_variant(
        self, kind: MaterialKind, material_id: str, variant_id: str
    ) -> bool:
        return any(
            line.references(material_id, variant_id) for line in self.lines_for(kind)
        )

    def reprice_variant(
        self,
        kind: MaterialKind,
        material_id: str,
        variant_id: str,
        new_price: Decimal,
    ) -> int:
        """Set the unit price on every line using the variant.

        Returns how many lines were touched.
        """
        touched = 0
        for line in self.lines_for(kind):
            if line.references(material_id, variant_id):
                line.reprice(new_price)
                touched += 1
        return touched
