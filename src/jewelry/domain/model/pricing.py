"""Inputs and outputs of the price calculator."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from jewelry.domain.model.composition import GemstoneLine, MetalLine
from jewelry.domain.model.value_objects import ZERO, Charge, OtherCharge

DEFAULT_GST_PERCENTAGE = Decimal("3")


@dataclass(frozen=True)
class PricingInput:
    """Everything the calculator needs from a product.

    ``wastage_charges`` is the legacy product-wide wastage rule. It only
    applies when no composition line carries its own wastage charge.
    """

    metal_composition: tuple[MetalLine, ...] = ()
    gemstone_composition: tuple[GemstoneLine, ...] = ()
    making_charges: Charge = field(default_factory=Charge.none)
    wastage_charges: Charge | None = None
    gst_percentage: Decimal = DEFAULT_GST_PERCENTAGE
    other_charges: tuple[OtherCharge, ...] = ()


@dataclass(frozen=True)
class PriceBreakdown:
    """The eight derived price fields of a product, each rounded to 2 dp."""

    metal_total: Decimal = ZERO
    gemstone_total: Decimal = ZERO
    making_charge_amount: Decimal = ZERO
    wastage_charge_amount: Decimal = ZERO
    other_charges_total: Decimal = ZERO
    subtotal: Decimal = ZERO
    gst_amount: Decimal = ZERO
    total_price: Decimal = ZERO

    def as_dict(self) -> dict[str, Decimal]:
        return {
            "metal_total": self.metal_total,
            "gemstone_total": self.gemstone_total,
            "making_charge_amount": self.making_charge_amount,
            "wastage_charge_amount": self.wastage_charge_amount,
            "other_charges_total": self.other_charges_total,
            "subtotal": self.subtotal,
            "gst_amount": self.gst_amount,
            "total_price": self.total_price,
        }


@dataclass(frozen=True)
class PriceCalculationResult:
    breakdown: PriceBreakdown
    has_per_line_wastage: bool
