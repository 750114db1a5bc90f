"""Domain service: Price Calculator.

Derives every monetary field of a product from its composition and charge
configuration. Pure and deterministic: no I/O, no clock, no hidden state.

Rules worth knowing:

- Making charges always resolve against the metal total, even when
  gemstones are present.
- Wastage runs in exactly one of two modes per product. If any line
  carries a non-zero wastage charge, each line's charge resolves against
  that line's own value and the results are summed. Otherwise the legacy
  product-wide wastage charge resolves against the metal total.
- Percentage charges never compound: none resolves against the subtotal.
- Each output field is rounded to 2 dp on its own, from unrounded
  intermediates, so stored fields match what a second calculation yields.
"""

from __future__ import annotations

from decimal import Decimal

from jewelry.domain.model.pricing import (
    PriceBreakdown,
    PriceCalculationResult,
    PricingInput,
)
from jewelry.domain.model.value_objects import (
    ZERO,
    percent_of,
    resolve_charge,
    round_money,
)


def has_per_line_wastage(pricing: PricingInput) -> bool:
    """True when at least one composition line carries its own wastage."""
    return any(line.has_wastage for line in pricing.metal_composition) or any(
        line.has_wastage for line in pricing.gemstone_composition
    )


def compute_product_price(pricing: PricingInput) -> PriceCalculationResult:
    metal_total = ZERO
    metal_wastage_total = ZERO
    for metal in pricing.metal_composition:
        line_value = metal.value
        metal_total += line_value
        metal_wastage_total += resolve_charge(metal.wastage_charges, line_value)

    gemstone_total = ZERO
    gemstone_wastage_total = ZERO
    for stone in pricing.gemstone_composition:
        line_value = stone.value
        gemstone_total += line_value
        gemstone_wastage_total += resolve_charge(stone.wastage_charges, line_value)

    making_charge_amount = pricing.making_charges.resolve(metal_total)

    per_line = has_per_line_wastage(pricing)
    if per_line:
        wastage_charge_amount = metal_wastage_total + gemstone_wastage_total
    else:
        wastage_charge_amount = resolve_charge(pricing.wastage_charges, metal_total)

    other_charges_total = sum(
        (charge.amount for charge in pricing.other_charges), ZERO
    )

    subtotal = (
        metal_total
        + gemstone_total
        + making_charge_amount
        + wastage_charge_amount
        + other_charges_total
    )
    gst_amount = percent_of(subtotal, pricing.gst_percentage)
    total_price = subtotal + gst_amount

    breakdown = PriceBreakdown(
        metal_total=round_money(metal_total),
        gemstone_total=round_money(gemstone_total),
        making_charge_amount=round_money(making_charge_amount),
        wastage_charge_amount=round_money(wastage_charge_amount),
        other_charges_total=round_money(other_charges_total),
        subtotal=round_money(subtotal),
        gst_amount=round_money(gst_amount),
        total_price=round_money(total_price),
    )
    return PriceCalculationResult(breakdown=breakdown, has_per_line_wastage=per_line)


def price_delta(old_total: Decimal, new_total: Decimal) -> Decimal:
    return round_money(new_total - old_total)
