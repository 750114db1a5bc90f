"""Composition lines embedded in a Product.

Each line points at one Material variant and denormalizes the variant's
name and unit price as they were when the line was last priced. The line
subtotal is always derived from weight and unit price; it is never stored
independently on the line.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Union

from jewelry.domain.exceptions import ValidationError
from jewelry.domain.model.value_objects import ZERO, Charge, round_money


@dataclass(frozen=True)
class MaterialSummary:
    """A populated material reference: identifier plus display name."""

    id: str
    name: str


# Stored data references a material either by bare id or as a populated
# {id, name} pair. Call sites go through resolve_material_id().
MaterialRef = Union[str, MaterialSummary]


def resolve_material_id(ref: MaterialRef) -> str:
    if isinstance(ref, MaterialSummary):
        return ref.id
    return ref


def resolve_material_name(ref: MaterialRef) -> str | None:
    if isinstance(ref, MaterialSummary):
        return ref.name
    return None


def _has_charge(charge: Charge | None) -> bool:
    return charge is not None and not charge.is_zero


@dataclass
class MetalLine:
    """A metal variant used in a product, weighed in grams."""

    metal: MaterialRef
    variant_id: str
    variant_name: str
    weight_in_grams: Decimal
    price_per_gram: Decimal = ZERO
    wastage_charges: Charge | None = None

    def __post_init__(self) -> None:
        if not resolve_material_id(self.metal):
            raise ValidationError("Metal ID is required")
        if not self.variant_id:
            raise ValidationError("Variant ID is required")
        if self.weight_in_grams < ZERO:
            raise ValidationError("Weight cannot be negative")
        if self.price_per_gram < ZERO:
            raise ValidationError("Price per gram cannot be negative")

    @property
    def material_id(self) -> str:
        return resolve_material_id(self.metal)

    @property
    def unit_price(self) -> Decimal:
        return self.price_per_gram

    @property
    def value(self) -> Decimal:
        """Unrounded line value, used as the base for per-line wastage."""
        return self.weight_in_grams * self.price_per_gram

    @property
    def subtotal(self) -> Decimal:
        return round_money(self.value)

    @property
    def has_wastage(self) -> bool:
        return _has_charge(self.wastage_charges)

    def references(self, material_id: str, variant_id: str) -> bool:
        return self.material_id == material_id and self.variant_id == variant_id

    def reprice(self, new_price: Decimal) -> None:
        if new_price < ZERO:
            raise ValidationError("Price per gram cannot be negative")
        self.price_per_gram = new_price


@dataclass
class GemstoneLine:
    """A gemstone variant used in a product, weighed in carats per stone."""

    gemstone: MaterialRef
    variant_id: str
    variant_name: str
    weight_in_carats: Decimal
    quantity: int = 1
    price_per_carat: Decimal = ZERO
    wastage_charges: Charge | None = None

    def __post_init__(self) -> None:
        if not resolve_material_id(self.gemstone):
            raise ValidationError("Gemstone ID is required")
        if not self.variant_id:
            raise ValidationError("Variant ID is required")
        if self.weight_in_carats < ZERO:
            raise ValidationError("Weight cannot be negative")
        if isinstance(self.quantity, bool) or not isinstance(self.quantity, int):
            raise ValidationError(
                f"Quantity must be an integer, got {type(self.quantity).__name__}"
            )
        if self.quantity < 1:
            raise ValidationError("Quantity must be at least 1")
        if self.price_per_carat < ZERO:
            raise ValidationError("Price per carat cannot be negative")

    @property
    def material_id(self) -> str:
        return resolve_material_id(self.gemstone)

    @property
    def unit_price(self) -> Decimal:
        return self.price_per_carat

    @property
    def value(self) -> Decimal:
        return self.weight_in_carats * self.quantity * self.price_per_carat

    @property
    def subtotal(self) -> Decimal:
        return round_money(self.value)

    @property
    def has_wastage(self) -> bool:
        return _has_charge(self.wastage_charges)

    def references(self, material_id: str, variant_id: str) -> bool:
        return self.material_id == material_id and self.variant_id == variant_id

    def reprice(self, new_price: Decimal) -> None:
        if new_price < ZERO:
            raise ValidationError("Price per carat cannot be negative")
        self.price_per_carat = new_price
