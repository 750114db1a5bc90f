"""Material aggregate: a metal or gemstone and its priced variants.

A Material (e.g. "Gold", "Diamond") owns one or more Variants (e.g. "22K",
"VVS1"). Variants carry the unit price that product compositions copy at
authoring time and that price synchronization later propagates.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Union

from jewelry.domain.exceptions import ValidationError
from jewelry.domain.model.value_objects import ZERO


class MaterialKind(Enum):
    METAL = "metal"
    GEMSTONE = "gemstone"

    @property
    def default_unit(self) -> str:
        return "gram" if self is MaterialKind.METAL else "carat"

    @staticmethod
    def parse(raw: str) -> MaterialKind:
        try:
            return MaterialKind((raw or "").strip().lower())
        except ValueError:
            raise ValidationError("entityType must be 'metal' or 'gemstone'") from None


METAL_UNITS = ("gram", "tola", "ounce")
GEMSTONE_UNITS = ("carat", "ratti", "cent")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def slugify(text: str) -> str:
    slug = re.sub(r"\s+", "-", text.strip().lower())
    slug = re.sub(r"[^\w-]+", "", slug)
    slug = re.sub(r"--+", "-", slug)
    return slug.strip("-")


class _PricedVariant:
    """Shared price-update behaviour for metal and gemstone variants."""

    _price_field = ""

    @property
    def unit_price(self) -> Decimal:
        return getattr(self, self._price_field)

    def update_price(self, new_price: Decimal, at: datetime | None = None) -> None:
        """Set a new unit price and refresh ``last_updated``."""
        if new_price < ZERO:
            raise ValidationError(f"Price cannot be negative, got {new_price}")
        setattr(self, self._price_field, new_price)
        self.last_updated = at or _utcnow()


@dataclass
class MetalVariant(_PricedVariant):
    """A purity grade of a metal, priced per gram."""

    _price_field = "price_per_gram"

    id: str
    name: str
    purity: Decimal
    price_per_gram: Decimal
    unit: str = "gram"
    last_updated: datetime = field(default_factory=_utcnow)

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValidationError("Variant name is required")
        if not ZERO <= self.purity <= Decimal("100"):
            raise ValidationError("Purity must be between 0 and 100")
        if self.price_per_gram < ZERO:
            raise ValidationError("Price cannot be negative")
        if self.unit not in METAL_UNITS:
            raise ValidationError(f"Metal unit must be one of {', '.join(METAL_UNITS)}")


@dataclass
class GemstoneVariant(_PricedVariant):
    """A cut/clarity/color grade of a gemstone, priced per carat."""

    _price_field = "price_per_carat"

    id: str
    name: str
    price_per_carat: Decimal
    cut: str = ""
    clarity: str = ""
    color: str = ""
    unit: str = "carat"
    last_updated: datetime = field(default_factory=_utcnow)

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValidationError("Variant name is required")
        if self.price_per_carat < ZERO:
            raise ValidationError("Price cannot be negative")
        if self.unit not in GEMSTONE_UNITS:
            raise ValidationError(
                f"Gemstone unit must be one of {', '.join(GEMSTONE_UNITS)}"
            )


Variant = Union[MetalVariant, GemstoneVariant]


@dataclass
class Material:
    """Aggregate root for a metal or gemstone.

    Invariants:
    - at least one variant
    - every variant matches the material kind
    """

    id: str
    kind: MaterialKind
    name: str
    variants: list[Variant]
    slug: str = ""
    is_active: bool = True

    def __post_init__(self) -> None:
        if not self.slug:
            self.slug = slugify(self.name)

    @staticmethod
    def create(
        material_id: str,
        kind: MaterialKind,
        name: str,
        variants: list[Variant],
    ) -> Material:
        """Factory for new materials; enforces authoring rules."""
        if not name or not name.strip():
            raise ValidationError(f"{kind.value.capitalize()} name is required")
        if len(name.strip()) > 50:
            raise ValidationError("Material name cannot exceed 50 characters")
        if not variants:
            raise ValidationError("At least one variant is required")
        expected = MetalVariant if kind is MaterialKind.METAL else GemstoneVariant
        for variant in variants:
            if not isinstance(variant, expected):
                raise ValidationError(
                    f"Variant '{variant.name}' does not belong to a {kind.value}"
                )
        return Material(id=material_id, kind=kind, name=name.strip(), variants=variants)

    def find_variant(self, variant_id: str) -> Variant | None:
        for variant in self.variants:
            if variant.id == variant_id:
                return variant
        return None
