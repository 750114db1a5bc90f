"""Validated input shared by the preview and sync use cases."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from jewelry.domain.exceptions import ValidationError
from jewelry.domain.model.material import MaterialKind
from jewelry.domain.model.value_objects import MAX_AMOUNT, ZERO, to_decimal


@dataclass(frozen=True)
class PriceUpdateRequest:

    kind: MaterialKind
    entity_id: str
    variant_id: str
    new_price: Decimal

    @staticmethod
    def parse(
        entity_type: str | None,
        entity_id: str | None,
        variant_id: str | None,
        new_price: str | float | int | Decimal | None,
    ) -> PriceUpdateRequest:
        """Validate raw caller input. Nothing is looked up or touched here."""
        missing = [
            name
            for name, value in (
                ("entityType", entity_type),
                ("entityId", entity_id),
                ("variantId", variant_id),
                ("newPrice", new_price),
            )
            if value is None or (isinstance(value, str) and not value.strip())
        ]
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")

        kind = MaterialKind.parse(entity_type)  # type: ignore[arg-type]
        try:
            price = to_decimal(new_price, "newPrice", limit=None)  # type: ignore[arg-type]
        except ValidationError:
            raise ValidationError("newPrice must be a non-negative number") from None
        if price < ZERO:
            raise ValidationError("newPrice must be a non-negative number")
        if price > MAX_AMOUNT:
            raise ValidationError(f"newPrice cannot exceed {MAX_AMOUNT:,.0f}")

        return PriceUpdateRequest(
            kind=kind,
            entity_id=str(entity_id).strip(),
            variant_id=str(variant_id).strip(),
            new_price=price,
        )
