"""Domain service: Price Synchronization.

Propagates a metal or gemstone variant's new unit price into every product
that uses the variant, then appends one price-history entry.

The per-product loop has no transaction around it. Each product is
repriced, recalculated and saved on its own; a product whose save fails is
logged and recorded as a failed outcome, and the loop moves on. The result
therefore always says exactly which products now carry the new price.

``preview()`` runs the same repricing code on copies of the products and
persists nothing, so the deltas it reports are the deltas a commit applies.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import Callable

from jewelry.domain.exceptions import NotFoundError
from jewelry.domain.model.material import Material, MaterialKind, Variant
from jewelry.domain.model.price_history import PriceHistoryEntry
from jewelry.domain.model.pricing import PriceBreakdown
from jewelry.domain.model.product import Product
from jewelry.domain.repository.material_repository import MaterialRepository
from jewelry.domain.repository.price_history_repository import (
    PriceHistoryRepository,
)
from jewelry.domain.repository.product_repository import ProductRepository
from jewelry.domain.service.price_calculator import compute_product_price, price_delta

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VariantTarget:
    """A located variant and the facts captured before any mutation."""

    kind: MaterialKind
    material: Material
    variant: Variant
    old_price: Decimal
    unit: str

    @property
    def entity_id(self) -> str:
        return self.material.id

    @property
    def variant_id(self) -> str:
        return self.variant.id


@dataclass(frozen=True)
class ProductPriceImpact:
    """How one product's total moves (or would move) with the new price."""

    product_id: str
    product_name: str
    product_code: str
    old_total_price: Decimal
    new_total_price: Decimal

    @property
    def price_difference(self) -> Decimal:
        return price_delta(self.old_total_price, self.new_total_price)


@dataclass(frozen=True)
class ProductSyncOutcome:
    product_id: str
    impact: ProductPriceImpact | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class SyncOutcome:
    target: VariantTarget
    new_price: Decimal
    outcomes: list[ProductSyncOutcome] = field(default_factory=list)
    history_entry: PriceHistoryEntry | None = None

    @property
    def synced_count(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.ok)

    @property
    def failed_product_ids(self) -> list[str]:
        return [outcome.product_id for outcome in self.outcomes if not outcome.ok]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PriceSynchronizationService:

    def __init__(
        self,
        material_repo: MaterialRepository,
        product_repo: ProductRepository,
        history_repo: PriceHistoryRepository,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._material_repo = material_repo
        self._product_repo = product_repo
        self._history_repo = history_repo
        self._clock = clock or _utcnow

    # --- Lookup ---------------------------------------------------------------

    def locate(self, kind: MaterialKind, entity_id: str, variant_id: str) -> VariantTarget:
        """Find the material and variant, failing before any mutation."""
        material = self._material_repo.get_by_id(entity_id)
        if material is None or material.kind is not kind:
            raise NotFoundError(f"{kind.value.capitalize()} '{entity_id}' not found")
        variant = material.find_variant(variant_id)
        if variant is None:
            raise NotFoundError(
                f"Variant '{variant_id}' not found in {kind.value} '{material.name}'"
            )
        return VariantTarget(
            kind=kind,
            material=material,
            variant=variant,
            old_price=variant.unit_price,
            unit=variant.unit or kind.default_unit,
        )

    def affected_products(self, target: VariantTarget) -> list[Product]:
        return self._product_repo.find_by_variant(
            target.kind, target.entity_id, target.variant_id
        )

    # --- Shared repricing -----------------------------------------------------

    @staticmethod
    def reprice_product(
        product: Product, target: VariantTarget, new_price: Decimal
    ) -> PriceBreakdown:
        """Reprice every matching line of *product*, then recalculate once.

        Mutates the given product's composition; returns the new breakdown
        without applying it.
        """
        product.reprice_variant(
            target.kind, target.entity_id, target.variant_id, new_price
        )
        return compute_product_price(product.pricing_input()).breakdown

    # --- Operations -----------------------------------------------------------

    def preview(self, target: VariantTarget, new_price: Decimal) -> list[ProductPriceImpact]:
        impacts: list[ProductPriceImpact] = []
        for product in self.affected_products(target):
            scratch = copy.deepcopy(product)
            breakdown = self.reprice_product(scratch, target, new_price)
            impacts.append(
                ProductPriceImpact(
                    product_id=product.id,
                    product_name=product.name,
                    product_code=product.product_code,
                    old_total_price=product.total_price,
                    new_total_price=breakdown.total_price,
                )
            )
        return impacts

    def synchronize(self, target: VariantTarget, new_price: Decimal) -> SyncOutcome:
        now = self._clock()
        logger.info(
            "Syncing %s '%s' variant '%s': %s -> %s",
            target.kind.value,
            target.material.name,
            target.variant.name,
            target.old_price,
            new_price,
        )

        target.variant.update_price(new_price, now)
        self._material_repo.save(target.material)

        result = SyncOutcome(target=target, new_price=new_price)
        for product in self.affected_products(target):
            old_total = product.total_price
            try:
                breakdown = self.reprice_product(product, target, new_price)
                product.apply_prices(breakdown, now)
                self._product_repo.save(product)
            except Exception as exc:
                logger.exception("Failed to sync product %s", product.id)
                result.outcomes.append(
                    ProductSyncOutcome(product_id=product.id, error=str(exc) or type(exc).__name__)
                )
                continue
            result.outcomes.append(
                ProductSyncOutcome(
                    product_id=product.id,
                    impact=ProductPriceImpact(
                        product_id=product.id,
                        product_name=product.name,
                        product_code=product.product_code,
                        old_total_price=old_total,
                        new_total_price=breakdown.total_price,
                    ),
                )
            )

        result.history_entry = self._history_repo.append(
            PriceHistoryEntry(
                entity_type=target.kind,
                entity_id=target.entity_id,
                entity_name=target.material.name,
                variant_name=f"{target.material.name} {target.variant.name}",
                old_price=target.old_price,
                new_price=new_price,
                unit=target.unit,
                affected_products=result.synced_count,
                created_at=now,
            )
        )

        if result.failed_product_ids:
            logger.error(
                "Synced %d product(s); %d failed: %s",
                result.synced_count,
                len(result.failed_product_ids),
                ", ".join(result.failed_product_ids),
            )
        else:
            logger.info("Synced %d product(s)", result.synced_count)
        return result
