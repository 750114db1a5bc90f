"""Application service: Sync Variant Price use case.

Validates the request, then hands off to the PriceSynchronizationService
which updates the variant, reprices every affected product and appends
one history entry.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Callable

from jewelry.application.dto import FailedProductDTO, SyncResultDTO
from jewelry.application.preview_price_change import impact_to_dto
from jewelry.application.price_update_request import PriceUpdateRequest
from jewelry.domain.repository.material_repository import MaterialRepository
from jewelry.domain.repository.price_history_repository import (
    PriceHistoryRepository,
)
from jewelry.domain.repository.product_repository import ProductRepository
from jewelry.domain.service.price_synchronization_service import (
    PriceSynchronizationService,
)


class SyncVariantPriceHandler:

    def __init__(
        self,
        material_repo: MaterialRepository,
        product_repo: ProductRepository,
        history_repo: PriceHistoryRepository,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._service = PriceSynchronizationService(
            material_repo, product_repo, history_repo, clock=clock
        )

    def handle(
        self,
        entity_type: str | None,
        entity_id: str | None,
        variant_id: str | None,
        new_price: str | float | int | Decimal | None,
    ) -> SyncResultDTO:
        """Commit a variant price change.

        Validation and lookup errors are raised before anything is
        written. Per-product save failures do not raise; they come back
        in ``SyncResultDTO.failed``.
        """
        request = PriceUpdateRequest.parse(entity_type, entity_id, variant_id, new_price)
        target = self._service.locate(request.kind, request.entity_id, request.variant_id)
        outcome = self._service.synchronize(target, request.new_price)

        return SyncResultDTO(
            entity_type=request.kind.value,
            entity_name=target.material.name,
            variant_name=target.variant.name,
            old_price=target.old_price,
            new_price=request.new_price,
            unit=target.unit,
            synced_products=outcome.synced_count,
            products=[
                impact_to_dto(o.impact) for o in outcome.outcomes if o.impact is not None
            ],
            failed=[
                FailedProductDTO(product_id=o.product_id, reason=o.error or "")
                for o in outcome.outcomes
                if not o.ok
            ],
        )
