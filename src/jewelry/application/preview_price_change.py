"""Application service: Preview Price Change use case (query).

Shows the blast radius of a variant price change without persisting
anything or writing history.
"""

from __future__ import annotations

from decimal import Decimal

from jewelry.application.dto import PreviewDTO, PriceImpactDTO
from jewelry.application.price_update_request import PriceUpdateRequest
from jewelry.domain.repository.material_repository import MaterialRepository
from jewelry.domain.repository.price_history_repository import (
    PriceHistoryRepository,
)
from jewelry.domain.repository.product_repository import ProductRepository
from jewelry.domain.service.price_synchronization_service import (
    PriceSynchronizationService,
    ProductPriceImpact,
)


def impact_to_dto(impact: ProductPriceImpact) -> PriceImpactDTO:
    return PriceImpactDTO(
        product_id=impact.product_id,
        name=impact.product_name,
        product_code=impact.product_code,
        old_total_price=impact.old_total_price,
        new_total_price=impact.new_total_price,
        price_difference=impact.price_difference,
    )


class PreviewPriceChangeHandler:

    def __init__(
        self,
        material_repo: MaterialRepository,
        product_repo: ProductRepository,
        history_repo: PriceHistoryRepository,
    ) -> None:
        self._service = PriceSynchronizationService(
            material_repo, product_repo, history_repo
        )

    def handle(
        self,
        entity_type: str | None,
        entity_id: str | None,
        variant_id: str | None,
        new_price: str | float | int | Decimal | None,
    ) -> PreviewDTO:
        request = PriceUpdateRequest.parse(entity_type, entity_id, variant_id, new_price)
        target = self._service.locate(request.kind, request.entity_id, request.variant_id)
        impacts = self._service.preview(target, request.new_price)

        return PreviewDTO(
            entity_type=request.kind.value,
            entity_name=target.material.name,
            variant_name=target.variant.name,
            old_price=target.old_price,
            new_price=request.new_price,
            products=[impact_to_dto(impact) for impact in impacts],
        )
