"""Application service: Update Product use case.

Any pricing input may be replaced; whatever is not given keeps its stored
value. Prices are recalculated whenever a pricing input changes.
"""

from __future__ import annotations

from datetime import datetime, timezone

from jewelry.application.composition_builder import CompositionBuilder, other_charges
from jewelry.application.dto import (
    GemstoneLineSpec,
    MetalLineSpec,
    OtherChargeSpec,
    ProductDTO,
)
from jewelry.application.show_product import product_to_dto
from jewelry.domain.exceptions import NotFoundError, ValidationError
from jewelry.domain.model.value_objects import Charge, to_decimal
from jewelry.domain.repository.material_repository import MaterialRepository
from jewelry.domain.repository.product_repository import ProductRepository
from jewelry.domain.service.price_calculator import compute_product_price


class UpdateProductHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        material_repo: MaterialRepository,
    ) -> None:
        self._product_repo = product_repo
        self._builder = CompositionBuilder(material_repo)

    def handle(
        self,
        product_id: str,
        name: str | None = None,
        metals: list[MetalLineSpec] | None = None,
        gemstones: list[GemstoneLineSpec] | None = None,
        making: str | None = None,
        wastage: str | None = None,
        gst: str | None = None,
        others: list[OtherChargeSpec] | None = None,
    ) -> ProductDTO:
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise NotFoundError(f"Product with ID '{product_id}' not found")

        if name is not None:
            if not name.strip():
                raise ValidationError("Product name is required")
            product.name = name.strip()

        pricing_changed = any(
            value is not None
            for value in (metals, gemstones, making, wastage, gst, others)
        )
        if pricing_changed:
            product.change_pricing(
                metal_composition=(
                    self._builder.metal_lines(metals) if metals is not None else None
                ),
                gemstone_composition=(
                    self._builder.gemstone_lines(gemstones) if gemstones is not None else None
                ),
                making_charges=Charge.parse(making) if making is not None else None,
                wastage_charges=Charge.parse(wastage) if wastage is not None else None,
                gst_percentage=to_decimal(gst, "GST percentage") if gst is not None else None,
                other_charges=other_charges(others) if others is not None else None,
            )
            result = compute_product_price(product.pricing_input())
            product.apply_prices(result.breakdown, datetime.now(timezone.utc))

        self._product_repo.save(product)
        return product_to_dto(product)
