"""Application service: Add Product use case."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

from jewelry.application.composition_builder import CompositionBuilder, other_charges
from jewelry.application.dto import (
    GemstoneLineSpec,
    MetalLineSpec,
    OtherChargeSpec,
    ProductDTO,
)
from jewelry.application.show_product import product_to_dto
from jewelry.domain.exceptions import ValidationError
from jewelry.domain.model.pricing import DEFAULT_GST_PERCENTAGE
from jewelry.domain.model.product import Product
from jewelry.domain.model.value_objects import Charge, to_decimal
from jewelry.domain.repository.material_repository import MaterialRepository
from jewelry.domain.repository.product_repository import ProductRepository
from jewelry.domain.service.price_calculator import compute_product_price

DEFAULT_CODE_PREFIX = "AJ"


class AddProductHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        material_repo: MaterialRepository,
        code_prefix: str = DEFAULT_CODE_PREFIX,
        default_gst: Decimal = DEFAULT_GST_PERCENTAGE,
    ) -> None:
        self._product_repo = product_repo
        self._builder = CompositionBuilder(material_repo)
        self._code_prefix = code_prefix
        self._default_gst = default_gst

    def handle(
        self,
        name: str,
        metals: list[MetalLineSpec] | None = None,
        gemstones: list[GemstoneLineSpec] | None = None,
        making: str | None = None,
        wastage: str | None = None,
        gst: str | None = None,
        others: list[OtherChargeSpec] | None = None,
        product_code: str | None = None,
    ) -> ProductDTO:
        """Add a new product to the catalog.

        Prices are always computed here from the composition; callers never
        supply derived price fields.
        """
        product_id = self._product_repo.next_id()

        if product_code:
            product_code = product_code.strip()
            if self._product_repo.get_by_code(product_code) is not None:
                raise ValidationError(f"Product code '{product_code}' already exists")
        else:
            product_code = f"{self._code_prefix}-{int(product_id):04d}"

        product = Product.create(
            product_id=product_id,
            name=name,
            product_code=product_code,
            metal_composition=self._builder.metal_lines(metals or []),
            gemstone_composition=self._builder.gemstone_lines(gemstones or []),
            making_charges=Charge.parse(making) if making else Charge.none(),
            wastage_charges=Charge.parse(wastage) if wastage else Charge.none(),
            gst_percentage=(
                to_decimal(gst, "GST percentage") if gst is not None else self._default_gst
            ),
            other_charges=other_charges(others or []),
        )
        result = compute_product_price(product.pricing_input())
        product.apply_prices(result.breakdown, datetime.now(timezone.utc))

        self._product_repo.save(product)
        return product_to_dto(product)
