"""Application service: Show Product use case (query)."""

from __future__ import annotations

from jewelry.application.dto import CompositionLineDTO, ProductDTO
from jewelry.domain.exceptions import NotFoundError
from jewelry.domain.model.material import MaterialKind
from jewelry.domain.model.product import Product
from jewelry.domain.repository.product_repository import ProductRepository
from jewelry.domain.service.price_calculator import has_per_line_wastage


def product_to_dto(product: Product) -> ProductDTO:
    lines = [
        CompositionLineDTO(
            kind=MaterialKind.METAL.value,
            material_id=line.material_id,
            variant_id=line.variant_id,
            variant_name=line.variant_name,
            weight=line.weight_in_grams,
            quantity=1,
            unit_price=line.price_per_gram,
            subtotal=line.subtotal,
            wastage=str(line.wastage_charges) if line.has_wastage else None,
        )
        for line in product.metal_composition
    ] + [
        CompositionLineDTO(
            kind=MaterialKind.GEMSTONE.value,
            material_id=line.material_id,
            variant_id=line.variant_id,
            variant_name=line.variant_name,
            weight=line.weight_in_carats,
            quantity=line.quantity,
            unit_price=line.price_per_carat,
            subtotal=line.subtotal,
            wastage=str(line.wastage_charges) if line.has_wastage else None,
        )
        for line in product.gemstone_composition
    ]
    return ProductDTO(
        id=product.id,
        name=product.name,
        product_code=product.product_code,
        lines=lines,
        making_charges=str(product.making_charges),
        wastage_charges=(
            str(product.wastage_charges) if product.wastage_charges is not None else None
        ),
        gst_percentage=product.gst_percentage,
        other_charges=[(c.name, c.amount) for c in product.other_charges],
        prices=product.prices.as_dict(),
        per_line_wastage=has_per_line_wastage(product.pricing_input()),
        last_price_sync=product.last_price_sync,
    )


class ShowProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product_id: str) -> ProductDTO:
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise NotFoundError(f"Product with ID '{product_id}' not found")
        return product_to_dto(product)

    def list_all(self) -> list[ProductDTO]:
        return [product_to_dto(p) for p in self._product_repo.list_all()]
