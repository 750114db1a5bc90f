"""Composition root: builds the JSON repositories under the configured data directory."""

from __future__ import annotations

from jewelry.infrastructure.config import get_settings
from jewelry.infrastructure.persistence.json_material_repository import (
    JsonMaterialRepository,
)
from jewelry.infrastructure.persistence.json_price_history_repository import (
    JsonPriceHistoryRepository,
)
from jewelry.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)


def material_repository() -> JsonMaterialRepository:
    return JsonMaterialRepository(get_settings().data_dir / "materials.json")


def product_repository() -> JsonProductRepository:
    return JsonProductRepository(get_settings().data_dir / "products.json")


def price_history_repository() -> JsonPriceHistoryRepository:
    return JsonPriceHistoryRepository(get_settings().data_dir / "price_history.json")
