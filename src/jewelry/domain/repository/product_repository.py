"""Abstract repository for the Product aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from jewelry.domain.model.material import MaterialKind
from jewelry.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def next_id(self) -> str:
        """Return an unused product ID."""

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def get_by_code(self, product_code: str) -> Product | None:
        """Return a product by its unique product code, or None."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalog."""

    @abstractmethod
    def find_by_variant(
        self, kind: MaterialKind, material_id: str, variant_id: str
    ) -> list[Product]:
        """Return every product with a composition line using the variant."""

    @abstractmethod
    def save(self, product: Product) -> None:
        """Persist a new or updated product."""
