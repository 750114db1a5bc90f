"""Abstract repository for the Material aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON, in-memory) live
elsewhere.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from jewelry.domain.model.material import Material, MaterialKind


class MaterialRepository(ABC):

    @abstractmethod
    def next_id(self) -> str:
        """Return an unused material ID."""

    @abstractmethod
    def get_by_id(self, material_id: str) -> Material | None:
        """Return a material by its ID, or None if not found."""

    @abstractmethod
    def get_by_name(self, kind: MaterialKind, name: str) -> Material | None:
        """Return a material of the given kind by exact name (case-insensitive)."""

    @abstractmethod
    def list_all(self, kind: MaterialKind | None = None) -> list[Material]:
        """Return every material, optionally only those of one kind."""

    @abstractmethod
    def save(self, material: Material) -> None:
        """Persist a new or updated material."""
