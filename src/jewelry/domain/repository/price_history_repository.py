"""Abstract repository for the append-only price history log."""

from __future__ import annotations

from abc import ABC, abstractmethod

from jewelry.domain.model.material import MaterialKind
from jewelry.domain.model.price_history import PriceHistoryEntry


class PriceHistoryRepository(ABC):

    @abstractmethod
    def append(self, entry: PriceHistoryEntry) -> PriceHistoryEntry:
        """Store a new entry and return it with its assigned ID."""

    @abstractmethod
    def list_recent(
        self,
        limit: int = 50,
        entity_type: MaterialKind | None = None,
        entity_id: str | None = None,
    ) -> list[PriceHistoryEntry]:
        """Return the newest entries first, optionally filtered."""
