"""Application service: Show Price History use case (query)."""

from __future__ import annotations

from jewelry.application.dto import PriceHistoryDTO
from jewelry.domain.exceptions import ValidationError
from jewelry.domain.model.material import MaterialKind
from jewelry.domain.model.price_history import PriceHistoryEntry
from jewelry.domain.repository.price_history_repository import (
    PriceHistoryRepository,
)

DEFAULT_HISTORY_LIMIT = 50


class ShowPriceHistoryHandler:

    def __init__(self, history_repo: PriceHistoryRepository) -> None:
        self._history_repo = history_repo

    def handle(
        self,
        limit: int = DEFAULT_HISTORY_LIMIT,
        entity_type: str | None = None,
        entity_id: str | None = None,
    ) -> list[PriceHistoryDTO]:
        if limit <= 0:
            raise ValidationError("Limit must be positive")
        kind = MaterialKind.parse(entity_type) if entity_type else None
        entries = self._history_repo.list_recent(
            limit=limit, entity_type=kind, entity_id=entity_id
        )
        return [self._to_dto(e) for e in entries]

    @staticmethod
    def _to_dto(entry: PriceHistoryEntry) -> PriceHistoryDTO:
        return PriceHistoryDTO(
            id=entry.id,
            entity_type=entry.entity_type.value,
            entity_id=entry.entity_id,
            entity_name=entry.entity_name,
            variant_name=entry.variant_name,
            old_price=entry.old_price,
            new_price=entry.new_price,
            unit=entry.unit,
            affected_products=entry.affected_products,
            created_at=entry.created_at,
        )
