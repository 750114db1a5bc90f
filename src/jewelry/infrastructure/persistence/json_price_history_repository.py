"""JSON-file-backed implementation of PriceHistoryRepository.

Entries are only ever appended; nothing in this class rewrites or removes
an existing record.
"""

from __future__ import annotations

import dataclasses
import json
from datetime import datetime
from decimal import Decimal
from pathlib import Path

from jewelry.domain.model.material import MaterialKind
from jewelry.domain.model.price_history import PriceHistoryEntry
from jewelry.domain.repository.price_history_repository import (
    PriceHistoryRepository,
)


class JsonPriceHistoryRepository(PriceHistoryRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    def append(self, entry: PriceHistoryEntry) -> PriceHistoryEntry:
        entries = self._load_raw()
        next_id = max((int(e["id"]) for e in entries), default=0) + 1
        stored = dataclasses.replace(entry, id=str(next_id))
        entries.append(self._to_raw(stored))
        self._persist_raw(entries)
        return stored

    def list_recent(
        self,
        limit: int = 50,
        entity_type: MaterialKind | None = None,
        entity_id: str | None = None,
    ) -> list[PriceHistoryEntry]:
        matching = [
            self._to_domain(raw)
            for raw in self._load_raw()
            if (entity_type is None or raw["entity_type"] == entity_type.value)
            and (entity_id is None or raw["entity_id"] == entity_id)
        ]
        # Newest first; the id breaks ties between entries with equal timestamps.
        matching.sort(key=lambda e: (e.created_at, int(e.id or 0)), reverse=True)
        return matching[:limit]

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(entry: PriceHistoryEntry) -> dict:
        return {
            "id": entry.id,
            "entity_type": entry.entity_type.value,
            "entity_id": entry.entity_id,
            "entity_name": entry.entity_name,
            "variant_name": entry.variant_name,
            "old_price": str(entry.old_price),
            "new_price": str(entry.new_price),
            "unit": entry.unit,
            "affected_products": entry.affected_products,
            "created_at": entry.created_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> PriceHistoryEntry:
        return PriceHistoryEntry(
            id=raw["id"],
            entity_type=MaterialKind(raw["entity_type"]),
            entity_id=raw["entity_id"],
            entity_name=raw["entity_name"],
            variant_name=raw["variant_name"],
            old_price=Decimal(raw["old_price"]),
            new_price=Decimal(raw["new_price"]),
            unit=raw.get("unit", ""),
            affected_products=raw.get("affected_products", 0),
            created_at=datetime.fromisoformat(raw["created_at"]),
        )

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _persist_raw(self, entries: list[dict]) -> None:
        self._file_path.write_text(
            json.dumps(entries, indent=2, ensure_ascii=False) + "\n", encoding="utf-8"
        )

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
