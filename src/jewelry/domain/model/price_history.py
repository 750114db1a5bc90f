"""PriceHistoryEntry: one record per variant price synchronization.

History is a log of update events, not of current state: syncing the same
price twice produces two entries. Entries are never mutated or deleted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal

from jewelry.domain.model.material import MaterialKind


@dataclass(frozen=True)
class PriceHistoryEntry:

    entity_type: MaterialKind
    entity_id: str
    entity_name: str
    variant_name: str
    old_price: Decimal
    new_price: Decimal
    unit: str
    affected_products: int
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    id: str | None = None
