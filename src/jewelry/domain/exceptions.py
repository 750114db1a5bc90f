"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class NotFoundError(DomainException):
    """A requested entity does not exist."""


class PartialSyncFailure(DomainException):
    """Some products could not be persisted during a price synchronization.

    The variant price and every other product were still updated, so this
    is reported after the fact rather than raised mid-loop.
    """

    def __init__(self, synced_count: int, failed_product_ids: list[str]) -> None:
        self.synced_count = synced_count
        self.failed_product_ids = list(failed_product_ids)
        super().__init__(
            f"{len(self.failed_product_ids)} product(s) failed to sync "
            f"({synced_count} synced): {', '.join(self.failed_product_ids)}"
        )
