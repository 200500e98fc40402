"""Ledger storage implementations."""

from .memory_quota_repository import InMemoryQuotaLedgerRepository
from .quota_repository import QuotaLedgerDatabaseRepository

__all__ = [
    "InMemoryQuotaLedgerRepository",
    "QuotaLedgerDatabaseRepository",
]
