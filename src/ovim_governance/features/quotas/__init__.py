"""Quotas feature: the organization-to-zone quota ledger."""

from .entities import OrganizationZoneQuota, QuotaLedgerRepository
from .repositories import InMemoryQuotaLedgerRepository, QuotaLedgerDatabaseRepository
from .services import QuotaLedgerService

__all__ = [
    "OrganizationZoneQuota",
    "QuotaLedgerRepository",
    "InMemoryQuotaLedgerRepository",
    "QuotaLedgerDatabaseRepository",
    "QuotaLedgerService",
]
