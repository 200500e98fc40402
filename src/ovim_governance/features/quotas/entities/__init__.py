"""Ledger entities."""

from .quota import OrganizationZoneQuota
from .protocols import QuotaLedgerRepository

__all__ = ["OrganizationZoneQuota", "QuotaLedgerRepository"]
