"""Ledger services."""

from .quota_ledger_service import QuotaLedgerService

__all__ = ["QuotaLedgerService"]
