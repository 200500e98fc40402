"""Ledger utilities."""

from .validation import validate_quota_reference, validate_ledger_key, validate_grant

__all__ = ["validate_quota_reference", "validate_ledger_key", "validate_grant"]
