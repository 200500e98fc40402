"""HTTP surface: admission webhook, reporting and ledger routes."""
