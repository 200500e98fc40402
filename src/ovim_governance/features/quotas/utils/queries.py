"""Ledger SQL query constants (parameterized by schema)."""

QUOTA_INSERT = """
    INSERT INTO {schema}.organization_zone_quotas (
        id, organization_id, zone_id, cpu_quota, memory_quota, storage_quota,
        is_allowed, created_at, updated_at
    ) VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9)
    RETURNING *
"""

QUOTA_UPDATE = """
    UPDATE {schema}.organization_zone_quotas SET
        cpu_quota = $3,
        memory_quota = $4,
        storage_quota = $5,
        is_allowed = $6,
        updated_at = $7
    WHERE organization_id = $1 AND zone_id = $2
    RETURNING *
"""

QUOTA_GET = """
    SELECT * FROM {schema}.organization_zone_quotas
    WHERE organization_id = $1 AND zone_id = $2
"""

QUOTA_LIST_ALL = """
    SELECT * FROM {schema}.organization_zone_quotas
    ORDER BY organization_id, zone_id
"""

QUOTA_LIST_BY_ORG = """
    SELECT * FROM {schema}.organization_zone_quotas
    WHERE organization_id = $1
    ORDER BY zone_id
"""

QUOTA_DELETE = """
    DELETE FROM {schema}.organization_zone_quotas
    WHERE organization_id = $1 AND zone_id = $2
    RETURNING id
"""
