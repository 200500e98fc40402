"""Zone SQL query constants (parameterized by schema)."""

ZONE_INSERT = """
    INSERT INTO {schema}.zones (
        id, name, cluster_name, api_url, status, region, cloud_provider,
        node_count, cpu_capacity, memory_capacity, storage_capacity,
        cpu_quota, memory_quota, storage_quota, labels, annotations,
        last_sync, created_at, updated_at
    ) VALUES (
        $1, $2, $3, $4, $5, $6, $7, $8, $9, $10, $11, $12, $13, $14,
        $15, $16, $17, $18, $19
    ) RETURNING *
"""

ZONE_UPDATE = """
    UPDATE {schema}.zones SET
        name = $2,
        cluster_name = $3,
        api_url = $4,
        status = $5,
        region = $6,
        cloud_provider = $7,
        node_count = $8,
        cpu_capacity = $9,
        memory_capacity = $10,
        storage_capacity = $11,
        cpu_quota = $12,
        memory_quota = $13,
        storage_quota = $14,
        labels = $15,
        annotations = $16,
        last_sync = $17,
        updated_at = $18
    WHERE id = $1
    RETURNING *
"""

ZONE_GET_BY_ID = """
    SELECT * FROM {schema}.zones WHERE id = $1
"""

ZONE_LIST_ALL = """
    SELECT * FROM {schema}.zones ORDER BY name
"""

ZONE_DELETE = """
    DELETE FROM {schema}.zones WHERE id = $1 RETURNING id
"""
