"""VDC SQL query constants (parameterized by schema)."""

VDC_INSERT = """
    INSERT INTO {schema}.virtual_data_centers (
        id, name, org_id, zone_id, phase, namespace, description,
        cpu_quota, memory_quota, storage_quota, created_at, updated_at
    ) VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9, $10, $11, $12)
    RETURNING *
"""

VDC_UPDATE = """
    UPDATE {schema}.virtual_data_centers SET
        name = $2,
        org_id = $3,
        zone_id = $4,
        phase = $5,
        namespace = $6,
        description = $7,
        cpu_quota = $8,
        memory_quota = $9,
        storage_quota = $10,
        updated_at = $11
    WHERE id = $1
    RETURNING *
"""

VDC_GET_BY_ID = """
    SELECT * FROM {schema}.virtual_data_centers WHERE id = $1
"""

VDC_DELETE = """
    DELETE FROM {schema}.virtual_data_centers WHERE id = $1 RETURNING id
"""

VDC_LIST_ALL = """
    SELECT * FROM {schema}.virtual_data_centers ORDER BY name
"""

VDC_LIST_BY_ORG = """
    SELECT * FROM {schema}.virtual_data_centers WHERE org_id = $1 ORDER BY name
"""

# zone_id = $1 never matches NULL, so unplaced VDCs stay out of zone listings
VDC_LIST_BY_ZONE = """
    SELECT * FROM {schema}.virtual_data_centers WHERE zone_id = $1 ORDER BY name
"""

VDC_LIST_BY_ORG_AND_ZONE = """
    SELECT * FROM {schema}.virtual_data_centers
    WHERE org_id = $1 AND zone_id = $2
    ORDER BY name
"""
