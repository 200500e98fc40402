"""Schema installation for the PostgreSQL backend."""

import logging
from importlib import resources

from .connection import DatabaseManager
from .utils import validate_schema_name

logger = logging.getLogger(__name__)


def load_schema_sql(schema: str = "public") -> str:
    template = resources.files(__package__).joinpath("schema.sql").read_text(encoding="utf-8")
    return template.replace("{schema}", validate_schema_name(schema))


async def apply_schema(database: DatabaseManager, schema: str = "public") -> None:
    """Create the governance tables if they do not exist."""
    async with database.transaction() as connection:
        await connection.execute(load_schema_sql(schema))
    logger.info(f"Governance schema ensured in {schema}")
