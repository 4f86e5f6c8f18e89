import logging

from sqlalchemy import inspect
from sqlalchemy.engine import Engine

from scenario_hub.db.session import Base

# registers the tables on Base.metadata
from scenario_hub.models import scenario, user  # noqa: F401

logger = logging.getLogger(__name__)


def init_db(engine: Engine) -> list[str]:
    """Create whichever tables and indexes are missing; safe to run on every start."""
    existing = set(inspect(engine).get_table_names())
    missing = [table for name, table in Base.metadata.tables.items() if name not in existing]
    if not missing:
        logger.info("Database schema already present")
        return []

    Base.metadata.create_all(bind=engine, tables=missing, checkfirst=True)
    created = [table.name for table in missing]
    for name in created:
        logger.info("Created table %r at startup", name)
    return created
