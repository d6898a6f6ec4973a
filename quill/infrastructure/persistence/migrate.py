"""Database migration utilities.

Migrations run synchronously at startup, before the server's event loop
starts. The Alembic environment drives the async engine itself.
"""

import logging
from pathlib import Path

from alembic import command
from alembic.config import Config as AlembicConfig

from quill.infrastructure.persistence.database import expand_sqlite_url

logger = logging.getLogger(__name__)

# Project root where alembic.ini lives
PROJECT_ROOT = Path(__file__).parent.parent.parent.parent


def get_alembic_config(database_url: str) -> AlembicConfig:
    """Create Alembic config with the given database URL."""
    config = AlembicConfig(str(PROJECT_ROOT / "alembic.ini"))
    config.set_main_option("script_location", str(PROJECT_ROOT / "migrations"))
    config.set_main_option("sqlalchemy.url", database_url.replace("%", "%%"))
    # Keep the application's logging configuration
    config.attributes["configure_logger"] = False
    return config


def run_migrations(database_url: str) -> None:
    """Run pending Alembic migrations.

    This is synchronous and must be called outside a running event loop.
    """
    command.upgrade(get_alembic_config(expand_sqlite_url(database_url)), "head")
    logger.info("Database migrations complete")
