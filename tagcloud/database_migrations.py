"""Database migration utilities."""

import logging
from pathlib import Path

from alembic.config import Config
from sqlalchemy import inspect, text

from alembic import command
from tagcloud.database import Store

logger = logging.getLogger(__name__)

ALEMBIC_INI = Path(__file__).resolve().parent.parent / "alembic.ini"


def run_startup_migrations(store: Store, config_path: Path = ALEMBIC_INI) -> None:
    """
    Run database migrations using Alembic on application startup.

    Handles the case where tables were created by init_db() but alembic_version
    is empty. In this case, we stamp the database with the current head before
    running migrations.
    """
    try:
        alembic_cfg = Config(str(config_path))
        # ConfigParser interpolation: escape percent signs from URL-quoted passwords
        url = store.engine.url.render_as_string(hide_password=False)
        alembic_cfg.set_main_option("sqlalchemy.url", url.replace("%", "%%"))
        alembic_cfg.attributes["skip_logging"] = True

        with store.engine.connect() as conn:
            tables = inspect(conn).get_table_names()

            has_alembic_table = "alembic_version" in tables
            has_version = False
            if has_alembic_table:
                result = conn.execute(text("SELECT version_num FROM alembic_version")).fetchone()
                has_version = result is not None

        # Tables created by init_db() already match head
        if not has_version and "tags" in tables:
            logger.info("Database tables exist but alembic version is not set, stamping to head...")
            command.stamp(alembic_cfg, "head")

        # Run Alembic upgrade to head (this will be a no-op if already at head)
        command.upgrade(alembic_cfg, "head")
        logger.info("Database migrations completed successfully")
    except Exception as e:
        logger.exception("Failed to run startup migrations", exc_info=e)
        # Don't crash the app, just log the error
        logger.warning("Application will continue, but some features may not work correctly")
