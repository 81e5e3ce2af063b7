from pathlib import Path

from alembic import command
from alembic.config import Config

from app.db.session import Database

ALEMBIC_DIR = Path(__file__).resolve().parents[2] / "alembic"


def alembic_config() -> Config:
    config = Config()
    config.set_main_option("script_location", str(ALEMBIC_DIR))
    return config


def run_migrations(database: Database, revision: str = "head"):
    """Apply pending versioned migrations on the database's own engine."""
    config = alembic_config()
    with database.engine.begin() as connection:
        config.attributes["connection"] = connection
        command.upgrade(config, revision)
