"""Schema migration tests."""

from pathlib import Path

from sqlalchemy import create_engine, inspect

from alembic import command
from alembic.config import Config

ROOT = Path(__file__).resolve().parent.parent


def alembic_config(url):
    config = Config()
    config.set_main_option("script_location", str(ROOT / "alembic"))
    config.set_main_option("sqlalchemy.url", url)
    return config


def test_upgrade_creates_schema(tmp_path):
    """Upgrading to head creates the three tables with their columns."""
    url = f"sqlite:///{tmp_path / 'migrated.db'}"
    command.upgrade(alembic_config(url), "head")

    inspector = inspect(create_engine(url))
    assert {"usuario", "categoria", "frase"} <= set(inspector.get_table_names())
    columns = {column["name"] for column in inspector.get_columns("frase")}
    assert columns == {
        "id_quote",
        "texto",
        "autor",
        "scheduled_at",
        "status",
        "creado_por",
        "categoria_id",
        "fecha_creacion",
    }
    foreign_tables = {fk["referred_table"] for fk in inspector.get_foreign_keys("frase")}
    assert foreign_tables == {"usuario", "categoria"}


def test_downgrade_removes_schema(tmp_path):
    """Downgrading to base drops every table."""
    url = f"sqlite:///{tmp_path / 'downgraded.db'}"
    config = alembic_config(url)
    command.upgrade(config, "head")
    command.downgrade(config, "base")

    assert set(inspect(create_engine(url)).get_table_names()) <= {"alembic_version"}
