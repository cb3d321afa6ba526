from pathlib import Path

from alembic import command
from alembic.config import Config
from alembic.script import ScriptDirectory
from sqlalchemy import create_engine, inspect, text

import photoline.models  # noqa: F401
from photoline.db import Base


def _make_alembic_config(db_url: str) -> Config:
    repo_root = Path(__file__).resolve().parents[1]
    config = Config(str(repo_root / "alembic.ini"))
    config.set_main_option("sqlalchemy.url", db_url)
    config.attributes["configure_logger"] = False
    return config


def test_alembic_upgrade_and_downgrade(tmp_path) -> None:
    """Test migrations upgrade to head and downgrade back to base."""
    db_url = f"sqlite:///{tmp_path / 'migrations.db'}"
    config = _make_alembic_config(db_url)
    script = ScriptDirectory.from_config(config)
    head_revision = script.get_current_head()
    assert head_revision is not None

    engine = create_engine(db_url)
    try:
        with engine.begin() as connection:
            config.attributes["connection"] = connection
            command.upgrade(config, "head")

            inspector = inspect(connection)
            assert inspector.has_table("alembic_version")
            version = connection.execute(text("SELECT version_num FROM alembic_version")).scalar_one()
            assert version == head_revision
            # Every mapped table exists after the upgrade
            assert set(Base.metadata.tables) <= set(inspector.get_table_names())
            stack_fks = {fk["referred_table"] for fk in inspector.get_foreign_keys("asset_stacks")}
            assert stack_fks == {"users", "assets"}

            command.downgrade(config, "base")

            inspector = inspect(connection)
            assert not inspector.has_table("assets")
            if inspector.has_table("alembic_version"):
                remaining = connection.execute(text("SELECT COUNT(*) FROM alembic_version")).scalar_one()
                assert remaining == 0
    finally:
        engine.dispose()
