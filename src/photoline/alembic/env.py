from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool

import photoline.models  # noqa: F401  # populates Base.metadata for autogenerate
from photoline.db import Base, get_database_url

# this is the Alembic Config object, which provides
# access to the values within the .ini file in use.
config = context.config

# Interpret the config file for Python logging.
if config.config_file_name is not None and config.attributes.get("configure_logger", True):
    fileConfig(config.config_file_name, disable_existing_loggers=False)

target_metadata = Base.metadata


def _database_url() -> str:
    # An explicit sqlalchemy.url (tests, CLI -x overrides) wins over POSTGRES_* settings
    return config.get_main_option("sqlalchemy.url") or get_database_url()


def include_object(object, name, type_, reflected, compare_to):
    """Never auto-drop tables that exist in the database but not in the models."""
    if type_ == "table" and compare_to is None and reflected:
        return False
    return True


def run_migrations_offline() -> None:
    """Emit SQL to the script output instead of running it against a database."""
    context.configure(
        url=_database_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        render_as_batch=True,
    )

    with context.begin_transaction():
        context.run_migrations()


def _run_with_connection(connection) -> None:
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        include_object=include_object,
        compare_type=True,
        render_as_batch=connection.dialect.name == "sqlite",
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations against a live connection.

    A connection handed over in ``config.attributes["connection"]`` is reused,
    otherwise an engine is created from the configured URL.
    """
    connection = config.attributes.get("connection")
    if connection is not None:
        _run_with_connection(connection)
        return

    section = config.get_section(config.config_ini_section, {})
    section["sqlalchemy.url"] = _database_url()
    connectable = engine_from_config(section, prefix="sqlalchemy.", poolclass=pool.NullPool)

    with connectable.connect() as connection:
        _run_with_connection(connection)


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
