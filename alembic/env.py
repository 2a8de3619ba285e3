from logging.config import fileConfig

from sqlalchemy import engine_from_config
from sqlalchemy import pool

from alembic import context

# Import your models' Base class
from CondoManager.config import DatabaseSettings, load_env
from CondoManager.models import Base

# this is the Alembic Config object, which provides
# access to the values within the .ini file in use.
config = context.config

# Interpret the config file for Python logging.
# This line sets up loggers basically.
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# Set target_metadata to the Base's metadata
target_metadata = Base.metadata


def _get_database_settings() -> DatabaseSettings:
    """Resolve connection settings the same way the application does.

    - Load `.env.development` (or `.env`) for local runs.
    - Fall back to `sqlalchemy.url` in alembic.ini only when the environment
      names no database at all.
    """
    load_env()
    settings = DatabaseSettings.from_env()
    ini_url = context.config.get_main_option("sqlalchemy.url", "")
    if not settings.url and ini_url and not ini_url.strip().endswith("://"):
        settings = settings.model_copy(update={"url": ini_url})
    return settings


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode."""
    url = _get_database_settings().sqlalchemy_url()
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations in 'online' mode."""
    settings = _get_database_settings()
    configuration = config.get_section(config.config_ini_section, {}) or {}
    configuration["sqlalchemy.url"] = settings.sqlalchemy_url()

    connectable = engine_from_config(
        configuration,
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
        connect_args=settings.connect_args(),
    )

    with connectable.connect() as connection:
        context.configure(
            connection=connection, target_metadata=target_metadata
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
