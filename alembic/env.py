"""
Alembic environment for the Bookstore API.

The database URL is resolved in this order:
1. ``alembic -x db_url=<url> ...`` on the command line
2. Application settings (configs/app.yaml or BOOKSTORE_CONFIG, .env, DB__*)

Usage:
    alembic upgrade head
    alembic -x db_url=sqlite:///./bookstore.db upgrade head
    alembic revision --autogenerate -m "add column"
"""

from logging.config import fileConfig

from sqlalchemy import engine_from_config, pool
from sqlalchemy.engine import make_url

from alembic import context

from bookstore import models  # noqa: F401 - registers users and books on Base.metadata
from bookstore.database import Base

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def resolve_database_url() -> str:
    """URL from ``-x db_url=...``, falling back to the application settings."""
    override = context.get_x_argument(as_dictionary=True).get("db_url")
    if override:
        url = make_url(override)
    else:
        # Settings require a signing secret; only load them when needed
        from bookstore.config import get_settings

        url = get_settings().db.sqlalchemy_url
    return url.render_as_string(hide_password=False)


def migration_options(url: str) -> dict:
    """SQLite cannot ALTER most columns in place; batch mode recreates the table."""
    return {
        "target_metadata": target_metadata,
        "compare_type": True,
        "render_as_batch": make_url(url).get_backend_name() == "sqlite",
    }


def run_migrations_offline(url: str) -> None:
    """Emit SQL to stdout instead of executing it (``alembic upgrade head --sql``)."""
    context.configure(
        url=url,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **migration_options(url),
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online(url: str) -> None:
    # "%" must be escaped for configparser interpolation
    config.set_main_option("sqlalchemy.url", url.replace("%", "%%"))
    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(connection=connection, **migration_options(url))

        with context.begin_transaction():
            context.run_migrations()


database_url = resolve_database_url()

if context.is_offline_mode():
    run_migrations_offline(database_url)
else:
    run_migrations_online(database_url)
