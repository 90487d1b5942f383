"""Alembic environment configuration.

Reads the database URL from rsvp_planner.config and registers all models
so autogenerate can detect schema changes.
"""
from logging.config import fileConfig
from sqlalchemy import engine_from_config, pool
from alembic import context

from rsvp_planner.config import settings
from rsvp_planner.database import Base

# Import all models so they register with Base.metadata
from rsvp_planner.models.venue import Venue                                  # noqa: F401
from rsvp_planner.models.event import Event                                  # noqa: F401
from rsvp_planner.models.guest import Guest, EventGuest                      # noqa: F401
from rsvp_planner.models.guest_group import GuestGroup, GuestGroupMember        # noqa: F401
from rsvp_planner.models.rsvp import RSVP                                    # noqa: F401
from rsvp_planner.models.logistics import LogisticsItem, LogisticsAssignment  # noqa: F401

config = context.config
config.set_main_option("sqlalchemy.url", settings.DATABASE_URL)

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode."""
    url = config.get_main_option("sqlalchemy.url")
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
    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
