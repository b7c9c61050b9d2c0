from logging.config import fileConfig
from sqlalchemy import create_engine, pool
from alembic import context

from cardledger.db.base import Base
from cardledger.db.models.user_model import User  # noqa: F401
from cardledger.db.models.account_model import Account  # noqa: F401
from cardledger.db.models.card_model import Card  # noqa: F401
from cardledger.db.models.transaction_model import Transaction  # noqa: F401
from cardledger.core.config import settings

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata

# migrations use psycopg2
DATABASE_URL = settings.database_url.replace("+asyncpg", "")


def run_migrations_offline():
    context.configure(
        url=DATABASE_URL,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online():
    connectable = create_engine(
        DATABASE_URL,
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
