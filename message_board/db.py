import argparse
import asyncio

from sqlalchemy import event, inspect, text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from message_board import models  # noqa: F401
from message_board.config import settings
from message_board.models.base import Base
from message_board.utils.logger import setup_logger

logger = setup_logger("db")

# --- Application DB ---
if not settings.app_database_url:
    raise ValueError(
        "MESSAGE_BOARD_DATABASE_URL environment variable not set for Application DB"
    )

IS_SQLITE = settings.app_database_url.startswith("sqlite")

logger.debug(f"Application DB URL: {settings.app_database_url}")
if IS_SQLITE:
    # A file database needs no pool; each unit of work opens its own connection.
    app_engine = create_async_engine(
        settings.app_database_url,
        poolclass=NullPool,
        echo=False,
        connect_args={"timeout": 30},
    )

    @event.listens_for(app_engine.sync_engine, "connect")
    def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

else:
    app_engine = create_async_engine(
        settings.app_database_url,
        pool_pre_ping=True,
        pool_size=20,
        max_overflow=30,
        pool_timeout=60,
        pool_recycle=300,
        echo=False,
    )

AppAsyncSessionLocal = async_sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=app_engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


def _add_missing_columns(sync_conn) -> list[str]:
    """
    Additive migration for databases created before messages had owners.

    Pre-existing rows get ``user_id = NULL`` and therefore stay immutable.
    """
    added = []
    inspector = inspect(sync_conn)
    message_columns = {col["name"] for col in inspector.get_columns("messages")}
    if "user_id" not in message_columns:
        sync_conn.execute(text("ALTER TABLE messages ADD COLUMN user_id INTEGER"))
        added.append("messages.user_id")
    return added


# --- Function to create tables (for Application DB) ---
async def init_db():
    logger.debug(
        f"Tables registered in Base.metadata: {list(Base.metadata.tables.keys())}"
    )

    async with app_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
        added = await conn.run_sync(_add_missing_columns)

    for column in added:
        logger.warning(f"Migrated existing table: added column {column}")

    logger.info("Database schema initialized.")


async def close_db():
    """Closes database connections."""
    logger.info("Closing database connections.")
    await app_engine.dispose()
    logger.info("Database connections closed.")


async def list_tables() -> list[str]:
    """Lists all tables in the application database."""
    async with app_engine.connect() as conn:
        table_names = await conn.run_sync(
            lambda sync_conn: inspect(sync_conn).get_table_names()
        )
    logger.info(f"Tables in application database: {table_names}")
    return table_names


# --- Function to reset database (for Application DB) ---
async def reset_db():
    logger.warning(
        "Attempting to reset the Application database. THIS IS A DESTRUCTIVE OPERATION."
    )
    async with app_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    logger.info("All application tables dropped.")

    await init_db()
    logger.info("Application database has been reset and re-initialized.")


async def check_db_connection() -> bool:
    """Performs a simple query to check actual DB connectivity."""
    async with AppAsyncSessionLocal() as session:
        try:
            result = await session.execute(text("SELECT 1"))
            if result.scalar_one() == 1:
                logger.info("Successfully connected to the database.")
                return True
            raise RuntimeError("Test query returned an unexpected result.")
        except Exception as e:
            logger.error(f"Failed to execute test query: {e}", exc_info=True)
            raise RuntimeError("Database connectivity check failed.") from e


if __name__ == "__main__":
    parser = argparse.ArgumentParser(
        description="Message board database initialization utility"
    )
    parser.add_argument(
        "action",
        choices=["init", "reset", "list-tables"],
        help="'init' to create tables and apply additive migrations, "
        "'reset' to drop and recreate all tables, "
        "'list-tables' to show the tables in the database.",
    )
    args = parser.parse_args()

    if args.action == "init":
        asyncio.run(init_db())
    elif args.action == "reset":
        confirm = input(
            "WARNING: This will delete all users, messages and sessions. Are you sure? (yes/no): "
        )
        if confirm.lower() == "yes":
            asyncio.run(reset_db())
        else:
            logger.info("Database reset cancelled by user.")
    elif args.action == "list-tables":
        asyncio.run(list_tables())
    logger.info("Database utility script finished.")
