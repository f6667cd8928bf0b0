"""Database engine and session management."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from logging import getLogger

from sqlalchemy import event
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession as SQLModelAsyncSession

from blogapi.configs import file_logger, settings
from blogapi.errors import BaseAppError, TransactionError

logger = file_logger(getLogger(__name__))

# Database work must finish inside the request budget
STATEMENT_TIMEOUT_MS = int(settings.REQUEST_TIMEOUT_SECONDS * 1000)


def _configure_engine_events(engine: AsyncEngine) -> None:
    """Log connection pool activity."""

    @event.listens_for(engine.sync_engine, "connect")
    def on_connect(dbapi_connection: object, connection_record: object) -> None:
        logger.debug("New database connection established")

    @event.listens_for(engine.sync_engine, "checkout")
    def on_checkout(
        dbapi_connection: object,
        connection_record: object,
        connection_proxy: object,
    ) -> None:
        logger.debug("Connection checked out from pool")


engine: AsyncEngine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DATABASE_ECHO,
    pool_size=settings.POOL_SIZE,
    max_overflow=settings.MAX_OVERFLOW,
    pool_timeout=settings.POOL_TIMEOUT,
    pool_recycle=settings.POOL_RECYCLE,
    pool_pre_ping=True,
    connect_args={
        "command_timeout": STATEMENT_TIMEOUT_MS / 1000,
        "server_settings": {
            "statement_timeout": str(STATEMENT_TIMEOUT_MS),
            "lock_timeout": str(STATEMENT_TIMEOUT_MS),
        },
    },
)

if settings.DEBUG:
    _configure_engine_events(engine)

async_session_maker: async_sessionmaker[SQLModelAsyncSession] = async_sessionmaker(
    engine,
    class_=SQLModelAsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


async def get_session() -> AsyncGenerator[AsyncSession]:
    """
    FastAPI dependency yielding one transactional session per request.

    Everything a handler does through the yielded session (counter updates,
    interaction rows, token rotation) commits together or not at all.

    Yields:
        AsyncSession: Database session
    """
    async with transaction() as session:
        yield session


@asynccontextmanager
async def transaction() -> AsyncGenerator[AsyncSession]:
    """
    Open a session, commit on clean exit and roll back on any exception.

    Yields:
        AsyncSession: Database session within a transaction

    Raises:
        TransactionError: If the commit itself fails
    """
    async with async_session_maker() as session:
        try:
            yield session
        except BaseAppError:
            await session.rollback()
            raise
        except Exception:
            await session.rollback()
            logger.exception("Transaction error")
            raise
        try:
            await session.commit()
        except SQLAlchemyError as e:
            await session.rollback()
            logger.exception("Commit failed")
            raise TransactionError from e


async def init_db() -> None:
    """
    Create all tables defined by the SQLModel models.

    Note:
        Development convenience only; production schemas are managed
        with migrations.
    """
    async with engine.begin() as conn:
        # Import all models to ensure they are registered
        from blogapi.models import (  # noqa: F401, PLC0415
            BlogDB,
            BlogInteractionDB,
            CommentDB,
            PasswordResetTokenDB,
            RefreshTokenDB,
            UserDB,
        )

        await conn.run_sync(SQLModel.metadata.create_all)
        logger.info("Database initialized successfully!")


async def close_db() -> None:
    """Dispose of the engine and all pooled connections."""
    await engine.dispose()
    logger.info("Database connections closed")
