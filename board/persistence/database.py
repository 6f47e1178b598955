"""Database connection and session management.

Every pooled connection carries an ``application_name`` and, unless disabled,
a server-side ``statement_timeout``.
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from board.config import DatabaseSettings, Settings

APPLICATION_NAME = "board-api"


def connect_args(database: DatabaseSettings) -> dict:
    """asyncpg connection arguments derived from settings.

    Args:
        database: Database settings

    Returns:
        Keyword arguments passed through to ``asyncpg.connect``
    """
    server_settings = {"application_name": APPLICATION_NAME}
    if database.statement_timeout_ms:
        server_settings["statement_timeout"] = str(database.statement_timeout_ms)
    return {"server_settings": server_settings}


def create_engine(settings: Settings) -> AsyncEngine:
    """Create async database engine.

    Args:
        settings: Application settings with database URL

    Returns:
        Configured async engine
    """
    return create_async_engine(
        settings.database_url,
        echo=settings.debug,  # Log SQL queries in debug mode
        pool_pre_ping=True,
        pool_size=settings.database.pool_size,
        max_overflow=settings.database.max_overflow,
        connect_args=connect_args(settings.database),
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create async session factory.

    Vote lookups for a listing page share one short-lived session from this
    same factory, next to the request's own session.
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )
