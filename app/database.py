"""
Words API — Connection Provider
=================================

What:  Builds the one connection configuration and the one async connection
       pool for this process, plus the per-request session dependency.
Why:   Centralizes all database connection logic in one place.
How:   `build_connection_config()` picks the production or development shape
       from settings; `create_pool()` turns it into an AsyncEngine. Both run
       exactly once, at import, and the resulting `engine` is never rebuilt.
Who:   Route handlers receive sessions via FastAPI's dependency injection.
When:  Engine is created at module import; sessions are created per-request.

Environment switch:
    production   URL = DATABASE_URL (discrete DB_* fields ignored)
                 TLS on, certificate chain and hostname NOT verified. Managed
                 PostgreSQL hosts commonly present self-signed/intermediate
                 certificates, so the trust check is relaxed on purpose.
    development  URL = postgresql+asyncpg://DB_USER:DB_PASSWORD@DB_HOST:DB_PORT/DB_DATABASE
                 TLS off.

Lazy failure:
    create_async_engine() does not open a connection. Missing settings
    therefore surface as a connection error on the first query, never at
    startup. Malformed settings (a non-numeric DB_PORT, an unparseable
    DATABASE_URL) are held on the ConnectionConfig as `deferred_error` and
    raised by the pool when it first tries to connect. This is a known
    weakness and is kept as-is.

Connection Pooling Strategy:
    pool_size / max_overflow bound the number of physical connections;
    checkouts beyond that queue inside SQLAlchemy's pool.
    pool_pre_ping:     Validates connections before use (catches stale connections)
    pool_recycle=1800: Hosted PostgreSQL drops idle connections; recycle first
"""

import logging
import ssl
from dataclasses import dataclass
from typing import Any, AsyncGenerator, Dict, Optional, Union

from sqlalchemy import event
from sqlalchemy.engine import URL, make_url
from sqlalchemy.exc import ArgumentError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from app.config import DEVELOPMENT, PRODUCTION, Settings, settings

logger = logging.getLogger(__name__)

ASYNC_DRIVER = "postgresql+asyncpg"

# Schemes hosting platforms hand out that need the async driver swapped in
_PLATFORM_SCHEMES = {"postgres", "postgresql"}


@dataclass(frozen=True)
class ConnectionConfig:
    """
    The active database connection configuration.

    Attributes:
        url:             SQLAlchemy URL including the driver
        tls:             False (plain-text) or an SSLContext (encrypted)
        environment:     "production" or "development"
        deferred_error:  Why the settings could not be turned into a URL;
                         raised on first connect instead of at startup
    """

    url: URL
    tls: Union[bool, ssl.SSLContext] = False
    environment: str = DEVELOPMENT
    deferred_error: Optional[str] = None

    @property
    def encrypted(self) -> bool:
        return self.tls is not False

    @property
    def connect_args(self) -> Dict[str, Any]:
        """
        Driver keyword arguments carrying the TLS policy.

        asyncpg takes `ssl=<SSLContext | False>`. Other dialects (SQLite in
        the test-suite) do not understand the keyword, so nothing is passed.
        """
        if self.url.get_backend_name() != "postgresql":
            return {}
        return {"ssl": self.tls}

    def __repr__(self) -> str:
        return (
            f"ConnectionConfig(url={self.url.render_as_string(hide_password=True)!r}, "
            f"encrypted={self.encrypted}, environment={self.environment!r})"
        )


def relaxed_ssl_context() -> ssl.SSLContext:
    """
    TLS context that encrypts but accepts any server certificate.

    Equivalent of `rejectUnauthorized: false`: hostname and chain are not
    checked, so self-signed and intermediate certificates are accepted.
    """
    context = ssl.create_default_context()
    context.check_hostname = False
    context.verify_mode = ssl.CERT_NONE
    return context


def _platform_url(raw_url: Optional[str]) -> URL:
    """
    Parse the platform-supplied URL and point it at the async driver.

    An absent URL yields a bare driver URL; connecting with it fails later.

    Raises:
        ArgumentError: The URL cannot be parsed
    """
    if not raw_url:
        return URL.create(ASYNC_DRIVER)
    url = make_url(raw_url)
    if url.drivername in _PLATFORM_SCHEMES:
        url = url.set(drivername=ASYNC_DRIVER)
    return url


def _discrete_url(config: Settings) -> URL:
    """
    Assemble the development URL from the DB_* fields.

    Raises:
        ValueError: DB_PORT is not a number
    """
    port = config.db_port.strip() if config.db_port else None
    return URL.create(
        ASYNC_DRIVER,
        username=config.db_user,
        password=config.db_password,
        host=config.db_host,
        port=int(port) if port else None,
        database=config.db_database,
    )


def build_connection_config(config: Settings) -> ConnectionConfig:
    """
    Choose the connection configuration from the environment discriminator.

    Production uses only DATABASE_URL with relaxed TLS; everything else
    assembles the URL from the discrete DB_* fields with TLS disabled.
    Never raises: missing values make an incomplete URL, malformed values
    become `deferred_error`.
    """
    if config.is_production:
        environment, tls = PRODUCTION, relaxed_ssl_context()
        build = lambda: _platform_url(config.database_url)  # noqa: E731
    else:
        environment, tls = DEVELOPMENT, False
        build = lambda: _discrete_url(config)  # noqa: E731

    try:
        url = build()
    except (ArgumentError, ValueError) as e:
        return ConnectionConfig(
            url=URL.create(ASYNC_DRIVER),
            tls=tls,
            environment=environment,
            deferred_error=str(e),
        )

    return ConnectionConfig(url=url, tls=tls, environment=environment)


def create_pool(
    config: ConnectionConfig,
    *,
    pool_size: int = 10,
    max_overflow: int = 10,
    echo: bool = False,
) -> AsyncEngine:
    """
    Create the async engine (connection pool) for a configuration.

    No connection is opened here; the first checkout happens on first query.
    A `deferred_error` is raised from that first checkout.
    """
    pool = create_async_engine(
        config.url,
        connect_args=config.connect_args,
        pool_size=pool_size,
        max_overflow=max_overflow,
        pool_pre_ping=True,
        pool_recycle=1800,
        echo=echo,
    )

    if config.deferred_error is not None:
        message = f"Invalid database configuration: {config.deferred_error}"

        @event.listens_for(pool.sync_engine, "do_connect")
        def _refuse_connect(dialect, conn_rec, cargs, cparams):
            raise ArgumentError(message)

    return pool


# ── The process-wide pool ─────────────────────────────────────────────────
# Single initialization point. Nothing reassigns these after import.
connection_config = build_connection_config(settings)

engine = create_pool(
    connection_config,
    pool_size=settings.db_pool_size,
    max_overflow=settings.db_max_overflow,
    # Echo SQL queries in DEBUG mode for development visibility
    echo=settings.log_level == "DEBUG",
)

# expire_on_commit=False: attributes stay readable after commit
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models."""
    pass


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the factory
        2. Yields it to the route handler (the handler performs queries)
        3. On error: rolls back the transaction
        4. Always: closes the session (returns connection to pool)

    No commit happens here. Code after `yield` runs once the response has
    been sent, so a commit there could fail after the client was told the
    write succeeded. Services commit their own writes before returning.

    Example usage in a route:
        @router.get("/words")
        async def list_words(db: AsyncSession = Depends(get_db_session)):
            ...
    """
    async with async_session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise  # Re-raise so the global error handler can respond appropriately
        finally:
            await session.close()


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def create_schema(target: Optional[AsyncEngine] = None) -> None:
    """
    Create the `words` table if it does not exist yet.

    Not called at startup: touching the database there would turn the lazy
    configuration failure into an eager one. Run `python -m app.init_db`.
    """
    # Register models on Base.metadata
    from app.models import word  # noqa: F401

    target = target or engine
    async with target.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Schema ready on %s", target.url.render_as_string(hide_password=True))


async def dispose_engine() -> None:
    """
    What:  Gracefully closes all connections in the pool.
    When:  Called during application shutdown (lifespan handler).
    """
    await engine.dispose()
