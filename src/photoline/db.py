import logging
import time
from collections.abc import Generator
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

logger = logging.getLogger(__name__)

# Sessions open longer than this are reported
SLOW_SESSION_SECONDS = 1.0


class Base(DeclarativeBase):
    __abstract__ = True


class DatabaseSettings(BaseSettings):
    """PostgreSQL connection and pool settings (``POSTGRES_*``)."""

    db: str
    user: str
    password: str
    host: str
    port: int = 5432

    # A timeline request makes several short reads (partners, grants, buckets)
    # from FastAPI's worker threads, each on its own session
    pool_size: int = 20
    max_overflow: int = 20
    pool_timeout: int = 20
    pool_recycle: int = 1800

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", env_prefix="POSTGRES_", extra="ignore")

    @property
    def database_url(self) -> str:
        return f"postgresql+psycopg://{self.user}:{self.password}@{self.host}:{self.port}/{self.db}"

    def engine_options(self) -> dict:
        return {
            "pool_size": self.pool_size,
            "max_overflow": self.max_overflow,
            "pool_timeout": self.pool_timeout,
            "pool_recycle": self.pool_recycle,
            "pool_pre_ping": True,
        }


@lru_cache(maxsize=1)
def get_database_settings() -> DatabaseSettings:  # pragma: no cover
    return DatabaseSettings()


def get_database_url() -> str:  # pragma: no cover
    return get_database_settings().database_url


@lru_cache(maxsize=1)
def get_session_maker() -> sessionmaker[Session]:  # pragma: no cover
    settings = get_database_settings()
    engine = create_engine(settings.database_url, **settings.engine_options())
    logger.info("Database engine created for %s:%s/%s", settings.host, settings.port, settings.db)
    return sessionmaker(bind=engine)


def get_db() -> Generator[Session]:  # pragma: no cover
    """Request-scoped session. Nothing read through it outlives the request."""
    session = get_session_maker()()
    opened_at = time.monotonic()

    try:
        yield session
    except Exception as e:
        logger.warning("Rolling back session after %.3fs: %s", time.monotonic() - opened_at, e)
        session.rollback()
        raise
    finally:
        held = time.monotonic() - opened_at
        if held > SLOW_SESSION_SECONDS:
            logger.warning("Session held for %.3fs", held)
        session.close()
