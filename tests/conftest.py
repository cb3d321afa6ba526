import os
from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.engine.base import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.orm.session import Session
from sqlalchemy.pool import StaticPool

os.environ.update({"JWT_SECRET_KEY": "testsecretkey", "PHOTOLINE_LOG_LEVEL": "DEBUG"})


@pytest.fixture(scope="function")
def engine() -> Generator[Engine]:
    """In-memory SQLite database with the full schema, fresh for every test."""
    from photoline.db import Base
    from photoline.models import Album, Asset, Exif, Partner, SharedLink, Stack, User  # noqa: F401

    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)

    @event.listens_for(engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(engine)
    yield engine
    # The in-memory database goes away with its only connection
    engine.dispose()


@pytest.fixture(scope="function")
def db_session(engine: Engine) -> Generator[Session]:
    session_factory = sessionmaker(bind=engine)
    session = session_factory()

    yield session

    session.close()


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None]:
    from photoline.config import get_ml_settings

    get_ml_settings.cache_clear()
    yield
    get_ml_settings.cache_clear()


@pytest.fixture(scope="function")
def client(db_session: Session) -> Generator[TestClient]:
    """API client whose requests all run on the test's session."""
    from photoline.db import get_db
    from photoline.main import app

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
