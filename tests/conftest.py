import io
import os
from contextlib import contextmanager

os.environ.setdefault("DD_TRACE_ENABLED", "false")

import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from fakes import InMemoryStorage

from dream_analyzer.exceptions import UpstreamServiceError
from dream_analyzer.repositories import DreamRepository


@pytest.fixture
def storage():
    return InMemoryStorage()


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def repository(engine):
    @contextmanager
    def session_factory():
        with Session(engine, expire_on_commit=False) as session:
            yield session

    return DreamRepository(session_factory)


@pytest.fixture
def audio_bytes():
    return io.BytesIO(b"\x1a\x45\xdf\xa3" + b"\x00" * 2048)


@pytest.fixture
def upstream_error():
    return UpstreamServiceError("assemblyai", "service unavailable")
