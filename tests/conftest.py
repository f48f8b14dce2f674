"""Pytest configuration and fixtures."""

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

import vocabnote.models  # noqa: F401
import vocabnote.services.dictionary.cache  # noqa: F401
from vocabnote.config import Settings
from vocabnote.database import Base, get_session
from vocabnote.main import app
from vocabnote.services.dictionary.base import DictProvider, WordDefine, WordItem
from vocabnote.services.notebook import FileNotebook


class FakeClock:
    """Settable time source returning epoch seconds."""

    def __init__(self, now: int = 1000) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now


class FakeProvider(DictProvider):
    """Provider answering from a fixed table and counting searches."""

    def __init__(self, entries: dict[str, WordItem] | None = None) -> None:
        self.entries = entries or {}
        self.calls: list[str] = []

    @property
    def name(self) -> str:
        return "fake"

    async def search(self, word: str) -> WordItem:
        self.calls.append(word)
        return self.entries.get(word, WordItem.not_found(word))


@pytest.fixture
async def async_engine():
    """Create a test database engine."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def async_session(async_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async_session_maker = async_sessionmaker(
        async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    async with async_session_maker() as session:
        yield session


@pytest.fixture
def test_app(async_session: AsyncSession) -> FastAPI:
    """Create a test FastAPI application."""

    async def override_get_session() -> AsyncGenerator[AsyncSession, None]:
        yield async_session

    app.dependency_overrides[get_session] = override_get_session
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(test_app: FastAPI) -> TestClient:
    """Create a synchronous test client."""
    return TestClient(test_app)


@pytest.fixture
def clock() -> FakeClock:
    """Clock starting at t=1000."""
    return FakeClock()


@pytest.fixture
def notebook_dir(tmp_path: Path) -> Path:
    """Directory for file-backed chapters."""
    return tmp_path / "notebook"


@pytest.fixture
def file_notebook(notebook_dir: Path, clock: FakeClock) -> FileNotebook:
    """File notebook on the default chapter."""
    return FileNotebook(notebook_dir, clock=clock)


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """Settings rooted in a temporary directory, ignoring any .env file."""
    return Settings(_env_file=None, data_dir=tmp_path / "data", cache_enabled=False)


@pytest.fixture
def sample_item() -> WordItem:
    """A found word with a highlighted heading and a quoted example."""
    return WordItem(
        word="bing",
        defines=(
            WordDefine(
                phonetics=("/bɪŋ/",),
                definition="++++Bing (n.)\n----heap or pile\nplain line",
            ),
        ),
    )


@pytest.fixture
def fake_provider(sample_item: WordItem) -> FakeProvider:
    """Provider that knows only "bing"."""
    return FakeProvider({"bing": sample_item})
