"""
Shared test fixtures for the search engine test suite.

Provides: in-memory async SQLite sessions, repositories, a wired SearchService,
and an HTTP client with the database dependency overridden.
"""

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from database.session import Base
from infrastructure.document_processors import ParagraphSectionSplitter
from infrastructure.embedding_services import HashingVectorizer
from infrastructure.key_locks import KeyedLock
from infrastructure.repositories import SQLDocumentRepository, SQLSectionRepository
from services.search_service import SearchService


@pytest_asyncio.fixture
async def session_factory():
    """Session factory bound to a fresh in-memory database per test."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def vectorizer() -> HashingVectorizer:
    return HashingVectorizer(100)


@pytest.fixture
def locks() -> KeyedLock:
    return KeyedLock()


@pytest.fixture
def document_repo(db_session) -> SQLDocumentRepository:
    return SQLDocumentRepository(db_session)


@pytest.fixture
def section_repo(db_session) -> SQLSectionRepository:
    return SQLSectionRepository(db_session)


@pytest.fixture
def make_service(vectorizer, document_repo, section_repo, locks):
    """Build a SearchService over the test database, optionally in append mode."""
    def _make(replace_existing: bool = True) -> SearchService:
        return SearchService(
            vectorizer=vectorizer,
            splitter=ParagraphSectionSplitter(),
            document_repo=document_repo,
            section_repo=section_repo,
            locks=locks,
            replace_existing=replace_existing,
        )
    return _make


@pytest.fixture
def search_service(make_service) -> SearchService:
    return make_service()


@pytest_asyncio.fixture
async def api_client(session_factory):
    """httpx client against the app with get_db bound to the test database."""
    import httpx
    from database.session import get_db
    from main import app

    async def _override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = _override_get_db
    app.state.index_locks = KeyedLock()

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
