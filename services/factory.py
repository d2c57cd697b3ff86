# services/factory.py
from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from config import settings
from core.interfaces import (
    ISearchService, IVectorizer, ISectionSplitter, IDocumentRepository, ISectionRepository
)
from database.session import get_db
from infrastructure.document_processors import ParagraphSectionSplitter
from infrastructure.embedding_services import HashingVectorizer
from infrastructure.key_locks import KeyedLock
from infrastructure.repositories import SQLDocumentRepository, SQLSectionRepository
from services.search_service import SearchService

# Provider functions for each component
def get_vectorizer() -> IVectorizer:
    """Create vectorizer based on configuration."""
    return HashingVectorizer(settings.EMBEDDING_DIMENSIONS)
    # Future: if settings.EMBEDDING_PROVIDER == "sentence-transformers":
    #     return SentenceTransformerVectorizer(...)

def get_section_splitter() -> ISectionSplitter:
    return ParagraphSectionSplitter()

def get_index_locks(request: Request) -> KeyedLock:
    """Process-wide lock arena created in the application lifespan."""
    return request.app.state.index_locks

def get_document_repository(session: AsyncSession = Depends(get_db)) -> IDocumentRepository:
    """Create document repository with injected session."""
    return SQLDocumentRepository(session)

def get_section_repository(session: AsyncSession = Depends(get_db)) -> ISectionRepository:
    """Create section repository with injected session."""
    return SQLSectionRepository(session)

def build_search_service(session: AsyncSession, locks: KeyedLock) -> SearchService:
    """Wire a service outside of FastAPI (batch jobs, scripts)."""
    return SearchService(
        vectorizer=get_vectorizer(),
        splitter=get_section_splitter(),
        document_repo=SQLDocumentRepository(session),
        section_repo=SQLSectionRepository(session),
        locks=locks,
    )

# Main service provider using FastAPI DI
def get_search_service(
    vectorizer: IVectorizer = Depends(get_vectorizer),
    splitter: ISectionSplitter = Depends(get_section_splitter),
    document_repo: IDocumentRepository = Depends(get_document_repository),
    section_repo: ISectionRepository = Depends(get_section_repository),
    locks: KeyedLock = Depends(get_index_locks),
) -> ISearchService:
    """
    Create search service with full dependency injection.

    FastAPI caches get_db per request, so both repositories share one session.
    Easy to override individual components for testing.
    """
    return SearchService(
        vectorizer=vectorizer,
        splitter=splitter,
        document_repo=document_repo,
        section_repo=section_repo,
        locks=locks,
    )
